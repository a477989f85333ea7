"""
Lambda entry point for quota limit refresh.

Serves two triggers with the same payload shape:

- CloudFormation custom resource (via the provider framework): Create and
  Update run a refresh, Delete does nothing. Models are read from
  ResourceProperties.models.
- EventBridge schedule: models are read from the event's top-level
  "models" list.
"""

import os
from typing import Any, Dict, List

from bedrock_quota_dashboards.constants import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_WORKERS,
)
from bedrock_quota_dashboards.core.fetcher import (
    FetchTarget,
    QuotaLimitFetcher,
    ServiceQuotasLimits,
)
from bedrock_quota_dashboards.log import get_logger
from bedrock_quota_dashboards.storage.cloudwatch import CloudWatchMetricsStore

logger = get_logger(__name__)

PHYSICAL_RESOURCE_ID = "BedrockQuotaFetch"


def build_fetcher() -> QuotaLimitFetcher:
    """Create a fetcher from the Lambda environment."""
    return QuotaLimitFetcher(
        limits=ServiceQuotasLimits(),
        store=CloudWatchMetricsStore(),
        timeout_seconds=float(os.environ.get("FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS)),
        max_workers=int(os.environ.get("MAX_WORKERS", DEFAULT_MAX_WORKERS)),
    )


def parse_targets(models: Any) -> List[FetchTarget]:
    """Parse the models list of an event.

    Raises:
        ValueError: If models is not a list of objects with a modelId
    """
    if not isinstance(models, list):
        raise ValueError("'models' must be a list")
    targets = []
    for payload in models:
        if not isinstance(payload, dict):
            raise ValueError(f"Model entry must be an object: {payload!r}")
        targets.append(FetchTarget.from_event(payload))
    return targets


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Refresh quota limits for the models in the event."""
    request_type = event.get("RequestType")

    if request_type == "Delete":
        logger.info("Custom resource delete, nothing to clean up")
        return {"PhysicalResourceId": event.get("PhysicalResourceId", PHYSICAL_RESOURCE_ID)}

    if request_type is not None:
        models = event.get("ResourceProperties", {}).get("models", [])
    else:
        models = event.get("models", [])

    targets = parse_targets(models)
    report = build_fetcher().refresh(targets)

    summary = {
        "published": len(report.published),
        "failed": len(report.failures),
    }
    if request_type is not None:
        return {
            "PhysicalResourceId": event.get("PhysicalResourceId", PHYSICAL_RESOURCE_ID),
            "Data": summary,
        }
    return {"statusCode": 200, **summary}
