"""
Quota limit fetcher.

Reads current Bedrock quota values from AWS Service Quotas and publishes
them as TokenQuota / RequestQuota data points keyed by model identity.

Each quota code is queried independently: a failure or timeout for one
code is logged and reported but never stops the others. There is no retry
within a refresh; the next scheduled refresh is the retry.
"""

import queue
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

import boto3
from botocore.exceptions import ClientError

from bedrock_quota_dashboards.constants import (
    BEDROCK_SERVICE_CODE,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_WORKERS,
    MODEL_ID_DIMENSION,
    QUOTA_NAMESPACE,
    REQUEST_QUOTA_METRIC,
    TOKEN_QUOTA_METRIC,
)
from bedrock_quota_dashboards.log import get_logger
from bedrock_quota_dashboards.storage.models import MetricsStore

from .dashboard import PlannedEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuotaLimit:
    """Current value of a Service Quotas quota."""
    quota_code: str
    quota_name: str
    value: Optional[float]


@dataclass(frozen=True)
class FetchTarget:
    """A model identity and the quota codes to refresh for it."""
    model_id: str
    token_quota_code: Optional[str] = None
    request_quota_code: Optional[str] = None
    endpoint: Optional[str] = None

    def to_event(self) -> Dict[str, str]:
        """Serialize to the event payload shape used by the Lambda handler."""
        payload = {"modelId": self.model_id}
        if self.token_quota_code:
            payload["tokenQuotaCode"] = self.token_quota_code
        if self.request_quota_code:
            payload["requestQuotaCode"] = self.request_quota_code
        if self.endpoint:
            payload["endpointType"] = self.endpoint
        return payload

    @classmethod
    def from_event(cls, payload: Dict[str, Any]) -> "FetchTarget":
        """Parse one model from a Lambda event payload.

        Raises:
            ValueError: If modelId is missing
        """
        model_id = payload.get("modelId")
        if not model_id:
            raise ValueError(f"Event model entry missing modelId: {payload}")
        return cls(
            model_id=model_id,
            token_quota_code=payload.get("tokenQuotaCode") or None,
            request_quota_code=payload.get("requestQuotaCode") or None,
            endpoint=payload.get("endpointType") or None,
        )


@dataclass
class FetchFailure:
    """A quota code that could not be refreshed."""
    model_id: str
    quota_code: Optional[str]
    endpoint: Optional[str]
    error: str


@dataclass
class RefreshReport:
    """Outcome of one refresh run."""
    published: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[FetchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def build_fetch_targets(plan: Sequence[PlannedEntry]) -> List[FetchTarget]:
    """Build fetch targets from a validated dashboard plan.

    Entries with no quota codes at all are skipped with a warning.
    """
    targets = []
    for planned in plan:
        codes = planned.quota_codes
        if codes is None or codes.is_empty:
            logger.warning(
                "Excluding model '%s' (%s) from quota refresh - missing quota codes",
                planned.descriptor.model_id,
                planned.endpoint.value,
            )
            continue
        targets.append(FetchTarget(
            model_id=planned.model_identity,
            token_quota_code=codes.token_quota_code,
            request_quota_code=codes.request_quota_code,
            endpoint=planned.endpoint.value,
        ))
    if not targets:
        logger.error("No models available for quota refresh due to missing quota codes")
    return targets


class ServiceQuotasLimits:
    """Limits service backed by AWS Service Quotas."""

    def __init__(
        self,
        client: Any = None,
        region_name: Optional[str] = None,
        service_code: str = BEDROCK_SERVICE_CODE,
    ):
        self.client = client or boto3.client("service-quotas", region_name=region_name)
        self.service_code = service_code

    @property
    def region(self) -> Optional[str]:
        return self.client.meta.region_name

    def get_limit(self, quota_code: str) -> QuotaLimit:
        """Get the applied value of a quota.

        Falls back to the AWS default value when no applied value exists.

        Raises:
            LookupError: If the code is unknown to Service Quotas
            botocore.exceptions.ClientError: For other service errors
        """
        try:
            response = self.client.get_service_quota(
                ServiceCode=self.service_code,
                QuotaCode=quota_code,
            )
            quota = response["Quota"]
            return QuotaLimit(quota["QuotaCode"], quota.get("QuotaName", ""), quota["Value"])
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "NoSuchResourceException":
                raise

        for quota in self._paginate("list_aws_default_service_quotas"):
            if quota.get("QuotaCode") == quota_code:
                return QuotaLimit(quota_code, quota.get("QuotaName", ""), quota["Value"])
        raise LookupError(f"Quota code {quota_code} not found for service {self.service_code}")

    def list_limits(self) -> List[QuotaLimit]:
        """List every applied quota of the service across all pages."""
        return [
            QuotaLimit(
                quota_code=quota.get("QuotaCode", ""),
                quota_name=quota.get("QuotaName", ""),
                value=quota.get("Value"),
            )
            for quota in self._paginate("list_service_quotas")
        ]

    def _paginate(self, operation: str) -> Iterator[Dict[str, Any]]:
        paginator = self.client.get_paginator(operation)
        for page in paginator.paginate(
            ServiceCode=self.service_code,
            PaginationConfig={"PageSize": 100},
        ):
            yield from page.get("Quotas", [])


class _CodeQuery:
    """One quota code refresh running on its own worker thread.

    A query either commits (its reading is about to be published) or is
    abandoned after its deadline, never both.
    """

    def __init__(self, target: FetchTarget, quota_code: str, metric: str):
        self.target = target
        self.quota_code = quota_code
        self.metric = metric
        self._lock = threading.Lock()
        self._abandoned = False
        self._committed = False

    def commit(self) -> bool:
        with self._lock:
            if not self._abandoned:
                self._committed = True
            return self._committed

    def abandon(self) -> bool:
        with self._lock:
            if not self._committed:
                self._abandoned = True
            return self._abandoned


class QuotaLimitFetcher:
    """Publishes current quota limits for a list of targets."""

    def __init__(
        self,
        limits: ServiceQuotasLimits,
        store: MetricsStore,
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """Initialize the fetcher.

        Args:
            limits: Limits service used to read quota values
            store: Metrics store the readings are published to
            timeout_seconds: Timeout of each quota code query, counted from
                the moment the query starts
            max_workers: Number of queries running concurrently
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self.limits = limits
        self.store = store
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers

    def refresh(self, targets: Sequence[FetchTarget]) -> RefreshReport:
        """Fetch and publish limits for every target.

        Each quota code is queried on its own daemon thread, at most
        max_workers at a time. A query that runs past its deadline is
        abandoned and its slot goes to the next queued query, so hung
        calls never starve healthy ones. The refresh finishes once every
        query has completed, failed or timed out.
        """
        report = RefreshReport()
        if not targets:
            logger.warning("No quota targets to refresh, skipping")
            return report

        logger.info("Quota refresh started for %d models", len(targets))
        queued = deque(
            _CodeQuery(target, code, metric)
            for target in targets
            for code, metric in (
                (target.token_quota_code, TOKEN_QUOTA_METRIC),
                (target.request_quota_code, REQUEST_QUOTA_METRIC),
            )
            if code
        )
        results: "queue.Queue" = queue.Queue()
        deadlines: Dict[_CodeQuery, float] = {}

        while queued or deadlines:
            while queued and len(deadlines) < self.max_workers:
                query = queued.popleft()
                deadlines[query] = time.monotonic() + self.timeout_seconds
                threading.Thread(
                    target=self._run_query,
                    args=(query, results),
                    name=f"quota-fetch-{query.quota_code}",
                    daemon=True,
                ).start()

            wait = max(0.0, min(deadlines.values()) - time.monotonic())
            try:
                query, published, error = results.get(timeout=wait)
            except queue.Empty:
                self._expire(deadlines, report)
                continue
            if query not in deadlines:
                # late answer from an abandoned query
                continue
            del deadlines[query]
            if error is not None:
                self._record_failure(report, query, str(error))
            else:
                report.published.append(published)

        logger.info(
            "Quota refresh finished: %d published, %d failed",
            len(report.published), len(report.failures),
        )
        return report

    def _expire(self, deadlines: Dict[_CodeQuery, float], report: RefreshReport) -> None:
        now = time.monotonic()
        for query, deadline in list(deadlines.items()):
            if deadline > now:
                continue
            if query.abandon():
                del deadlines[query]
                self._record_failure(report, query, f"timed out after {self.timeout_seconds}s")
            else:
                # already publishing; give the publish its own window
                deadlines[query] = now + self.timeout_seconds

    def _record_failure(self, report: RefreshReport, query: _CodeQuery, error: str) -> None:
        target = query.target
        logger.error(
            "Quota refresh failed for model '%s' code %s (%s): %s",
            target.model_id, query.quota_code, target.endpoint, error,
        )
        report.failures.append(FetchFailure(target.model_id, query.quota_code, target.endpoint, error))

    def _run_query(self, query: _CodeQuery, results: "queue.Queue") -> None:
        target = query.target
        try:
            limit = self.limits.get_limit(query.quota_code)
            if not query.commit():
                return
            self.store.put_value(
                QUOTA_NAMESPACE,
                query.metric,
                {MODEL_ID_DIMENSION: target.model_id},
                limit.value,
                timestamp=datetime.now(timezone.utc),
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            results.put((query, None, e))
            return
        logger.info(
            "Published %s=%s for %s (%s)",
            query.metric, limit.value, target.model_id, limit.quota_name,
        )
        results.put((query, {
            "modelId": target.model_id,
            "metric": query.metric,
            "quotaCode": query.quota_code,
            "value": limit.value,
        }, None))


def quota_codes_filename(region: str, today: Optional[datetime] = None) -> str:
    """Default file name for a saved quota code listing."""
    today = today or datetime.now(timezone.utc)
    return f"bedrock-quota-codes-{today.strftime('%Y%m%d')}-{region}.txt"


def format_quota_codes(limits: Sequence[QuotaLimit], region: str) -> str:
    """Render a quota code listing as fixed-width text."""
    lines = [
        f"Bedrock Service Quotas for region: {region}",
        "",
        f"Found {len(limits)} total quotas",
        "",
        f"{'Code'.ljust(15)} {'Value'.ljust(15)} Name",
        "-" * 100,
    ]
    for limit in limits:
        value = "N/A" if limit.value is None else str(limit.value)
        lines.append(
            f"{(limit.quota_code or 'N/A').ljust(15)} {value.ljust(15)} {limit.quota_name or 'N/A'}"
        )
    return "\n".join(lines) + "\n"
