"""
Instrumented Amazon Bedrock runtime client.

Publishes the requested max output tokens of every successful Converse
call so initial reservation can be estimated. Bedrock itself does not
report this value.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import boto3

from ..constants import CLIENT_METRICS_NAMESPACE, MODEL_ID_DIMENSION, REQUESTED_MAX_OUTPUT_METRIC
from ..log import get_logger
from ..storage.cloudwatch import CloudWatchMetricsStore
from ..storage.models import MetricsStore

logger = get_logger(__name__)


class InstrumentedBedrock:
    """Bedrock runtime wrapper that publishes RequestedMaxOutputTokens.

    Wraps Converse without changing its behavior. Calls that fail are not
    recorded; publish failures propagate so data loss is never silent.
    """

    def __init__(
        self,
        model_id: str,
        client: Any = None,
        store: Optional[MetricsStore] = None,
        default_max_tokens: Optional[int] = None,
        region_name: Optional[str] = None,
    ):
        """Initialize instrumented client.

        Args:
            model_id: Model identity sent to Bedrock, including any
                inference profile prefix (required)
            client: boto3 bedrock-runtime client (created if not given)
            store: Metrics store for the published values (CloudWatch if not given)
            default_max_tokens: Value recorded when a call sets no maxTokens
            region_name: Region used when creating clients

        Raises:
            ValueError: If model_id is empty or default_max_tokens is not positive
        """
        if not model_id or not model_id.strip():
            raise ValueError("model_id is required and cannot be empty")
        if default_max_tokens is not None and default_max_tokens <= 0:
            raise ValueError("default_max_tokens must be > 0")

        self.model_id = model_id
        self.default_max_tokens = default_max_tokens
        self.client = client or boto3.client("bedrock-runtime", region_name=region_name)
        self.store = store or CloudWatchMetricsStore(region_name=region_name)

    def converse(
        self,
        messages: List[Dict[str, Any]],
        inference_config: Optional[Dict[str, Any]] = None,
        **kwargs: Any
    ) -> Dict[str, Any]:
        """Call Converse and record the requested max output.

        Args:
            messages: Converse messages (required)
            inference_config: Converse inferenceConfig (optional)
            **kwargs: Additional Converse parameters

        Returns:
            Converse response, unchanged

        Raises:
            ValueError: If messages is empty
            botocore errors: Propagated without modification
        """
        if not messages:
            raise ValueError("messages is required and cannot be empty")

        request = {"modelId": self.model_id, "messages": messages, **kwargs}
        if inference_config:
            request["inferenceConfig"] = inference_config

        response = self.client.converse(**request)

        max_tokens = (inference_config or {}).get("maxTokens", self.default_max_tokens)
        self.record_requested_max_output(max_tokens)
        return response

    def record_requested_max_output(self, max_tokens: Optional[int]) -> bool:
        """Publish one RequestedMaxOutputTokens value.

        Returns:
            False when there is no value to publish
        """
        if max_tokens is None:
            logger.warning(
                "No maxTokens for %s, initial reservation will fall back to input tokens",
                self.model_id,
            )
            return False

        self.store.put_value(
            CLIENT_METRICS_NAMESPACE,
            REQUESTED_MAX_OUTPUT_METRIC,
            {MODEL_ID_DIMENSION: self.model_id},
            max_tokens,
            timestamp=datetime.now(timezone.utc),
        )
        return True
