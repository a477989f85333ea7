"""
Unit tests for SDK layer.

Tests the instrumented Bedrock client and requested max output recording.
"""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from bedrock_quota_dashboards.sdk import InstrumentedBedrock

MESSAGES = [{"role": "user", "content": [{"text": "Hello"}]}]


class TestInstrumentedBedrock:
    """Test InstrumentedBedrock client wrapper."""

    def setup_method(self):
        """Set up test environment."""
        self.client = Mock()
        self.client.converse.return_value = {"output": {"message": {}}, "usage": {"inputTokens": 5}}
        self.store = Mock()

    def test_init_missing_model(self):
        with pytest.raises(ValueError, match="model_id is required"):
            InstrumentedBedrock(model_id="  ", client=self.client, store=self.store)

    def test_init_invalid_default(self):
        with pytest.raises(ValueError, match="default_max_tokens"):
            InstrumentedBedrock("m", client=self.client, store=self.store, default_max_tokens=0)

    @patch("bedrock_quota_dashboards.sdk.bedrock_client.CloudWatchMetricsStore")
    @patch("bedrock_quota_dashboards.sdk.bedrock_client.boto3")
    def test_init_creates_clients(self, mock_boto3, mock_store_class):
        client = InstrumentedBedrock("us.model", region_name="us-west-2")
        mock_boto3.client.assert_called_once_with("bedrock-runtime", region_name="us-west-2")
        mock_store_class.assert_called_once_with(region_name="us-west-2")
        assert client.store is mock_store_class.return_value

    def test_converse_records_max_tokens(self):
        client = InstrumentedBedrock("us.model", client=self.client, store=self.store)

        response = client.converse(MESSAGES, inference_config={"maxTokens": 4000})

        assert response == self.client.converse.return_value
        self.client.converse.assert_called_once_with(
            modelId="us.model", messages=MESSAGES, inferenceConfig={"maxTokens": 4000}
        )
        args, kwargs = self.store.put_value.call_args
        assert args == ("Bedrock/ClientMetrics", "RequestedMaxOutputTokens", {"ModelId": "us.model"}, 4000)
        assert kwargs["timestamp"] is not None

    def test_converse_uses_default_max_tokens(self):
        client = InstrumentedBedrock("us.model", client=self.client, store=self.store, default_max_tokens=2048)
        client.converse(MESSAGES, system=[{"text": "Be brief"}])

        assert self.client.converse.call_args[1]["system"] == [{"text": "Be brief"}]
        assert self.store.put_value.call_args[0][3] == 2048

    def test_converse_without_max_tokens_publishes_nothing(self):
        client = InstrumentedBedrock("us.model", client=self.client, store=self.store)
        with patch("bedrock_quota_dashboards.sdk.bedrock_client.logger") as mock_logger:
            client.converse(MESSAGES)

        self.store.put_value.assert_not_called()
        mock_logger.warning.assert_called_once()

    def test_failed_call_records_nothing(self):
        self.client.converse.side_effect = ClientError(
            {"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "Converse"
        )
        client = InstrumentedBedrock("us.model", client=self.client, store=self.store)

        with pytest.raises(ClientError):
            client.converse(MESSAGES, inference_config={"maxTokens": 100})
        self.store.put_value.assert_not_called()

    def test_empty_messages(self):
        client = InstrumentedBedrock("us.model", client=self.client, store=self.store)
        with pytest.raises(ValueError, match="messages is required"):
            client.converse([])
