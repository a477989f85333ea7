"""Constants shared across the package."""

# Metric dimension shared by usage counters, client metrics and quota limits
MODEL_ID_DIMENSION = "ModelId"

# Usage counters emitted by Amazon Bedrock itself
BEDROCK_NAMESPACE = "AWS/Bedrock"
INPUT_TOKENS_METRIC = "InputTokenCount"
CACHE_WRITE_TOKENS_METRIC = "CacheWriteInputTokenCount"
OUTPUT_TOKENS_METRIC = "OutputTokenCount"
INVOCATIONS_METRIC = "Invocations"

# Published by instrumented callers, see sdk.bedrock_client
CLIENT_METRICS_NAMESPACE = "Bedrock/ClientMetrics"
REQUESTED_MAX_OUTPUT_METRIC = "RequestedMaxOutputTokens"

# Published by the quota limit fetcher
QUOTA_NAMESPACE = "Bedrock/Quotas"
TOKEN_QUOTA_METRIC = "TokenQuota"
REQUEST_QUOTA_METRIC = "RequestQuota"

# Service Quotas service code for Bedrock
BEDROCK_SERVICE_CODE = "bedrock"

# Statistics supported by the metrics stores
STATISTIC_SUM = "Sum"
STATISTIC_MAXIMUM = "Maximum"

DEFAULT_DASHBOARD_NAME = "BedrockQuotaConsumptionByModel"
DEFAULT_PERIOD_SECONDS = 60
# 2.9 hours
DEFAULT_REFRESH_INTERVAL_MINUTES = 174
DEFAULT_FETCH_TIMEOUT_SECONDS = 30
DEFAULT_MAX_WORKERS = 8
