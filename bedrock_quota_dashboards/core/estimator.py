"""
Quota consumption estimation.

Bedrock reserves quota when a request is admitted and releases part of
it as output streams, so two estimates are derived per bucket:

- Initial reservation: input + cache write + requested max output
- Actual consumption: input + cache write + output * burndown rate

Both sum across every identity that draws on the same quota (a model
plus any inference profiles sharing its limit). Initial reservation
overstates in-flight usage because the live value is not observable.

Requested max output is only known to callers, so it comes from
client instrumentation. Buckets where no caller published it fall back
to input + cache write; that is expected, not an error.

Formulas are evaluated two ways from the same definitions: as
CloudWatch metric math for the dashboard, and in Python over series
read from any metrics store. Nothing derived is ever written back.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Union

from bedrock_quota_dashboards.constants import (
    BEDROCK_NAMESPACE,
    CACHE_WRITE_TOKENS_METRIC,
    CLIENT_METRICS_NAMESPACE,
    INPUT_TOKENS_METRIC,
    INVOCATIONS_METRIC,
    MODEL_ID_DIMENSION,
    OUTPUT_TOKENS_METRIC,
    QUOTA_NAMESPACE,
    REQUEST_QUOTA_METRIC,
    REQUESTED_MAX_OUTPUT_METRIC,
    STATISTIC_MAXIMUM,
    STATISTIC_SUM,
    TOKEN_QUOTA_METRIC,
)
from bedrock_quota_dashboards.storage.models import MetricsStore

from .counters import UsageCounters
from .dashboard import PlannedEntry

CounterGroup = Union[UsageCounters, Sequence[UsageCounters]]


def _as_group(counters: CounterGroup) -> Sequence[UsageCounters]:
    if isinstance(counters, UsageCounters):
        return (counters,)
    return counters


def initial_reservation(counters: CounterGroup) -> float:
    """Quota held at admission, summed across identities.

    Identities with no requested max output contribute their input and
    cache write tokens only.
    """
    return sum(
        c.input_tokens + c.cache_write_tokens + (c.requested_max_output or 0)
        for c in _as_group(counters)
    )


def actual_consumption(counters: CounterGroup, burndown_rate: float) -> float:
    """Quota charged after completion, summed across identities.

    The burndown rate is shared by the whole group.
    """
    if burndown_rate <= 0:
        raise ValueError("burndown_rate must be > 0")
    return sum(
        c.input_tokens + c.cache_write_tokens + c.output_tokens * burndown_rate
        for c in _as_group(counters)
    )


def request_rate(counters: CounterGroup) -> float:
    """Invocations summed across identities."""
    return sum(c.invocations for c in _as_group(counters))


# Every counter term uses the same statistic so that sums stay consistent
# across the formula.
COUNTER_STATISTIC = STATISTIC_SUM
LIMIT_STATISTIC = STATISTIC_MAXIMUM


@dataclass(frozen=True)
class MetricRef:
    """A raw metric referenced by id inside metric math."""
    id: str
    namespace: str
    metric_name: str
    model_id: str
    statistic: str


@dataclass(frozen=True)
class ExpressionRef:
    """A metric math expression with its display label."""
    id: str
    expression: str
    label: str


@dataclass
class ConsumptionExpressions:
    """Metric math for one planned entry."""
    metrics: List[MetricRef] = field(default_factory=list)
    initial_reservation: Optional[ExpressionRef] = None
    actual_consumption: Optional[ExpressionRef] = None
    request_rate: Optional[ExpressionRef] = None
    token_limit: Optional[ExpressionRef] = None
    request_limit: Optional[ExpressionRef] = None


def _filled(metric_id: str) -> str:
    return f"FILL({metric_id}, 0)"


def build_consumption_expressions(planned: PlannedEntry) -> ConsumptionExpressions:
    """Compose the metric math for an entry and its auxiliary identities.

    Counter terms are wrapped in FILL(..., 0) so an identity or metric
    without data in a bucket counts as zero rather than blanking the
    whole sum. Limit lines repeat the last reading across the window.
    """
    result = ConsumptionExpressions()
    reservation_terms = []
    consumption_terms = []
    request_terms = []

    for index, identity in enumerate(planned.identities):
        ids = {
            "input": f"in{index}",
            "cache": f"cw{index}",
            "output": f"out{index}",
            "invocations": f"inv{index}",
            "requested": f"rmo{index}",
        }
        result.metrics.extend([
            MetricRef(ids["input"], BEDROCK_NAMESPACE, INPUT_TOKENS_METRIC, identity, COUNTER_STATISTIC),
            MetricRef(ids["cache"], BEDROCK_NAMESPACE, CACHE_WRITE_TOKENS_METRIC, identity, COUNTER_STATISTIC),
            MetricRef(ids["output"], BEDROCK_NAMESPACE, OUTPUT_TOKENS_METRIC, identity, COUNTER_STATISTIC),
            MetricRef(ids["invocations"], BEDROCK_NAMESPACE, INVOCATIONS_METRIC, identity, COUNTER_STATISTIC),
            MetricRef(ids["requested"], CLIENT_METRICS_NAMESPACE, REQUESTED_MAX_OUTPUT_METRIC, identity, COUNTER_STATISTIC),
        ])
        prompt = f"{_filled(ids['input'])} + {_filled(ids['cache'])}"
        reservation_terms.append(f"({prompt} + {_filled(ids['requested'])})")
        consumption_terms.append(
            f"({prompt} + {_filled(ids['output'])} * {planned.burndown_rate})"
        )
        request_terms.append(_filled(ids["invocations"]))

    result.initial_reservation = ExpressionRef(
        "reservation", " + ".join(reservation_terms), "Initial Reservation (Tokens)"
    )
    result.actual_consumption = ExpressionRef(
        "consumption", " + ".join(consumption_terms), "Actual Consumption (Tokens)"
    )
    result.request_rate = ExpressionRef(
        "requests", " + ".join(request_terms), "Requests"
    )

    if planned.quota_codes.token_quota_code:
        result.metrics.append(MetricRef(
            "tokenQuota", QUOTA_NAMESPACE, TOKEN_QUOTA_METRIC,
            planned.model_identity, LIMIT_STATISTIC,
        ))
        result.token_limit = ExpressionRef(
            "tokenQuotaLine", "FILL(tokenQuota, REPEAT)", "Quota Limit (Tokens)"
        )
    if planned.quota_codes.request_quota_code:
        result.metrics.append(MetricRef(
            "requestQuota", QUOTA_NAMESPACE, REQUEST_QUOTA_METRIC,
            planned.model_identity, LIMIT_STATISTIC,
        ))
        result.request_limit = ExpressionRef(
            "requestQuotaLine", "FILL(requestQuota, REPEAT)", "Quota Limit (Requests)"
        )
    return result


def forward_fill(
    readings: Mapping[datetime, float],
    buckets: Sequence[datetime],
) -> List[Optional[float]]:
    """Carry the most recent limit reading forward over every bucket.

    Buckets before the first reading stay None. Repeated readings of the
    same value leave the line unchanged.
    """
    ordered = sorted(readings.items())
    filled = []
    position = 0
    current = None
    for bucket in buckets:
        while position < len(ordered) and ordered[position][0] <= bucket:
            current = ordered[position][1]
            position += 1
        filled.append(current)
    return filled


@dataclass
class EstimateSeries:
    """Evaluated estimates for one planned entry."""
    model_identity: str
    timestamps: List[datetime] = field(default_factory=list)
    initial_reservation: List[float] = field(default_factory=list)
    actual_consumption: List[float] = field(default_factory=list)
    request_rate: List[float] = field(default_factory=list)
    token_limit: List[Optional[float]] = field(default_factory=list)
    request_limit: List[Optional[float]] = field(default_factory=list)

    @property
    def peak_initial_reservation(self) -> float:
        return max(self.initial_reservation, default=0)

    @property
    def peak_actual_consumption(self) -> float:
        return max(self.actual_consumption, default=0)

    @property
    def peak_request_rate(self) -> float:
        return max(self.request_rate, default=0)

    @property
    def latest_token_limit(self) -> Optional[float]:
        return self.token_limit[-1] if self.token_limit else None

    @property
    def latest_request_limit(self) -> Optional[float]:
        return self.request_limit[-1] if self.request_limit else None


def _read_counters(
    store: MetricsStore,
    identity: str,
    start: datetime,
    end: datetime,
    period: int,
) -> Dict[str, Dict[datetime, float]]:
    dimensions = {MODEL_ID_DIMENSION: identity}
    sources = {
        "input": (BEDROCK_NAMESPACE, INPUT_TOKENS_METRIC),
        "cache": (BEDROCK_NAMESPACE, CACHE_WRITE_TOKENS_METRIC),
        "output": (BEDROCK_NAMESPACE, OUTPUT_TOKENS_METRIC),
        "invocations": (BEDROCK_NAMESPACE, INVOCATIONS_METRIC),
        "requested": (CLIENT_METRICS_NAMESPACE, REQUESTED_MAX_OUTPUT_METRIC),
    }
    return {
        name: store.get_series(namespace, metric, dimensions, COUNTER_STATISTIC, start, end, period)
        for name, (namespace, metric) in sources.items()
    }


def estimate_series(
    planned: PlannedEntry,
    store: MetricsStore,
    start: datetime,
    end: datetime,
    period: int = 60,
    limit_lookback: timedelta = timedelta(days=1),
) -> EstimateSeries:
    """Evaluate the estimates for an entry over a time window.

    Args:
        planned: Validated dashboard entry
        store: Metrics store holding counters and limit readings
        start: Window start (inclusive)
        end: Window end (exclusive)
        period: Bucket width in seconds
        limit_lookback: How far before start to look for a limit reading

    Returns:
        EstimateSeries with one value per bucket that has usage data
    """
    per_identity = [
        _read_counters(store, identity, start, end, period)
        for identity in planned.identities
    ]

    buckets = sorted({
        bucket
        for series in per_identity
        for values in series.values()
        for bucket in values
    })

    result = EstimateSeries(model_identity=planned.model_identity, timestamps=buckets)
    for bucket in buckets:
        group = [
            UsageCounters(
                input_tokens=series["input"].get(bucket, 0),
                cache_write_tokens=series["cache"].get(bucket, 0),
                output_tokens=series["output"].get(bucket, 0),
                invocations=series["invocations"].get(bucket, 0),
                requested_max_output=series["requested"].get(bucket),
            )
            for series in per_identity
        ]
        result.initial_reservation.append(initial_reservation(group))
        result.actual_consumption.append(actual_consumption(group, planned.burndown_rate))
        result.request_rate.append(request_rate(group))

    dimensions = {MODEL_ID_DIMENSION: planned.model_identity}
    for code, metric, target in (
        (planned.quota_codes.token_quota_code, TOKEN_QUOTA_METRIC, result.token_limit),
        (planned.quota_codes.request_quota_code, REQUEST_QUOTA_METRIC, result.request_limit),
    ):
        if not code:
            continue
        readings = store.get_series(
            QUOTA_NAMESPACE, metric, dimensions, LIMIT_STATISTIC,
            start - limit_lookback, end, period,
        )
        target.extend(forward_fill(readings, buckets))

    return result
