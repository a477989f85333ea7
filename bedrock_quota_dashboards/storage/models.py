"""
Data models for the metrics store layer.

Defines metric data points and the interface every store implements.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Mapping, Optional, Protocol


@dataclass(frozen=True)
class MetricDatum:
    """One published data point.

    Points are append-only readings; a store never updates or deletes
    them, later readings simply supersede earlier ones.
    """
    timestamp: datetime
    namespace: str
    metric_name: str
    value: float
    dimensions: Mapping[str, str] = field(default_factory=dict)


class MetricsStore(Protocol):
    """Write/read interface shared by CloudWatch and the local store."""

    def put_value(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Mapping[str, str],
        value: float,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Publish a value, at the current time unless a timestamp is given."""

    def get_series(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Mapping[str, str],
        statistic: str,
        start: datetime,
        end: datetime,
        period: int,
    ) -> Dict[datetime, float]:
        """Aggregate a series into period-wide buckets.

        Returns:
            Mapping of bucket start time to aggregated value, containing
            only buckets that have data
        """
