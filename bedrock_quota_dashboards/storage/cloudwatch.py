"""
Amazon CloudWatch metrics store.

Publishes data points with PutMetricData and reads aggregated series
with GetMetricData.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import boto3

from bedrock_quota_dashboards.log import get_logger

logger = get_logger(__name__)


def _dimension_list(dimensions: Mapping[str, str]) -> list:
    return [{"Name": name, "Value": value} for name, value in sorted(dimensions.items())]


class CloudWatchMetricsStore:
    """Metrics store backed by CloudWatch."""

    def __init__(self, client: Any = None, region_name: Optional[str] = None):
        """Initialize with an existing client or create one.

        Args:
            client: boto3 CloudWatch client (created if not given)
            region_name: Region used when creating the client
        """
        self.client = client or boto3.client("cloudwatch", region_name=region_name)

    @property
    def region(self) -> Optional[str]:
        return self.client.meta.region_name

    def put_value(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Mapping[str, str],
        value: float,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Publish a single value."""
        datum = {
            "MetricName": metric_name,
            "Dimensions": _dimension_list(dimensions),
            "Value": float(value),
            "Unit": "Count",
        }
        if timestamp is not None:
            datum["Timestamp"] = timestamp
        self.client.put_metric_data(Namespace=namespace, MetricData=[datum])

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
        """Read an aggregated series, draining every result page."""
        query = {
            "Id": "m0",
            "MetricStat": {
                "Metric": {
                    "Namespace": namespace,
                    "MetricName": metric_name,
                    "Dimensions": _dimension_list(dimensions),
                },
                "Period": period,
                "Stat": statistic,
            },
            "ReturnData": True,
        }

        series: Dict[datetime, float] = {}
        paginator = self.client.get_paginator("get_metric_data")
        for page in paginator.paginate(
            MetricDataQueries=[query],
            StartTime=start,
            EndTime=end,
            ScanBy="TimestampAscending",
        ):
            for result in page.get("MetricDataResults", []):
                if result.get("StatusCode") not in (None, "Complete", "PartialData"):
                    logger.warning(
                        "Unexpected status %s reading %s/%s %s",
                        result.get("StatusCode"), namespace, metric_name, dict(dimensions),
                    )
                for timestamp, value in zip(result.get("Timestamps", []), result.get("Values", [])):
                    series[timestamp.astimezone(timezone.utc)] = value
        return series
