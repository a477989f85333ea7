"""
Local metrics store backed by SQLite.

Mirrors the CloudWatch read/write contract so estimates can be evaluated
offline and in tests. Data points form an append-only ledger.
"""

import json
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from bedrock_quota_dashboards.constants import STATISTIC_MAXIMUM, STATISTIC_SUM

from .db import DEFAULT_DB_PATH, get_connection
from .models import MetricDatum

_AGGREGATES = {
    STATISTIC_SUM: "SUM(value)",
    STATISTIC_MAXIMUM: "MAX(value)",
}


def _encode_dimensions(dimensions: Mapping[str, str]) -> str:
    """Canonical text form so equal dimension sets compare equal in SQL."""
    return json.dumps(dict(dimensions), sort_keys=True)


def _to_epoch(timestamp: datetime) -> float:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.timestamp()


def _from_epoch(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def initialize_schema(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the metric_datum table if it doesn't exist.

    No UPDATE or DELETE operations are ever performed on this table.

    Args:
        db_path: Path to SQLite database file
    """
    conn = get_connection(db_path)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS metric_datum (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp REAL NOT NULL,
                namespace TEXT NOT NULL,
                metric_name TEXT NOT NULL,
                dimensions TEXT NOT NULL,
                value REAL NOT NULL
            )
        """)
        conn.execute("""
            CREATE INDEX IF NOT EXISTS metric_datum_series
            ON metric_datum (namespace, metric_name, dimensions, timestamp)
        """)
        conn.commit()
    finally:
        conn.close()


def insert_metric_data(data: List[MetricDatum], db_path: str = DEFAULT_DB_PATH) -> None:
    """Insert data points atomically into the append-only ledger.

    Args:
        data: Points to record
        db_path: Path to SQLite database file
    """
    if not data:
        return

    conn = get_connection(db_path)
    try:
        conn.execute("BEGIN TRANSACTION")
        for datum in data:
            conn.execute("""
                INSERT INTO metric_datum
                (timestamp, namespace, metric_name, dimensions, value)
                VALUES (?, ?, ?, ?, ?)
            """, (
                _to_epoch(datum.timestamp),
                datum.namespace,
                datum.metric_name,
                _encode_dimensions(datum.dimensions),
                float(datum.value),
            ))
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetch_recent_metric_data(
    namespace: Optional[str] = None,
    metric_name: Optional[str] = None,
    limit: int = 100,
    db_path: str = DEFAULT_DB_PATH,
) -> List[MetricDatum]:
    """Fetch recent data points, newest first.

    Args:
        namespace: Optional filter on namespace
        metric_name: Optional filter on metric name
        limit: Maximum number of points to return
        db_path: Path to SQLite database file
    """
    conn = get_connection(db_path)
    try:
        query = "SELECT timestamp, namespace, metric_name, dimensions, value FROM metric_datum"
        params = []
        conditions = []

        if namespace:
            conditions.append("namespace = ?")
            params.append(namespace)
        if metric_name:
            conditions.append("metric_name = ?")
            params.append(metric_name)

        if conditions:
            query += " WHERE " + " AND ".join(conditions)

        query += " ORDER BY timestamp DESC, id DESC LIMIT ?"
        params.append(limit)

        cursor = conn.execute(query, params)
        return [
            MetricDatum(
                timestamp=_from_epoch(row[0]),
                namespace=row[1],
                metric_name=row[2],
                dimensions=json.loads(row[3]),
                value=row[4],
            )
            for row in cursor.fetchall()
        ]
    finally:
        conn.close()


class SqliteMetricsStore:
    """Metrics store that keeps data points in a local SQLite file."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Initialize the store and make sure its schema exists.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        initialize_schema(db_path)

    def put_value(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Mapping[str, str],
        value: float,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Append a value, timestamped now unless given."""
        insert_metric_data([MetricDatum(
            timestamp=timestamp or datetime.now(timezone.utc),
            namespace=namespace,
            metric_name=metric_name,
            value=value,
            dimensions=dict(dimensions),
        )], self.db_path)

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
        """Aggregate a series into buckets aligned to multiples of period.

        Raises:
            ValueError: If the statistic or period is not supported
        """
        if statistic not in _AGGREGATES:
            raise ValueError(f"Unsupported statistic: {statistic}")
        if period <= 0:
            raise ValueError("period must be > 0")

        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(f"""
                SELECT CAST(timestamp / ? AS INTEGER) * ? AS bucket,
                       {_AGGREGATES[statistic]}
                FROM metric_datum
                WHERE namespace = ? AND metric_name = ? AND dimensions = ?
                  AND timestamp >= ? AND timestamp < ?
                GROUP BY bucket
                ORDER BY bucket
            """, (
                period,
                period,
                namespace,
                metric_name,
                _encode_dimensions(dimensions),
                _to_epoch(start),
                _to_epoch(end),
            ))
            return {_from_epoch(row[0]): row[1] for row in cursor.fetchall()}
        finally:
            conn.close()
