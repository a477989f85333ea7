"""
CloudWatch dashboard rendering.

Lays out one token panel and one request panel per planned entry, with a
family banner whenever the family changes from the previous entry.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from bedrock_quota_dashboards.constants import DEFAULT_DASHBOARD_NAME, DEFAULT_PERIOD_SECONDS
from bedrock_quota_dashboards.log import get_logger

from .dashboard import PlannedEntry
from .estimator import ConsumptionExpressions, ExpressionRef, MetricRef, build_consumption_expressions

logger = get_logger(__name__)

DASHBOARD_WIDTH = 24
BANNER_HEIGHT = 1
PANEL_WIDTH = 12
PANEL_HEIGHT = 6
LIMIT_COLOR = "#d62728"

TOKEN_AXIS_LABEL = "Quota Units (Tokens/min)"
REQUEST_AXIS_LABEL = "Quota Units (Requests/min)"


@dataclass
class _Cursor:
    x: int = 0
    y: int = 0
    row_height: int = 0

    def place(self, width: int, height: int, new_row: bool = False) -> Dict[str, int]:
        if new_row and self.x > 0:
            self._wrap()
        if self.x + width > DASHBOARD_WIDTH:
            self._wrap()
        position = {"x": self.x, "y": self.y, "width": width, "height": height}
        self.x += width
        self.row_height = max(self.row_height, height)
        return position

    def _wrap(self) -> None:
        self.y += self.row_height
        self.x = 0
        self.row_height = 0


def _metric_row(ref: MetricRef, period: int) -> List[Any]:
    return [
        ref.namespace,
        ref.metric_name,
        "ModelId",
        ref.model_id,
        {"id": ref.id, "stat": ref.statistic, "period": period, "visible": False},
    ]


def _expression_row(ref: ExpressionRef, color: Optional[str] = None) -> List[Any]:
    options = {"expression": ref.expression, "label": ref.label, "id": ref.id}
    if color:
        options["color"] = color
    return [options]


def _graph(
    title: str,
    rows: List[List[Any]],
    axis_label: str,
    region: str,
    period: int,
) -> Dict[str, Any]:
    return {
        "title": title,
        "view": "timeSeries",
        "stacked": False,
        "region": region,
        "period": period,
        "metrics": rows,
        "yAxis": {"left": {"label": axis_label, "min": 0, "showUnits": False}},
    }


def token_panel(
    planned: PlannedEntry,
    expressions: ConsumptionExpressions,
    region: str,
    period: int = DEFAULT_PERIOD_SECONDS,
) -> Optional[Dict[str, Any]]:
    """Panel with initial reservation, actual consumption and the token limit.

    Returns None when the entry has no token quota code.
    """
    if expressions.token_limit is None:
        return None
    used = [m for m in expressions.metrics if m.id != "requestQuota" and not m.id.startswith("inv")]
    rows = [_metric_row(m, period) for m in used]
    rows.append(_expression_row(expressions.initial_reservation))
    rows.append(_expression_row(expressions.actual_consumption))
    rows.append(_expression_row(expressions.token_limit, LIMIT_COLOR))
    return _graph(
        f"{planned.model_identity} - Token Quota Consumption",
        rows, TOKEN_AXIS_LABEL, region, period,
    )


def request_panel(
    planned: PlannedEntry,
    expressions: ConsumptionExpressions,
    region: str,
    period: int = DEFAULT_PERIOD_SECONDS,
) -> Optional[Dict[str, Any]]:
    """Panel with invocations and the request limit.

    Returns None when the entry has no request quota code.
    """
    if expressions.request_limit is None:
        return None
    used = [m for m in expressions.metrics if m.id.startswith("inv") or m.id == "requestQuota"]
    rows = [_metric_row(m, period) for m in used]
    rows.append(_expression_row(expressions.request_rate))
    rows.append(_expression_row(expressions.request_limit, LIMIT_COLOR))
    return _graph(
        f"{planned.model_identity} - Request Quota Consumption",
        rows, REQUEST_AXIS_LABEL, region, period,
    )


def render_dashboard(
    plan: Sequence[PlannedEntry],
    region: str,
    period: int = DEFAULT_PERIOD_SECONDS,
) -> Dict[str, Any]:
    """Build the CloudWatch dashboard body for a plan.

    Args:
        plan: Validated entries in display order
        region: Region the metrics live in
        period: Graph period in seconds

    Returns:
        Dashboard body as a dict, ready for json.dumps
    """
    if period <= 0 or period % 60:
        raise ValueError("period must be a positive multiple of 60 seconds")

    widgets = []
    cursor = _Cursor()
    current_family = None
    skipped = []

    for planned in plan:
        family = planned.family
        if family != current_family:
            current_family = family
            widgets.append({
                "type": "text",
                **cursor.place(DASHBOARD_WIDTH, BANNER_HEIGHT, new_row=True),
                "properties": {"markdown": f"# {family}"},
            })

        expressions = build_consumption_expressions(planned)
        panels = [
            token_panel(planned, expressions, region, period),
            request_panel(planned, expressions, region, period),
        ]
        if panels[0] is None:
            skipped.append(f"{planned.model_identity} token panel")
        if panels[1] is None:
            skipped.append(f"{planned.model_identity} request panel")

        first = True
        for properties in panels:
            if properties is None:
                continue
            widgets.append({
                "type": "metric",
                **cursor.place(PANEL_WIDTH, PANEL_HEIGHT, new_row=first),
                "properties": properties,
            })
            first = False

    if skipped:
        logger.warning(
            "Skipped %d dashboard panel(s) due to missing quota codes: %s",
            len(skipped), ", ".join(skipped),
        )

    return {"periodOverride": "inherit", "widgets": widgets}


def deploy_dashboard(
    client: Any,
    body: Dict[str, Any],
    dashboard_name: str = DEFAULT_DASHBOARD_NAME,
) -> List[Dict[str, Any]]:
    """Create or replace a dashboard with PutDashboard.

    Returns:
        Validation messages reported by CloudWatch (usually empty)
    """
    response = client.put_dashboard(
        DashboardName=dashboard_name,
        DashboardBody=json.dumps(body),
    )
    messages = response.get("DashboardValidationMessages", [])
    for message in messages:
        logger.warning("Dashboard validation: %s", message.get("Message"))
    logger.info("Deployed dashboard %s with %d widgets", dashboard_name, len(body["widgets"]))
    return messages
