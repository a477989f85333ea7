"""
CLI interface for Bedrock Quota Dashboards.

Provides command-line access to validation, rendering, quota refresh
and local estimation.
"""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Tuple

import boto3
import typer
import yaml
from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console
from rich.table import Table

from bedrock_quota_dashboards.config.loader import DashboardConfig, load_dashboard_config
from bedrock_quota_dashboards.core.dashboard import (
    PlannedEntry,
    build_dashboard_plan,
    ensure_region_matches,
)
from bedrock_quota_dashboards.core.estimator import estimate_series
from bedrock_quota_dashboards.core.fetcher import (
    QuotaLimitFetcher,
    RefreshReport,
    ServiceQuotasLimits,
    build_fetch_targets,
    format_quota_codes,
    quota_codes_filename,
)
from bedrock_quota_dashboards.core.regions import load_registry
from bedrock_quota_dashboards.core.renderer import deploy_dashboard, render_dashboard
from bedrock_quota_dashboards.runners.quota_scheduler import quota_scheduler
from bedrock_quota_dashboards.storage.cloudwatch import CloudWatchMetricsStore
from bedrock_quota_dashboards.storage.repository import SqliteMetricsStore

app = typer.Typer()
console = Console()

# Exit codes - isolated refresh failures are non-failing (0) unless --strict
EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

CONFIG_ERRORS = (FileNotFoundError, ValueError, yaml.YAMLError)
AWS_ERRORS = (ClientError, BotoCoreError)


def _load_plan(config_path: str) -> Tuple[DashboardConfig, List[PlannedEntry]]:
    config = load_dashboard_config(config_path)
    registry = load_registry(config.region)
    return config, build_dashboard_plan(config.entries, registry)


def _aws_region(config: DashboardConfig) -> str:
    """Region AWS clients will use, checked against the configured one.

    Raises:
        DashboardConfigurationError: If the environment points elsewhere
    """
    client_region = boto3.session.Session().region_name
    ensure_region_matches(load_registry(config.region), client_region)
    return client_region or config.region


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/] {message}")
    sys.exit(EXIT_CODE_FAIL)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Bedrock Quota Dashboards CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Bedrock Quota Dashboards - Use --help to see available commands")


@app.command()
def validate(config_path: str = typer.Argument(..., help="Dashboard YAML file")):
    """Validate a dashboard configuration against the region's quota registry."""
    try:
        config, plan = _load_plan(config_path)
    except CONFIG_ERRORS as e:
        _fail(str(e))

    _display_plan(config, plan)
    console.print(f"[green]✓[/] {len(plan)} dashboard entries valid for {config.region}")
    sys.exit(EXIT_CODE_PASS)


@app.command()
def render(
    config_path: str = typer.Argument(..., help="Dashboard YAML file"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the dashboard body to this file instead of stdout"
    ),
    deploy: bool = typer.Option(
        False,
        "--deploy",
        help="Create or replace the dashboard in CloudWatch"
    )
):
    """Render the CloudWatch dashboard body for a configuration."""
    try:
        config, plan = _load_plan(config_path)
        body = render_dashboard(plan, config.region, config.period_seconds)
    except CONFIG_ERRORS as e:
        _fail(str(e))

    text = json.dumps(body, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]✓[/] Dashboard body written to {output}")
    elif not deploy:
        console.print_json(text)

    if deploy:
        try:
            region = _aws_region(config)
            client = boto3.client("cloudwatch", region_name=region)
            messages = deploy_dashboard(client, body, config.dashboard_name)
        except CONFIG_ERRORS as e:
            _fail(str(e))
        except AWS_ERRORS as e:
            _fail(f"Deploying dashboard failed: {e}")
        if messages:
            console.print(f"[yellow]Dashboard deployed with {len(messages)} validation message(s)[/]")
        else:
            console.print(f"[green]✓[/] Dashboard {config.dashboard_name} deployed to {region}")
    sys.exit(EXIT_CODE_PASS)


def _build_fetcher(config: DashboardConfig) -> QuotaLimitFetcher:
    region = _aws_region(config)
    return QuotaLimitFetcher(
        limits=ServiceQuotasLimits(region_name=region),
        store=CloudWatchMetricsStore(region_name=region),
        timeout_seconds=config.fetch_timeout_seconds,
        max_workers=config.max_workers,
    )


@app.command()
def refresh(
    config_path: str = typer.Argument(..., help="Dashboard YAML file"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with error code if any quota could not be refreshed"
    )
):
    """
    Fetch current quota limits once and publish them.

    Failures are isolated per model: the rest still publish and the
    next refresh retries.
    """
    try:
        config, plan = _load_plan(config_path)
        fetcher = _build_fetcher(config)
    except CONFIG_ERRORS + AWS_ERRORS as e:
        _fail(str(e))

    report = fetcher.refresh(build_fetch_targets(plan))
    _display_refresh_report(report)

    if strict and not report.ok:
        sys.exit(EXIT_CODE_FAIL)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def schedule(config_path: str = typer.Argument(..., help="Dashboard YAML file")):
    """Refresh quota limits now and on every interval until interrupted."""
    try:
        config, plan = _load_plan(config_path)
        fetcher = _build_fetcher(config)
    except CONFIG_ERRORS + AWS_ERRORS as e:
        _fail(str(e))

    console.print(
        f"Refreshing {len(plan)} entries every {config.refresh_interval_minutes:g} minutes "
        f"(Ctrl+C to stop)"
    )
    try:
        started = quota_scheduler(
            fetcher, build_fetch_targets(plan), config.refresh_interval_minutes
        )
    except KeyboardInterrupt:
        console.print("\nStopped")
        sys.exit(EXIT_CODE_PASS)
    sys.exit(EXIT_CODE_PASS if started else EXIT_CODE_FAIL)


@app.command()
def codes(
    region: Optional[str] = typer.Option(
        None,
        "--region",
        "-r",
        help="AWS region (defaults to the AWS environment)"
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Save the listing to bedrock-quota-codes-YYYYMMDD-REGION.txt"
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the listing to this file"
    )
):
    """List every Bedrock quota code in a region."""
    try:
        limits_service = ServiceQuotasLimits(region_name=region)
        limits = limits_service.list_limits()
    except AWS_ERRORS as e:
        console.print(f"[red]Error fetching quotas:[/] {e}")
        console.print("\nMake sure you have:")
        console.print("1. AWS credentials configured")
        console.print("2. Permissions for servicequotas:ListServiceQuotas")
        console.print("3. Bedrock service available in your region")
        sys.exit(EXIT_CODE_FAIL)

    resolved_region = region or limits_service.region
    if not limits:
        console.print("[yellow]No quotas found for Bedrock service.[/]")
        sys.exit(EXIT_CODE_PASS)

    table = Table(title=f"Bedrock Quotas ({resolved_region})")
    table.add_column("Code")
    table.add_column("Value", justify="right")
    table.add_column("Name")
    for limit in limits:
        table.add_row(limit.quota_code, _format_number(limit.value), limit.quota_name)
    console.print(table)
    console.print(f"Found {len(limits)} total Bedrock quotas")

    if save or output:
        path = output or quota_codes_filename(resolved_region)
        Path(path).write_text(format_quota_codes(limits, resolved_region), encoding="utf-8")
        console.print(f"[green]✓[/] Quotas saved to {path}")
    sys.exit(EXIT_CODE_PASS)


@app.command()
def estimate(
    config_path: str = typer.Argument(..., help="Dashboard YAML file"),
    minutes: int = typer.Option(
        60,
        "--minutes",
        "-m",
        help="Size of the window ending now"
    ),
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="Read from a local SQLite metrics store instead of CloudWatch"
    )
):
    """
    Estimate quota consumption over a recent window.

    Values are estimates from sampled counters, not what Bedrock enforces.
    """
    if minutes <= 0:
        _fail("--minutes must be > 0")

    try:
        config, plan = _load_plan(config_path)
        if db:
            store = SqliteMetricsStore(db)
        else:
            store = CloudWatchMetricsStore(region_name=_aws_region(config))
    except CONFIG_ERRORS + AWS_ERRORS as e:
        _fail(str(e))

    end = datetime.now(timezone.utc)
    start = end - timedelta(minutes=minutes)
    try:
        results = [
            (planned, estimate_series(planned, store, start, end, config.period_seconds))
            for planned in plan
        ]
    except AWS_ERRORS as e:
        _fail(f"Reading metrics failed: {e}")

    _display_estimates(results, minutes)
    sys.exit(EXIT_CODE_PASS)


def _format_number(value: Optional[float]) -> str:
    """Format a count with thousands separators, or "-" when unknown."""
    if value is None:
        return "-"
    return f"{value:,.0f}"


def _format_utilization(peak: float, limit: Optional[float]) -> str:
    if not limit:
        return "N/A"
    return f"{peak / limit * 100:,.1f}%"


def _display_plan(config: DashboardConfig, plan: List[PlannedEntry]):
    table = Table(title=f"{config.dashboard_name} ({config.region})")
    table.add_column("Family")
    table.add_column("Model Identity")
    table.add_column("Endpoint")
    table.add_column("Burndown", justify="right")
    table.add_column("Token Quota")
    table.add_column("Request Quota")
    table.add_column("Auxiliary IDs", justify="right")
    for planned in plan:
        table.add_row(
            planned.family,
            planned.model_identity,
            planned.endpoint.value,
            f"{planned.burndown_rate}x",
            planned.quota_codes.token_quota_code or "[dim]none[/]",
            planned.quota_codes.request_quota_code or "[dim]none[/]",
            str(len(planned.entry.auxiliary_model_ids)),
        )
    console.print(table)


def _display_refresh_report(report: RefreshReport):
    table = Table(title="Quota Refresh")
    table.add_column("Model Identity")
    table.add_column("Metric")
    table.add_column("Code")
    table.add_column("Value", justify="right")
    for item in report.published:
        table.add_row(item["modelId"], item["metric"], item["quotaCode"], _format_number(item["value"]))
    console.print(table)

    if report.failures:
        console.print(f"\n[bold yellow]{len(report.failures)} quota(s) could not be refreshed[/]")
        for failure in report.failures:
            console.print(
                f"  {failure.model_id} {failure.quota_code or ''} "
                f"({failure.endpoint or 'unknown endpoint'}): {failure.error}"
            )
    else:
        console.print(f"[green]✓[/] Published {len(report.published)} quota values")


def _display_estimates(results, minutes: int):
    console.print(f"\n[bold]Estimated Quota Consumption[/bold] (last {minutes} minutes)")
    console.print("-" * 40)

    if all(not series.timestamps for _, series in results):
        console.print("\n[dim]No usage data found in this window.[/]")
        return

    table = Table()
    table.add_column("Model Identity")
    table.add_column("Peak Initial Reservation", justify="right")
    table.add_column("Peak Actual Consumption", justify="right")
    table.add_column("Token Limit", justify="right")
    table.add_column("Utilization", justify="right")
    table.add_column("Peak Requests", justify="right")
    table.add_column("Request Limit", justify="right")
    for planned, series in results:
        table.add_row(
            planned.model_identity,
            _format_number(series.peak_initial_reservation),
            _format_number(series.peak_actual_consumption),
            _format_number(series.latest_token_limit),
            _format_utilization(series.peak_actual_consumption, series.latest_token_limit),
            _format_number(series.peak_request_rate),
            _format_number(series.latest_request_limit),
        )
    console.print(table)


if __name__ == "__main__":
    app()
