"""
Tests for the CLI interface.
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from bedrock_quota_dashboards.cli.main import EXIT_CODE_FAIL, EXIT_CODE_PASS, app
from bedrock_quota_dashboards.core.fetcher import FetchFailure, QuotaLimit, RefreshReport
from bedrock_quota_dashboards.storage.repository import SqliteMetricsStore

runner = CliRunner()

VALID_CONFIG = {
    "region": "us-east-1",
    "entries": [
        {"model": "AMAZON.NOVA_LITE_V1", "endpoint": "regional"},
        {"model": "ANTHROPIC.CLAUDE_SONNET_4_5", "endpoint": "cross-region"},
    ],
}


@pytest.fixture
def temp_dir():
    """Temporary working directory."""
    with tempfile.TemporaryDirectory() as path:
        yield path


@pytest.fixture
def config_file(temp_dir):
    """Write a valid dashboard config."""
    path = os.path.join(temp_dir, "dashboard.yaml")
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(VALID_CONFIG, f)
    return path


@pytest.fixture
def mock_boto3():
    """Mock boto3 in the CLI with an environment region of us-east-1."""
    with patch("bedrock_quota_dashboards.cli.main.boto3") as mock:
        mock.session.Session.return_value.region_name = "us-east-1"
        yield mock


class TestValidate:
    """Test the validate command."""

    def test_valid_config(self, config_file):
        result = runner.invoke(app, ["validate", config_file])
        assert result.exit_code == EXIT_CODE_PASS
        assert "2 dashboard entries valid for us-east-1" in result.output

    def test_invalid_entries_fail(self, temp_dir):
        path = os.path.join(temp_dir, "bad.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump({
                "region": "us-east-1",
                "entries": [
                    {"model": "ANTHROPIC.CLAUDE_SONNET_4_5", "endpoint": "regional"},
                    {"model": "META.UNKNOWN", "endpoint": "regional"},
                ],
            }, f)

        result = runner.invoke(app, ["validate", path])
        assert result.exit_code == EXIT_CODE_FAIL
        assert "Invalid dashboard configurations found" in result.output

    def test_unknown_region_fails(self, temp_dir):
        path = os.path.join(temp_dir, "eu.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump({**VALID_CONFIG, "region": "eu-central-1"}, f)

        result = runner.invoke(app, ["validate", path])
        assert result.exit_code == EXIT_CODE_FAIL
        assert "No quota registry" in result.output

    def test_missing_file_fails(self, temp_dir):
        result = runner.invoke(app, ["validate", os.path.join(temp_dir, "missing.yaml")])
        assert result.exit_code == EXIT_CODE_FAIL


class TestRender:
    """Test the render command."""

    def test_render_to_file(self, config_file, temp_dir):
        output = os.path.join(temp_dir, "body.json")
        result = runner.invoke(app, ["render", config_file, "--output", output])

        assert result.exit_code == EXIT_CODE_PASS
        with open(output, encoding="utf-8") as f:
            body = json.load(f)
        banners = [w["properties"]["markdown"] for w in body["widgets"] if w["type"] == "text"]
        assert banners == ["# Amazon Nova", "# Anthropic Claude"]

    def test_render_and_deploy(self, config_file, mock_boto3):
        with patch("bedrock_quota_dashboards.cli.main.deploy_dashboard") as mock_deploy:
            mock_deploy.return_value = []
            result = runner.invoke(app, ["render", config_file, "--deploy"])

        assert result.exit_code == EXIT_CODE_PASS
        mock_boto3.client.assert_called_once_with("cloudwatch", region_name="us-east-1")
        args = mock_deploy.call_args[0]
        assert args[2] == "BedrockQuotaConsumptionByModel"
        assert "deployed" in result.output

    def test_deploy_refuses_region_mismatch(self, config_file, mock_boto3):
        mock_boto3.session.Session.return_value.region_name = "us-west-2"
        with patch("bedrock_quota_dashboards.cli.main.deploy_dashboard") as mock_deploy:
            result = runner.invoke(app, ["render", config_file, "--deploy"])

        assert result.exit_code == EXIT_CODE_FAIL
        mock_deploy.assert_not_called()


class TestRefresh:
    """Test the refresh command."""

    def _report(self, failures=()):
        return RefreshReport(
            published=[{"modelId": "amazon.nova-lite-v1:0", "metric": "TokenQuota",
                        "quotaCode": "L-1", "value": 100.0}],
            failures=list(failures),
        )

    def test_refresh_success(self, config_file):
        with patch("bedrock_quota_dashboards.cli.main._build_fetcher") as build:
            build.return_value.refresh.return_value = self._report()
            result = runner.invoke(app, ["refresh", config_file])

        assert result.exit_code == EXIT_CODE_PASS
        targets = build.return_value.refresh.call_args[0][0]
        assert [t.model_id for t in targets] == [
            "amazon.nova-lite-v1:0",
            "us.anthropic.claude-sonnet-4-5-20250929-v1:0",
        ]
        assert "Published 1 quota values" in result.output

    def test_isolated_failures_are_non_failing(self, config_file):
        failure = FetchFailure("amazon.nova-lite-v1:0", "L-2", "regional", "throttled")
        with patch("bedrock_quota_dashboards.cli.main._build_fetcher") as build:
            build.return_value.refresh.return_value = self._report([failure])
            result = runner.invoke(app, ["refresh", config_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "could not be refreshed" in result.output

    def test_strict_fails_on_any_failure(self, config_file):
        failure = FetchFailure("amazon.nova-lite-v1:0", "L-2", "regional", "throttled")
        with patch("bedrock_quota_dashboards.cli.main._build_fetcher") as build:
            build.return_value.refresh.return_value = self._report([failure])
            result = runner.invoke(app, ["refresh", config_file, "--strict"])

        assert result.exit_code == EXIT_CODE_FAIL

    def test_region_mismatch_fails(self, config_file, mock_boto3):
        mock_boto3.session.Session.return_value.region_name = "us-west-2"
        result = runner.invoke(app, ["refresh", config_file])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "us-west-2" in result.output


class TestSchedule:
    """Test the schedule command."""

    def test_schedule_runs_scheduler(self, config_file):
        with patch("bedrock_quota_dashboards.cli.main._build_fetcher") as build, \
                patch("bedrock_quota_dashboards.cli.main.quota_scheduler") as scheduler:
            scheduler.return_value = True
            result = runner.invoke(app, ["schedule", config_file])

        assert result.exit_code == EXIT_CODE_PASS
        args = scheduler.call_args[0]
        assert args[0] is build.return_value
        assert len(args[1]) == 2
        assert args[2] == 174


class TestCodes:
    """Test the codes command."""

    def test_list_and_save(self, temp_dir):
        output = os.path.join(temp_dir, "codes.txt")
        with patch("bedrock_quota_dashboards.cli.main.ServiceQuotasLimits") as limits_class:
            limits_class.return_value.list_limits.return_value = [
                QuotaLimit("L-1", "Tokens per minute", 400000.0),
                QuotaLimit("L-2", "Requests per minute", 200.0),
            ]
            result = runner.invoke(app, ["codes", "--region", "us-west-2", "--output", output])

        assert result.exit_code == EXIT_CODE_PASS
        limits_class.assert_called_once_with(region_name="us-west-2")
        assert "Found 2 total Bedrock quotas" in result.output
        with open(output, encoding="utf-8") as f:
            text = f.read()
        assert "Bedrock Service Quotas for region: us-west-2" in text
        assert "L-2" in text

    def test_aws_error_fails(self):
        from botocore.exceptions import NoCredentialsError

        with patch("bedrock_quota_dashboards.cli.main.ServiceQuotasLimits") as limits_class:
            limits_class.return_value.list_limits.side_effect = NoCredentialsError()
            result = runner.invoke(app, ["codes", "--region", "us-east-1"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "AWS credentials configured" in result.output


class TestEstimate:
    """Test the estimate command."""

    def test_estimate_from_local_store(self, config_file, temp_dir):
        db_path = os.path.join(temp_dir, "metrics.db")
        store = SqliteMetricsStore(db_path)
        now = datetime.now(timezone.utc)
        dims = {"ModelId": "amazon.nova-lite-v1:0"}
        store.put_value("AWS/Bedrock", "InputTokenCount", dims, 1000, now)
        store.put_value("AWS/Bedrock", "OutputTokenCount", dims, 100, now)
        store.put_value("Bedrock/Quotas", "TokenQuota", dims, 10000, now)

        result = runner.invoke(
            app, ["estimate", config_file, "--db", db_path, "--minutes", "10"],
            env={"COLUMNS": "200"},
        )

        assert result.exit_code == EXIT_CODE_PASS
        assert "Estimated Quota Consumption" in result.output
        assert "1,100" in result.output

    def test_estimate_without_data(self, config_file, temp_dir):
        db_path = os.path.join(temp_dir, "metrics.db")
        result = runner.invoke(app, ["estimate", config_file, "--db", db_path])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No usage data found" in result.output

    def test_invalid_minutes(self, config_file):
        result = runner.invoke(app, ["estimate", config_file, "--minutes", "0"])
        assert result.exit_code == EXIT_CODE_FAIL
