"""
Configuration management and loading.

Handles the dashboard YAML file: region selection, dashboard entries
and refresh settings.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

import yaml

from bedrock_quota_dashboards.constants import (
    DEFAULT_DASHBOARD_NAME,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PERIOD_SECONDS,
    DEFAULT_REFRESH_INTERVAL_MINUTES,
)
from bedrock_quota_dashboards.core.dashboard import DashboardEntry
from bedrock_quota_dashboards.core.registry import parse_endpoint_kind


@dataclass(frozen=True)
class DashboardConfig:
    """Complete dashboard configuration."""
    region: str
    entries: Tuple[DashboardEntry, ...]
    dashboard_name: str = DEFAULT_DASHBOARD_NAME
    refresh_interval_minutes: float = DEFAULT_REFRESH_INTERVAL_MINUTES
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    max_workers: int = DEFAULT_MAX_WORKERS
    period_seconds: int = DEFAULT_PERIOD_SECONDS

    def __post_init__(self):
        """Validate settings are in range."""
        if not self.region:
            raise ValueError("region cannot be empty")
        if not self.entries:
            raise ValueError("at least one dashboard entry is required")
        if not self.dashboard_name:
            raise ValueError("dashboard_name cannot be empty")
        if self.refresh_interval_minutes <= 0:
            raise ValueError("refresh_interval_minutes must be > 0")
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be > 0")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        if self.period_seconds <= 0 or self.period_seconds % 60:
            raise ValueError("period_seconds must be a positive multiple of 60")


def load_dashboard_config(path: str) -> DashboardConfig:
    """Load and validate dashboard configuration from YAML file.

    Only the file's shape is checked here. Whether each model supports
    its endpoint is checked against the region's registry when the
    dashboard plan is built.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated DashboardConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Dashboard config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {
        'region', 'dashboard_name', 'refresh_interval_minutes',
        'fetch_timeout_seconds', 'max_workers', 'period_seconds', 'entries',
    }
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    if 'region' not in raw_config:
        raise ValueError("Missing required 'region'")
    region = raw_config['region']
    if not isinstance(region, str) or not region.strip():
        raise ValueError("'region' must be a non-empty string")

    if 'entries' not in raw_config:
        raise ValueError("Missing required 'entries' section")
    entries_data = raw_config['entries']
    if not isinstance(entries_data, list) or not entries_data:
        raise ValueError("'entries' must be a non-empty list")

    entries = tuple(
        _parse_entry(entry_data, f"entries[{index}]")
        for index, entry_data in enumerate(entries_data)
    )

    settings = {}
    for key in ('refresh_interval_minutes', 'fetch_timeout_seconds'):
        if key in raw_config:
            settings[key] = _positive_number(raw_config[key], key)
    for key in ('max_workers', 'period_seconds'):
        if key in raw_config:
            value = raw_config[key]
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"'{key}' must be an integer")
            settings[key] = value
    if 'dashboard_name' in raw_config:
        name = raw_config['dashboard_name']
        if not isinstance(name, str) or not name.strip():
            raise ValueError("'dashboard_name' must be a non-empty string")
        settings['dashboard_name'] = name

    return DashboardConfig(region=region.strip(), entries=entries, **settings)


def _positive_number(value, key: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"'{key}' must be > 0")
    return float(value)


def _parse_entry(data: Dict, path: str) -> DashboardEntry:
    """Parse and validate one dashboard entry.

    Args:
        data: Entry configuration data
        path: Path for error messages

    Returns:
        DashboardEntry with a parsed endpoint kind

    Raises:
        ValueError: If the entry is invalid
    """
    if not isinstance(data, dict):
        raise ValueError(f"{path} must be a dictionary")

    allowed_keys = {'model', 'endpoint', 'auxiliary_model_ids'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {path}: {unknown_keys}")

    if 'model' not in data:
        raise ValueError(f"Missing required 'model' in {path}")
    model_key = data['model']
    if not isinstance(model_key, str) or not model_key.strip():
        raise ValueError(f"'model' in {path} must be a non-empty string")

    if 'endpoint' not in data:
        raise ValueError(f"Missing required 'endpoint' in {path}")
    endpoint = data['endpoint']
    if not isinstance(endpoint, str):
        raise ValueError(f"'endpoint' in {path} must be a string")
    try:
        endpoint_kind = parse_endpoint_kind(endpoint)
    except ValueError as e:
        raise ValueError(f"{path}: {e}")

    auxiliary = data.get('auxiliary_model_ids', [])
    if not isinstance(auxiliary, list) or not all(isinstance(a, str) for a in auxiliary):
        raise ValueError(f"'auxiliary_model_ids' in {path} must be a list of strings")

    return DashboardEntry(
        model=model_key.strip(),
        endpoint=endpoint_kind,
        auxiliary_model_ids=tuple(auxiliary),
    )
