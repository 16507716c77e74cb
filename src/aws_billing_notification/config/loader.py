"""Configuration loader for AWS Billing Notification."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from aws_billing_notification.config.schema import Config
from aws_billing_notification.errors import ConfigurationError


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir() -> Path:
    """Find the config directory, searching up from current directory."""
    if config_dir := os.environ.get("CONFIG_DIR"):
        return Path(config_dir)

    current = Path.cwd()
    while current != current.parent:
        config_path = current / "config"
        if config_path.is_dir():
            return config_path
        current = current.parent

    return Path("config")


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")
    return data


def load_config(
    config_path: str | Path | None = None,
    environment: str | None = None,
) -> Config:
    """
    Load configuration from YAML files.

    Loads config.yaml as base, then merges environment-specific overrides
    (e.g., config.dev.yaml, config.prod.yaml). Missing files are fine; the
    schema defaults apply.

    Args:
        config_path: Path to config directory. If None, searches for config/ directory.
        environment: Environment name (dev, staging, prod). If None, uses CONFIG_ENV
                    environment variable or defaults to 'dev'.

    Returns:
        Config: Validated configuration object.

    Raises:
        ConfigurationError: If the files or values are invalid.
    """
    config_dir = Path(config_path) if config_path else _find_config_dir()
    environment = environment or os.environ.get("CONFIG_ENV", "dev")

    config_data: dict = {}

    base_config_path = config_dir / "config.yaml"
    if base_config_path.exists():
        config_data = _read_yaml(base_config_path)

    env_config_path = config_dir / f"config.{environment}.yaml"
    if env_config_path.exists():
        config_data = _deep_merge(config_data, _read_yaml(env_config_path))

    config_data = _apply_env_overrides(config_data)
    config_data["environment"] = environment

    try:
        config = Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", cause=e) from e

    _check_required(config)
    return config


def _apply_env_overrides(config_data: dict) -> dict:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        "AWS_REGION": ("aws", "region"),
        "BILLING_METRICS_REGION": ("aws", "metrics_region"),
        "WEBHOOK_PARAMETER_NAME": ("webhook", "parameter_name"),
        "BILLING_MAX_WORKERS": ("collection", "max_workers"),
    }

    for env_var, path in env_mappings.items():
        if value := os.environ.get(env_var):
            current = config_data
            for key in path[:-1]:
                current = current.setdefault(key, {})

            final_key = path[-1]
            if final_key in ("max_workers",):
                try:
                    current[final_key] = int(value)
                except ValueError as e:
                    raise ConfigurationError(
                        f"{env_var} must be an integer, got {value!r}", cause=e
                    ) from e
            else:
                current[final_key] = value

    return config_data


def _check_required(config: Config) -> None:
    if not config.aws.region.strip():
        raise ConfigurationError("aws.region is empty")
    if not config.aws.metrics_region.strip():
        raise ConfigurationError("aws.metrics_region is empty")
    if not config.webhook.parameter_name.strip():
        raise ConfigurationError("webhook.parameter_name is empty")


@lru_cache(maxsize=1)
def get_cached_config() -> Config:
    """
    Get cached configuration singleton.

    Useful for Lambda handlers to avoid re-loading config on warm starts.
    """
    return load_config()
