"""
Unified configuration state.

Single source of truth for store location, HTTP, workflow and logging
settings: YAML files with environment overrides, type validation and
defaults that match a local Edge Data Store install.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from eds_analytics.transport.config import HttpClientConfig, StoreEndpoint

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class StoreConfig(BaseModel):
    """Where the store lives and which tenant/namespace to use."""

    scheme: str = Field(default="http")
    host: str = Field(default="localhost")
    port: int = Field(default=5590, ge=1, le=65535)
    api_version: str = Field(default="v1")
    tenant_id: str = Field(default="default", min_length=1)
    namespace_id: str = Field(default="default", min_length=1)

    @field_validator("scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        if v not in ("http", "https"):
            raise ValueError("Store scheme must be http or https")
        return v

    class Config:
        extra = "allow"

    def to_endpoint(self) -> StoreEndpoint:
        return StoreEndpoint(
            host=self.host,
            port=self.port,
            scheme=self.scheme,
            api_version=self.api_version,
            tenant_id=self.tenant_id,
            namespace_id=self.namespace_id,
        )


class HttpConfig(BaseModel):
    """HTTP client tuning."""

    timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)

    class Config:
        extra = "allow"

    def to_client_config(self) -> HttpClientConfig:
        return HttpClientConfig(
            timeout=self.timeout, connect_timeout=self.connect_timeout
        )


class WorkflowConfig(BaseModel):
    """Knobs of the analytics workflow."""

    event_count: int = Field(default=100, ge=1)
    lower_bound: float = Field(default=-0.9)
    upper_bound: float = Field(default=0.9)
    cleanup_on_failure: bool = Field(default=False)

    sine_type_id: str = Field(default="SineWave")
    aggregate_type_id: str = Field(default="AggregatedData")
    sine_stream_id: str = Field(default="SineWave")
    filtered_stream_id: str = Field(default="FilteredSineWave")
    calculated_stream_id: str = Field(default="CalculatedAggregatedData")
    remote_stream_id: str = Field(default="EdsApiAggregatedData")

    @model_validator(mode="after")
    def validate_bounds(self) -> "WorkflowConfig":
        if self.lower_bound > self.upper_bound:
            raise ValueError("lower_bound must not exceed upper_bound")
        return self

    class Config:
        extra = "allow"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    class Config:
        extra = "allow"


class ConfigState(BaseModel):
    """Root configuration state."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")

    class Config:
        extra = "allow"


# =============================================================================
# CONFIG LOADER
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration from YAML files.

    Merges:
      1. Defaults (model fields)
      2. eds.yaml from config_dir
      3. env/{EDS_ENV}.yaml
      4. Environment variable overrides
    """

    def __init__(self, config_dir: str = "./config"):
        self.config_dir = Path(config_dir)
        self.env = os.getenv("EDS_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        store_overrides = {
            "EDS_HOST": "host",
            "EDS_PORT": "port",
            "EDS_TENANT_ID": "tenant_id",
            "EDS_NAMESPACE_ID": "namespace_id",
        }
        for env_var, key in store_overrides.items():
            if value := os.getenv(env_var):
                config.setdefault("store", {})[key] = value

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Raises:
            ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config = self._load_yaml(self.config_dir / "eds.yaml")
        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)
        config = self._apply_env_overrides(config)

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        logger.info(
            f"Configuration loaded: store={state.store.host}:{state.store.port} "
            f"tenant={state.store.tenant_id} namespace={state.store.namespace_id}"
        )
        return state


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to $EDS_CONFIG_DIR or ./config
    """
    if config_dir is None:
        config_dir = os.getenv("EDS_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    return ConfigLoader(config_dir=config_dir).load()


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "HttpConfig",
    "LoggingConfig",
    "StoreConfig",
    "WorkflowConfig",
    "get_config",
]
