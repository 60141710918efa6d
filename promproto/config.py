"""Configuration models using Pydantic for validation."""
from typing import Dict, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
import os


class GlobalConfig(BaseModel):
    """Global configuration settings."""
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"


class ServerConfig(BaseModel):
    """HTTP exposition server configuration."""
    host: str = "0.0.0.0"
    port: int = 8000
    path: str = "/metrics"

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        """Paths are absolute."""
        if not v.startswith("/"):
            raise ValueError(f"Server path must start with '/': {v}")
        return v


class FormatConfig(BaseModel):
    """Protobuf output configuration."""
    framing: Literal["family", "metric"] = "family"
    const_labels: Dict[str, str] = Field(default_factory=dict)


class SelfMetricsConfig(BaseModel):
    """Self-monitoring configuration."""
    enabled: bool = True
    prefix: str = "promproto_"


class Config(BaseModel):
    """Root configuration model."""
    model_config = ConfigDict(populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    server: ServerConfig = Field(default_factory=ServerConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)
    self_metrics: SelfMetricsConfig = Field(default_factory=SelfMetricsConfig)


def load_config(config_path: str) -> Config:
    """Load and validate configuration from YAML file."""
    import yaml

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    if env_port := os.getenv('PROMPROTO_PORT'):
        raw_config.setdefault('server', {})['port'] = env_port

    if env_log_level := os.getenv('LOG_LEVEL'):
        raw_config.setdefault('global', {})['log_level'] = env_log_level

    try:
        return Config(**raw_config)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
