"""
Environment-driven settings for the Value Pipeline services.

Every service reads its configuration from environment variables so it can
run anywhere (local, Docker, Kubernetes) without code changes. Values are
validated with pydantic; an invalid value raises ConfigurationError.
"""

import logging
import os
from typing import ClassVar, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Raised when the environment holds an invalid setting."""


class ServiceSettings(BaseModel):
    """Settings shared by every service."""

    # Maps model field -> environment variable
    ENV_VARS: ClassVar[Dict[str, str]] = {
        "port": "PORT",
        "log_level": "LOG_LEVEL",
    }

    port: int = Field(ge=1, le=65535, description="Listening port")
    host: str = Field(default="0.0.0.0", description="Bind address")
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Validated settings instance
        """
        environ = os.environ if environ is None else environ
        values = {field: environ[var] for field, var in cls.ENV_VARS.items() if var in environ}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {cls.__name__} configuration: {e}") from e

    def override(self, **changes):
        """Return a validated copy with the given fields replaced."""
        try:
            return type(self)(**{**self.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {type(self).__name__} override: {e}") from e


class UpstreamSettings(ServiceSettings):
    """Settings for services that call another service."""

    ENV_VARS: ClassVar[Dict[str, str]] = {
        **ServiceSettings.ENV_VARS,
        "upstream_timeout": "UPSTREAM_TIMEOUT_SECONDS",
    }

    upstream_timeout: float = Field(default=5.0, gt=0, description="Outbound call timeout in seconds")


class ProducerSettings(ServiceSettings):
    """Producer configuration."""

    port: int = Field(default=8080, ge=1, le=65535)


class ProcessorSettings(UpstreamSettings):
    """Processor configuration."""

    ENV_VARS: ClassVar[Dict[str, str]] = {
        **UpstreamSettings.ENV_VARS,
        "producer_host": "PRODUCER_HOST",
        "producer_port": "PRODUCER_PORT",
    }

    port: int = Field(default=8081, ge=1, le=65535)
    producer_host: str = Field(default="producer", min_length=1)
    producer_port: int = Field(default=8080, ge=1, le=65535)

    @property
    def producer_url(self) -> str:
        return f"http://{self.producer_host}:{self.producer_port}"


class ConsumerSettings(UpstreamSettings):
    """Consumer configuration."""

    ENV_VARS: ClassVar[Dict[str, str]] = {
        **UpstreamSettings.ENV_VARS,
        "processor_host": "PROCESSOR_HOST",
        "processor_port": "PROCESSOR_PORT",
        "poll_interval_seconds": "POLL_INTERVAL_SECONDS",
    }

    port: int = Field(default=8082, ge=1, le=65535)
    processor_host: str = Field(default="processor", min_length=1)
    processor_port: int = Field(default=8081, ge=1, le=65535)
    poll_interval_seconds: int = Field(default=5, gt=0)
    start_delay_seconds: float = Field(default=1.0, ge=0)

    @property
    def processor_url(self) -> str:
        return f"http://{self.processor_host}:{self.processor_port}"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for a service process."""
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
