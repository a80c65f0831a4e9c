"""
Configuration module for the Value Pipeline.

Environment-driven settings for the Producer, Processor and Consumer
services.
"""

from .settings import (
    ConfigurationError,
    ConsumerSettings,
    ProcessorSettings,
    ProducerSettings,
    ServiceSettings,
    configure_logging,
)

__all__ = [
    "ConfigurationError",
    "ConsumerSettings",
    "ProcessorSettings",
    "ProducerSettings",
    "ServiceSettings",
    "configure_logging",
]
