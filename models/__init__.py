"""
Models module for the Value Pipeline.

This package contains the message payloads exchanged between the
Producer, Processor and Consumer services.
"""

from .message import DataMessage, ErrorMessage, HealthMessage, ProcessedMessage

__all__ = [
    "DataMessage",
    "ErrorMessage",
    "HealthMessage",
    "ProcessedMessage",
]
