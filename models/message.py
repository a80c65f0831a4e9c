"""
Message payload models for the Value Pipeline.

This module defines the JSON payloads exchanged between the Producer,
Processor and Consumer services. Every payload lives for a single request.
"""

from typing import Literal

from pydantic import BaseModel, Field, StrictInt, model_validator


class DataMessage(BaseModel):
    """Random value emitted by the Producer."""

    value: StrictInt = Field(description="Randomly generated value")


class ProcessedMessage(BaseModel):
    """Value returned by the Processor together with its doubled form."""

    original: StrictInt = Field(description="Value received from the Producer")
    processed: StrictInt = Field(description="Original value multiplied by two")

    @model_validator(mode="after")
    def check_doubled(self) -> "ProcessedMessage":
        if self.processed != self.original * 2:
            raise ValueError("processed must equal original * 2")
        return self

    @classmethod
    def from_value(cls, value: int) -> "ProcessedMessage":
        """Build a processed message by doubling the given value."""
        return cls(original=value, processed=value * 2)


class ErrorMessage(BaseModel):
    """Error body returned when an upstream call fails."""

    error: str = Field(description="Human readable error")


class HealthMessage(BaseModel):
    """Static health check body."""

    status: Literal["healthy"] = "healthy"
    service: str = Field(description="Service name")
