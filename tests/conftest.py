"""
Pytest configuration and shared fixtures for Value Pipeline tests.

This module provides the simulated upstream transports and client
factories used across the unit and integration tests.
"""

import httpx
import pytest
from clients.upstream import UpstreamClient

from tests.helpers import PROCESSED_BODY, RecordingTransport, json_response, raw_response, refused


@pytest.fixture
def producer_transport():
    """Producer returning a fixed value of 21."""
    return RecordingTransport(json_response({"value": 21}))


@pytest.fixture
def processor_transport():
    """Processor returning a fixed, valid processed message."""
    return RecordingTransport(raw_response(PROCESSED_BODY))


@pytest.fixture
def refused_transport():
    """Transport whose upstream is down."""
    return RecordingTransport(refused)


@pytest.fixture
def make_client():
    """Factory for UpstreamClient instances bound to a transport."""

    def factory(transport: httpx.AsyncBaseTransport, service: str = "processor") -> UpstreamClient:
        return UpstreamClient(service, f"http://{service}:8081", timeout=1.0, transport=transport)

    return factory
