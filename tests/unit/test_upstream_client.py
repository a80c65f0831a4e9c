"""
Unit tests for the upstream HTTP client.

Tests success paths and the mapping of transport failures, bad statuses
and malformed bodies onto UpstreamUnreachable and UpstreamBadResponse.
"""

import httpx
import pytest
from clients.upstream import UpstreamBadResponse, UpstreamClient, UpstreamError, UpstreamUnreachable
from models.message import DataMessage

from tests.helpers import RecordingTransport, json_response, raw_response, refused, timed_out, undecodable


def make_producer_client(handler) -> UpstreamClient:
    return UpstreamClient("producer", "http://producer:8080", timeout=1.0, transport=RecordingTransport(handler))


class TestUpstreamClient:
    """Test cases for UpstreamClient."""

    def test_client_initialization(self):
        """Test client attributes."""
        client = UpstreamClient("producer", "http://producer:8080")

        assert client.service == "producer"
        assert client.base_url == "http://producer:8080"
        assert client.timeout == 5.0
        assert client.transport is None
        assert repr(client) == "UpstreamClient(service='producer', base_url='http://producer:8080')"

    @pytest.mark.asyncio
    async def test_get_success(self):
        """Test a 200 response is returned as-is."""
        client = make_producer_client(json_response({"value": 3}))

        response = await client.get("/data")

        assert response.status_code == 200
        assert response.json() == {"value": 3}

    @pytest.mark.asyncio
    async def test_get_uses_base_url(self):
        """Test requests target the configured host, port and path."""
        transport = RecordingTransport(json_response({"value": 3}))
        client = UpstreamClient("producer", "http://10.1.2.3:18080", transport=transport)

        await client.get("/data")

        assert len(transport.requests) == 1
        request = transport.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "http://10.1.2.3:18080/data"

    @pytest.mark.asyncio
    async def test_get_model_success(self):
        """Test parsing a successful body into a model."""
        client = make_producer_client(json_response({"value": 99}))

        message = await client.get_model("/data", DataMessage)

        assert message == DataMessage(value=99)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        """Test connection errors raise UpstreamUnreachable."""
        client = make_producer_client(refused)

        with pytest.raises(UpstreamUnreachable) as exc_info:
            await client.get("/data")

        assert exc_info.value.service == "producer"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test timeouts raise UpstreamUnreachable."""
        client = make_producer_client(timed_out)

        with pytest.raises(UpstreamUnreachable):
            await client.get("/data")

    @pytest.mark.asyncio
    async def test_non_200_status(self):
        """Test a non-200 status raises UpstreamBadResponse."""
        client = make_producer_client(json_response({"error": "boom"}, status_code=503))

        with pytest.raises(UpstreamBadResponse, match="status 503"):
            await client.get("/data")

    @pytest.mark.asyncio
    async def test_redirect_is_not_success(self):
        """Test a 3xx status is treated as a bad response."""
        client = make_producer_client(raw_response(b"", status_code=302))

        with pytest.raises(UpstreamBadResponse):
            await client.get("/data")

    @pytest.mark.asyncio
    async def test_unparseable_body(self):
        """Test a non-JSON body raises UpstreamBadResponse."""
        client = make_producer_client(raw_response(b"<html>oops</html>"))

        with pytest.raises(UpstreamBadResponse, match="malformed body"):
            await client.get_model("/data", DataMessage)

    @pytest.mark.asyncio
    async def test_wrong_shape_body(self):
        """Test a JSON body without the expected field raises UpstreamBadResponse."""
        client = make_producer_client(json_response({"number": 4}))

        with pytest.raises(UpstreamBadResponse):
            await client.get_model("/data", DataMessage)

    @pytest.mark.asyncio
    async def test_undecodable_body(self):
        """Test a body that does not match its Content-Encoding raises UpstreamBadResponse."""
        client = make_producer_client(undecodable)

        with pytest.raises(UpstreamBadResponse, match="could not be decoded") as exc_info:
            await client.get("/data")

        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    def test_error_hierarchy(self):
        """Test both error kinds share the UpstreamError base."""
        assert issubclass(UpstreamUnreachable, UpstreamError)
        assert issubclass(UpstreamBadResponse, UpstreamError)

        error = UpstreamBadResponse("processor", "GET /process returned status 500")
        assert str(error) == "processor: GET /process returned status 500"
        assert error.reason == "GET /process returned status 500"
