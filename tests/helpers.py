"""
Test helpers for simulating upstream services.

Handlers here plug into httpx.MockTransport so no test needs a real
network listener.
"""

from typing import Callable, List

import httpx

Handler = Callable[[httpx.Request], httpx.Response]

PROCESSED_BODY = b'{"original": 21, "processed": 42}'


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Handler):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


def json_response(payload, status_code: int = 200) -> Handler:
    """Handler that always answers with the given JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return handler


def raw_response(body: bytes, status_code: int = 200) -> Handler:
    """Handler that always answers with the given raw body."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body, headers={"content-type": "application/json"})

    return handler


def refused(request: httpx.Request) -> httpx.Response:
    """Handler simulating a closed port."""
    raise httpx.ConnectError("Connection refused", request=request)


def timed_out(request: httpx.Request) -> httpx.Response:
    """Handler simulating an upstream that never answers."""
    raise httpx.ReadTimeout("Read timed out", request=request)


def undecodable(request: httpx.Request) -> httpx.Response:
    """Handler answering 200 with a body that does not match its gzip encoding."""
    return httpx.Response(
        200,
        content=b"not gzip at all",
        headers={"content-type": "application/json", "content-encoding": "gzip"},
    )
