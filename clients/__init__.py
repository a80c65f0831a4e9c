"""
Clients module for the Value Pipeline.

HTTP client used by services to call their upstream service.
"""

from .upstream import UpstreamBadResponse, UpstreamClient, UpstreamError, UpstreamUnreachable

__all__ = [
    "UpstreamClient",
    "UpstreamError",
    "UpstreamUnreachable",
    "UpstreamBadResponse",
]
