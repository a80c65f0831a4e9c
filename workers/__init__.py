"""
Worker modules for the Value Pipeline.

This package contains the background workers that run alongside the
HTTP services.
"""

from .base import BaseWorker
from .processor_poller import ProcessorPoller

__all__ = [
    "BaseWorker",
    "ProcessorPoller",
]
