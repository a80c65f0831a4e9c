"""
Services module for the Value Pipeline.

This package provides the Producer, Processor and Consumer HTTP services.
"""

from .consumer import ConsumerService
from .consumer import create_app as create_consumer_app
from .processor import ProcessorService
from .processor import create_app as create_processor_app
from .producer import ProducerService
from .producer import create_app as create_producer_app

__all__ = [
    "ProducerService",
    "create_producer_app",
    "ProcessorService",
    "create_processor_app",
    "ConsumerService",
    "create_consumer_app",
]
