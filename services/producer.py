"""
Producer service for the Value Pipeline.

Leaf service of the pipeline: every GET /data returns a fresh random
integer in the closed range [1, 100].
"""

import logging
import random
import sys
from typing import Optional

import uvicorn
from config.settings import ConfigurationError, ProducerSettings, configure_logging
from fastapi import FastAPI
from models.message import DataMessage, HealthMessage

VALUE_MIN = 1
VALUE_MAX = 100


class ProducerService:
    """Random value generator."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Fixed seed for reproducible output; None seeds from the OS
        """
        self.logger = logging.getLogger("service.producer")
        self._random = random.Random(seed)

    def generate(self) -> DataMessage:
        """Generate a value uniformly from [VALUE_MIN, VALUE_MAX]."""
        value = self._random.randint(VALUE_MIN, VALUE_MAX)
        self.logger.info(f"Generated: {value}")
        return DataMessage(value=value)


def create_app(service: Optional[ProducerService] = None) -> FastAPI:
    """Create the Producer FastAPI application."""
    producer = service or ProducerService()

    app = FastAPI(title="Producer", version="1.0.0")
    app.state.producer = producer

    @app.get("/data", response_model=DataMessage)
    async def get_data() -> DataMessage:
        """Return a freshly generated value."""
        return producer.generate()

    @app.get("/health", response_model=HealthMessage)
    async def health_check() -> HealthMessage:
        """Health check endpoint."""
        return HealthMessage(service="producer")

    return app


def main() -> None:
    """Run the Producer service."""
    try:
        settings = ProducerSettings.from_env()
    except ConfigurationError as e:
        configure_logging()
        logging.getLogger("service.producer").error(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)
    logger = logging.getLogger("service.producer")
    logger.info("Producer starting...")
    logger.info(f"Listening on http://{settings.host}:{settings.port}")

    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
