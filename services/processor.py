"""
Processor service for the Value Pipeline.

Middle tier of the pipeline: every GET /process fetches a value from the
Producer, doubles it and returns both numbers.
"""

import logging
import sys
from typing import Optional

import httpx
import uvicorn
from clients.upstream import UpstreamClient, UpstreamError
from config.settings import ConfigurationError, ProcessorSettings, configure_logging
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from models.message import DataMessage, ErrorMessage, HealthMessage, ProcessedMessage

PRODUCER_ERROR = "Failed to call Producer service"


class ProcessorService:
    """Fetches values from the Producer and doubles them."""

    def __init__(self, producer: UpstreamClient):
        self.producer = producer
        self.logger = logging.getLogger("service.processor")

    async def process(self) -> ProcessedMessage:
        """
        Fetch one value from the Producer and double it.

        Raises:
            UpstreamError: the Producer call failed
        """
        data = await self.producer.get_model("/data", DataMessage)
        result = ProcessedMessage.from_value(data.value)
        self.logger.info(f"Received: {result.original}, Processed: {result.processed}")
        return result


def create_app(
    settings: Optional[ProcessorSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create the Processor FastAPI application.

    Args:
        settings: Service settings; defaults are used when omitted
        transport: Optional httpx transport for calls to the Producer
    """
    settings = settings or ProcessorSettings()
    producer = UpstreamClient("producer", settings.producer_url, timeout=settings.upstream_timeout, transport=transport)
    processor = ProcessorService(producer)

    app = FastAPI(title="Processor", version="1.0.0")
    app.state.processor = processor

    @app.get(
        "/process",
        response_model=ProcessedMessage,
        responses={500: {"model": ErrorMessage}},
    )
    async def process():
        """Fetch a value from the Producer and return it doubled."""
        try:
            return await processor.process()
        except UpstreamError as e:
            processor.logger.error(f"Could not reach Producer: {e}")
            return JSONResponse(status_code=500, content=ErrorMessage(error=PRODUCER_ERROR).model_dump())

    @app.get("/health", response_model=HealthMessage)
    async def health_check() -> HealthMessage:
        """Health check endpoint."""
        return HealthMessage(service="processor")

    return app


def main() -> None:
    """Run the Processor service."""
    try:
        settings = ProcessorSettings.from_env()
    except ConfigurationError as e:
        configure_logging()
        logging.getLogger("service.processor").error(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)
    logger = logging.getLogger("service.processor")
    logger.info(f"Processor listening on port {settings.port}")
    logger.info(f"Producer URL: {settings.producer_url}")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
