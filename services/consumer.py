"""
Consumer service for the Value Pipeline.

Top tier of the pipeline. A background poller calls the Processor every
POLL_INTERVAL_SECONDS and logs the result; GET /consume performs the same
call on demand and GET /health reports liveness without touching upstream.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple

import httpx
import uvicorn
from clients.upstream import UpstreamClient, UpstreamError
from config.settings import ConfigurationError, ConsumerSettings, configure_logging
from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response
from models.message import ErrorMessage, HealthMessage, ProcessedMessage
from workers.processor_poller import ProcessorPoller

PROCESSOR_ERROR = "Failed to call Processor service"


class ConsumerService:
    """Manual trigger for a single Processor call."""

    def __init__(self, processor: UpstreamClient):
        self.processor = processor
        self.logger = logging.getLogger("service.consumer")

    async def consume(self) -> Tuple[ProcessedMessage, bytes]:
        """
        Call the Processor once.

        Returns:
            The parsed message and the raw response body

        Raises:
            UpstreamError: the Processor call failed
        """
        response = await self.processor.get("/process")
        result = self.processor.parse(response, ProcessedMessage)
        self.logger.info(f"[MANUAL] Original: {result.original}, Processed: {result.processed}")
        return result, response.content


def create_app(
    settings: Optional[ConsumerSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    enable_poller: bool = True,
) -> FastAPI:
    """
    Create the Consumer FastAPI application.

    The poller is started and stopped with the application lifespan.

    Args:
        settings: Service settings; defaults are used when omitted
        transport: Optional httpx transport for calls to the Processor
        enable_poller: Run the background poller during the lifespan
    """
    settings = settings or ConsumerSettings()
    processor = UpstreamClient("processor", settings.processor_url, timeout=settings.upstream_timeout, transport=transport)
    consumer = ConsumerService(processor)
    poller = ProcessorPoller(processor, interval=settings.poll_interval_seconds, start_delay=settings.start_delay_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if enable_poller:
            await poller.start()
            consumer.logger.info(f"Background consumption running every {settings.poll_interval_seconds} seconds")
        try:
            yield
        finally:
            await poller.stop()

    app = FastAPI(title="Consumer", version="1.0.0", lifespan=lifespan)
    app.state.consumer = consumer
    app.state.poller = poller

    @app.get(
        "/consume",
        response_class=Response,
        responses={200: {"model": ProcessedMessage}, 500: {"model": ErrorMessage}},
    )
    async def consume():
        """Call the Processor once and relay its body."""
        consumer.logger.info("[MANUAL] Consume endpoint called")
        try:
            _, body = await consumer.consume()
        except UpstreamError as e:
            consumer.logger.error(f"[MANUAL] Failed to call Processor service: {e}")
            return JSONResponse(status_code=500, content=ErrorMessage(error=PROCESSOR_ERROR).model_dump())

        return Response(content=body, media_type="application/json")

    @app.get("/health", response_model=HealthMessage)
    async def health_check() -> HealthMessage:
        """Health check endpoint."""
        return HealthMessage(service="consumer")

    return app


def main() -> None:
    """Run the Consumer service."""
    try:
        settings = ConsumerSettings.from_env()
    except ConfigurationError as e:
        configure_logging()
        logging.getLogger("service.consumer").error(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)
    logger = logging.getLogger("service.consumer")
    logger.info("Consumer starting...")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Processor URL: {settings.processor_url}")
    logger.info(f"  Poll interval: {settings.poll_interval_seconds}s")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
