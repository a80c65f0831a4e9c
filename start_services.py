#!/usr/bin/env python3
"""
Start all services of the Value Pipeline in one process.

This script runs the Producer, Processor and Consumer side by side on their
configured ports, with upstream hosts pointed at the local machine, so the
whole pipeline can be tried without containers.
"""

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from typing import Iterator, List, Optional, Sequence

import uvicorn
from config.settings import ConfigurationError, ConsumerSettings, ProcessorSettings, ProducerSettings, configure_logging
from services.consumer import create_app as create_consumer_app
from services.processor import create_app as create_processor_app
from services.producer import create_app as create_producer_app

logger = logging.getLogger("start_services")


class ManagedServer(uvicorn.Server):
    """uvicorn server whose signals are handled by the ServiceManager."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class ServiceManager:
    """Manages the three services for a local run."""

    def __init__(
        self,
        producer: ProducerSettings,
        processor: ProcessorSettings,
        consumer: ConsumerSettings,
    ):
        self.producer = producer
        self.processor = processor
        self.consumer = consumer

        self.servers: List[ManagedServer] = [
            self._make_server("producer", create_producer_app(), producer.host, producer.port),
            self._make_server("processor", create_processor_app(processor), processor.host, processor.port),
            self._make_server("consumer", create_consumer_app(consumer), consumer.host, consumer.port),
        ]

    @staticmethod
    def _make_server(name: str, app, host: str, port: int) -> ManagedServer:
        server = ManagedServer(uvicorn.Config(app, host=host, port=port, log_level="warning"))
        logger.info(f"Prepared {name} on http://{host}:{port}")
        return server

    def stop_all(self) -> None:
        """Ask every server to exit."""
        logger.info("Stopping all services...")
        for server in self.servers:
            server.should_exit = True

    async def run_forever(self) -> None:
        """Serve until every server has exited."""
        logger.info(f"Starting {len(self.servers)} services...")
        await asyncio.gather(*(server.serve() for server in self.servers))
        logger.info("All services stopped")


def build_manager(args: argparse.Namespace) -> ServiceManager:
    """Build settings for a local run from the environment and CLI overrides."""
    producer = ProducerSettings.from_env().override(port=args.producer_port)
    processor = ProcessorSettings.from_env().override(
        port=args.processor_port, producer_host=args.host, producer_port=producer.port
    )
    consumer_overrides = {"port": args.consumer_port, "processor_host": args.host, "processor_port": processor.port}
    if args.poll_interval is not None:
        consumer_overrides["poll_interval_seconds"] = args.poll_interval
    consumer = ConsumerSettings.from_env().override(**consumer_overrides)
    return ServiceManager(producer, processor, consumer)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Value Pipeline services locally")
    parser.add_argument("--host", default="127.0.0.1", help="Host the services use to reach each other")
    parser.add_argument("--producer-port", type=int, default=8080, help="Producer port")
    parser.add_argument("--processor-port", type=int, default=8081, help="Processor port")
    parser.add_argument("--consumer-port", type=int, default=8082, help="Consumer port")
    parser.add_argument("--poll-interval", type=int, default=None, help="Consumer poll interval in seconds")
    return parser.parse_args(argv)


async def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main function to start and manage all services."""
    args = parse_args(argv)
    manager = build_manager(args)

    # Handle SIGINT and SIGTERM
    if sys.platform != "win32":
        loop = asyncio.get_running_loop()
        for sig in [signal.SIGINT, signal.SIGTERM]:
            loop.add_signal_handler(sig, manager.stop_all)

    await manager.run_forever()


if __name__ == "__main__":
    configure_logging()
    try:
        asyncio.run(main())
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Goodbye!")
        sys.exit(0)
