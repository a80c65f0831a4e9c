"""
Processor Poller worker for the Value Pipeline.

Runs inside the Consumer service and calls the Processor on a fixed
interval, logging every result. Upstream failures are logged and the loop
carries on with the next interval.
"""

from typing import Optional

from clients.upstream import UpstreamClient, UpstreamError
from models.message import ProcessedMessage

from workers.base import BaseWorker


class ProcessorPoller(BaseWorker):
    """
    Background worker that polls the Processor's /process endpoint.

    The first poll happens after ``start_delay`` seconds, then one poll
    every ``interval`` seconds until the worker is stopped.
    """

    def __init__(self, processor: UpstreamClient, interval: float = 5.0, start_delay: float = 1.0):
        """
        Initialize the poller.

        Args:
            processor: Client for the Processor service
            interval: Seconds between polls
            start_delay: Seconds to wait before the first poll
        """
        super().__init__("processor_poller")

        self.processor = processor
        self.interval = interval
        self.start_delay = start_delay

        self.poll_count = 0
        self.failure_count = 0

    async def run(self) -> None:
        if await self.wait_or_stop(self.start_delay):
            return

        while not self.stop_requested:
            await self.poll_once()
            if await self.wait_or_stop(self.interval):
                break

    async def poll_once(self) -> Optional[ProcessedMessage]:
        """
        Call the Processor once and log the outcome.

        Returns:
            The processed message, or None if the call failed
        """
        self.poll_count += 1
        try:
            result = await self.processor.get_model("/process", ProcessedMessage)
        except UpstreamError as e:
            self.failure_count += 1
            self.logger.error(f"Failed to call Processor service: {e}")
            return None
        except Exception as e:
            self.failure_count += 1
            self.logger.exception(f"Consumption error: {e}")
            return None

        self.logger.info(f"[CONSUME] Original: {result.original}, Processed: {result.processed}")
        return result
