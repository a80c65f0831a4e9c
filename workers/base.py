"""
Base Worker Framework for the Value Pipeline.

This module provides the foundation for long-lived background tasks that
run alongside a service's HTTP handlers, with explicit start/stop control.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional


class BaseWorker(ABC):
    """Base class for background workers."""

    def __init__(self, name: str) -> None:
        """
        Initialize the base worker.

        Args:
            name: Worker name (used for the logger name)
        """
        self.name: str = name

        # Setup logging
        self.logger: logging.Logger = logging.getLogger(f"worker.{name}")

        # Runtime state
        self._running: bool = False
        self._task: Optional[asyncio.Task[None]] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Spawn the worker task."""
        if self._running:
            self.logger.warning("Worker already running")
            return

        self._stop_event = asyncio.Event()
        self._running = True
        self._task = asyncio.create_task(self._run_wrapper(), name=f"worker.{self.name}")
        self.logger.info(f"Worker '{self.name}' started")

    async def stop(self) -> None:
        """Signal the worker to stop and wait for its task to finish."""
        if self._task is None:
            return

        self.logger.info(f"Stopping worker '{self.name}'")
        self._stop_event.set()

        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None

        self.logger.info(f"Worker '{self.name}' stopped")

    async def _run_wrapper(self) -> None:
        try:
            await self.run()
        except Exception as e:
            self.logger.error(f"Worker '{self.name}' crashed: {e}")
            raise
        finally:
            self._running = False

    async def wait_or_stop(self, seconds: float) -> bool:
        """
        Sleep for the given time unless a stop is requested first.

        Returns:
            True if the worker was asked to stop
        """
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    @abstractmethod
    async def run(self) -> None:
        """Body of the worker; must return once a stop is requested."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', running={self._running})"
