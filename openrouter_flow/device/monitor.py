# openrouter_flow/device/monitor.py

import asyncio
from typing import Optional

from ..llm.client import OpenRouterClient
from ..llm.errors import Unavailable
from ..utils.logger import get_logger
from .interfaces import CredentialSource, StatusSink

logger = get_logger(__name__)

PROBE_INTERVAL = 5 * 60  # seconds


class StatusMonitor:
    """
    Periodically probes OpenRouter and publishes the online flag and the
    remaining credits to a StatusSink.

    Probes never raise. A failed balance probe leaves the last published
    value in place.
    """

    def __init__(
            self,
            client: OpenRouterClient,
            credentials: CredentialSource,
            sink: StatusSink,
            interval: float = PROBE_INTERVAL,
    ):
        self.client = client
        self.credentials = credentials
        self.sink = sink
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _publish_online(self, online: bool):
        try:
            self.sink.set_online(online)
        except Exception as e:
            logger.error(f"Could not publish status: {e}")

    def _publish_credits(self, remaining: float):
        try:
            self.sink.set_credits(remaining)
        except Exception as e:
            logger.error(f"Could not publish credits: {e}")

    async def check_api_status(self) -> bool:
        try:
            online = await self.client.check_status(self.credentials.api_key)
        except Exception as e:
            logger.error(f"API status check failed: {e}")
            online = False

        self._publish_online(online)
        return online

    async def check_credits(self) -> Optional[float]:
        api_key = self.credentials.api_key
        if not api_key:
            return None

        try:
            credits = await self.client.get_credits(api_key)
        except Unavailable:
            logger.info("Credits endpoint not available")
            return None
        except Exception as e:
            logger.error(f"Credits check failed: {e}")
            return None

        self._publish_credits(credits.remaining)
        return credits.remaining

    async def refresh(self):
        await self.check_api_status()
        await self.check_credits()

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            await self.refresh()

    def start(self) -> asyncio.Task:
        """Schedule the periodic probes on the running loop. Returns the task handle."""
        if not self.running:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self):
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
