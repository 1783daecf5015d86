import asyncio
import logging
from collections.abc import Iterable

import aiohttp

from .client import HttpClient
from .errors import ConfigError
from .models import AdvanceCallback, HttpGetter, RunConfig, RunSummary
from .throughput import ThroughputTracker
from .utils import build_url, is_incomplete, now

logger = logging.getLogger(__name__)

# Transport failures that stay inside one worker loop
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


class StressRunner:
    def __init__(
        self,
        targets: Iterable[str],
        config: RunConfig,
        client: HttpGetter | None = None,
        tracker: ThroughputTracker | None = None,
        on_advance: AdvanceCallback | None = None,
    ) -> None:
        self.targets = list(targets)
        self.config = config
        self.client = client
        self.tracker = tracker or ThroughputTracker()
        self.on_advance = on_advance

        # Runtime state
        self.attempts = 0
        self.tolerated_count = 0
        self.failure_count = 0

        logger.info(
            f"Initialized runner with {len(self.targets)} targets, "
            f"count={config.count}, base_url={config.base_url}"
        )

    # ────────────────────────────────
    # Single Attempt
    # ────────────────────────────────

    async def _attempt(self, url: str, worker_id: int) -> None:
        try:
            status = await self.client.get(url)
            logger.debug(f"[W{worker_id}] {url} -> {status}")
        except TRANSPORT_ERRORS as e:
            if not is_incomplete(e):
                self.failure_count += 1
                logger.error(f"[W{worker_id}] error: {url}: {e!r}")
                await asyncio.sleep(self.config.backoff_s)
                return
            self.tolerated_count += 1
            logger.debug(f"[W{worker_id}] Incomplete response from {url} counted as completed")

        self.tracker.record_completion()

    # ────────────────────────────────
    # Worker Loop
    # ────────────────────────────────

    async def _worker_loop(self, target: str, worker_id: int) -> int:
        logger.debug(f"[W{worker_id}] Starting {self.config.count} attempts for {target!r}")
        number = 0
        while number < self.config.count:
            url = build_url(self.config.base_url, target)
            await self._attempt(url, worker_id)
            number += 1
            self.attempts += 1
            if self.on_advance:
                self.on_advance()

        logger.debug(f"[W{worker_id}] Done after {number} attempts")
        return number

    # ────────────────────────────────
    # Dispatcher
    # ────────────────────────────────

    async def _dispatch(self) -> None:
        tasks = [
            asyncio.create_task(self._worker_loop(target, worker_id))
            for worker_id, target in enumerate(self.targets)
        ]
        try:
            await asyncio.gather(*tasks)
        except ConfigError:
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def run(self) -> RunSummary:
        logger.info("Starting stress run...")
        t0 = now()

        if self.client is None:
            async with HttpClient.from_config(self.config) as client:
                self.client = client
                try:
                    await self._dispatch()
                finally:
                    self.client = None
        else:
            await self._dispatch()

        summary = RunSummary(
            targets=len(self.targets),
            attempts=self.attempts,
            completions=self.tracker.total,
            tolerated=self.tolerated_count,
            failures=self.failure_count,
            elapsed_s=now() - t0,
        )
        logger.info(
            f"Run completed: {summary.completions} completions "
            f"({summary.tolerated} incomplete), {summary.failures} failures "
            f"in {summary.elapsed_s:.2f}s"
        )
        return summary
