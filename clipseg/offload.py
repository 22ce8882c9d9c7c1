"""Placement of segmentation work on a background executor."""

import asyncio
import logging
from concurrent.futures import BrokenExecutor, Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable

from .config import OffloadConfig, SegmentationOptions
from .exceptions import OffloadTimeout, OffloadUnavailable

logger = logging.getLogger(__name__)

SegmentFn = Callable[[str], list[str]]


class OffloadScheduler:
    """Runs large inputs on a worker executor and small ones inline.

    Any worker problem falls back to running the synchronous function, so
    the caller always gets the same result it would have gotten inline. If
    the executor cannot be created or breaks, offload is switched off for
    the lifetime of the scheduler.
    """

    def __init__(self, config: OffloadConfig | None = None):
        self.config = config or OffloadConfig()
        self.available = True
        self._executor: Executor | None = None

    def should_offload(self, text: str, options: SegmentationOptions) -> bool:
        return (
            self.available
            and options.offload_enabled
            and len(text) > options.offload_threshold
        )

    async def run(
        self,
        text: str,
        options: SegmentationOptions,
        sync_fn: SegmentFn,
        worker_fn: SegmentFn | None = None,
    ) -> list[str]:
        """Segment text either inline or on the worker executor.

        Args:
            text: Input text
            options: Call options; decide whether offload applies
            sync_fn: Inline segmentation function
            worker_fn: Function sent to the worker, defaults to sync_fn.
                Must be picklable for the process executor.

        Returns:
            The segments produced by whichever path completed
        """
        if not self.should_offload(text, options):
            return sync_fn(text)

        try:
            return await self._run_in_worker(worker_fn or sync_fn, text)
        except OffloadTimeout as e:
            logger.warning(f"{e}; segmenting synchronously")
        except OffloadUnavailable as e:
            logger.warning(f"Offload disabled: {e}")
            self.available = False
            self.shutdown()
        except Exception:
            logger.exception("Worker failed; segmenting synchronously")
        return sync_fn(text)

    async def _run_in_worker(self, fn: SegmentFn, text: str) -> list[str]:
        executor = self._get_executor()
        loop = asyncio.get_running_loop()
        try:
            future = loop.run_in_executor(executor, fn, text)
        except (BrokenExecutor, RuntimeError) as e:
            raise OffloadUnavailable(f"cannot submit to executor: {e}") from e

        try:
            return await asyncio.wait_for(future, timeout=self.config.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise OffloadTimeout(
                f"Worker did not answer within {self.config.timeout_seconds}s"
            ) from e
        except BrokenExecutor as e:
            raise OffloadUnavailable(f"executor broke: {e}") from e

    def _get_executor(self) -> Executor:
        if self._executor is None:
            try:
                self._executor = self._create_executor()
            except (OSError, ValueError, NotImplementedError, ImportError) as e:
                raise OffloadUnavailable(f"cannot create {self.config.executor} executor: {e}") from e
            logger.debug(
                f"Started {self.config.executor} executor with {self.config.max_workers} worker(s)"
            )
        return self._executor

    def _create_executor(self) -> Executor:
        if self.config.executor == "thread":
            return ThreadPoolExecutor(max_workers=self.config.max_workers)
        return ProcessPoolExecutor(max_workers=self.config.max_workers)

    def shutdown(self) -> None:
        """Release the executor without waiting for running work."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
