"""Tests for the offload scheduler."""

import asyncio
import threading
import time

from clipseg.config import OffloadConfig, SegmentationOptions
from clipseg.offload import OffloadScheduler

LARGE = SegmentationOptions(offload_enabled=True, offload_threshold=3)


def tag_thread(text):
    return [text, threading.current_thread().name]


def sync_result(text):
    return [text, "sync"]


class TestOffloadScheduler:
    """Tests for OffloadScheduler."""

    def test_small_input_runs_inline(self):
        """Input at or below the threshold never reaches the executor."""
        scheduler = OffloadScheduler(OffloadConfig(executor="thread"))
        options = SegmentationOptions(offload_threshold=100)
        result = asyncio.run(scheduler.run("short", options, tag_thread))
        assert result == ["short", threading.current_thread().name]
        assert scheduler._executor is None

    def test_disabled_runs_inline(self):
        """offload_enabled=False runs inline whatever the size."""
        scheduler = OffloadScheduler(OffloadConfig(executor="thread"))
        options = SegmentationOptions(offload_enabled=False, offload_threshold=0)
        result = asyncio.run(scheduler.run("text", options, tag_thread))
        assert result[1] == threading.current_thread().name

    def test_large_input_offloaded(self):
        """Input above the threshold runs on the worker executor."""
        scheduler = OffloadScheduler(OffloadConfig(executor="thread"))
        try:
            result = asyncio.run(scheduler.run("large text", LARGE, tag_thread))
        finally:
            scheduler.shutdown()
        assert result[0] == "large text"
        assert result[1] != threading.current_thread().name

    def test_timeout_falls_back(self, caplog):
        """A worker slower than the timeout is replaced by the inline path."""

        def slow(text):
            time.sleep(0.5)
            return ["slow"]

        scheduler = OffloadScheduler(OffloadConfig(executor="thread", timeout_seconds=0.05))
        try:
            result = asyncio.run(scheduler.run("large text", LARGE, sync_result, slow))
        finally:
            scheduler.shutdown()
        assert result == ["large text", "sync"]
        assert scheduler.available
        assert "did not answer" in caplog.text

    def test_worker_error_falls_back(self):
        """A worker exception is logged and the inline path answers."""

        def boom(text):
            raise RuntimeError("boom")

        scheduler = OffloadScheduler(OffloadConfig(executor="thread"))
        try:
            result = asyncio.run(scheduler.run("large text", LARGE, sync_result, boom))
        finally:
            scheduler.shutdown()
        assert result == ["large text", "sync"]
        assert scheduler.available

    def test_unavailable_disables_offload(self):
        """Failing to create the executor switches offload off for good."""

        class NoExecutorScheduler(OffloadScheduler):
            attempts = 0

            def _create_executor(self):
                self.attempts += 1
                raise OSError("no workers here")

        scheduler = NoExecutorScheduler(OffloadConfig(executor="thread"))
        first = asyncio.run(scheduler.run("large text", LARGE, sync_result))
        second = asyncio.run(scheduler.run("large text", LARGE, sync_result))

        assert first == second == ["large text", "sync"]
        assert not scheduler.available
        assert scheduler.attempts == 1
