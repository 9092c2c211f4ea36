"""
Benchmark orchestration.

Runs a fixed number of rounds strictly one after another, after checking the
target volume has room for the transient artifact. Any failure aborts the
whole run: the artifact is force-removed and no partial aggregate is ever
returned.
"""

from __future__ import annotations

import logging
import math
import time
from pathlib import Path
from typing import Any, Callable, List, Optional

import psutil

from dsb_common.errors import BenchmarkInterrupted, InsufficientSpaceError
from dsb_runner.engine.cache import CacheInvalidator
from dsb_runner.engine.io_runner import DDRunner
from dsb_runner.engine.round import RoundController, remove_artifact
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.interfaces import BenchmarkListener, IORunner
from dsb_runner.models.config import BenchmarkConfig
from dsb_runner.models.results import AggregateResult, RoundSample
from dsb_runner.noop_ui import NoOpListener
from dsb_runner.services.environment import validate_target_path

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1024 ** 3


def artifact_path_for(target_path: Path, now: Callable[[], float] = time.time) -> Path:
    """Return the transient artifact path used by one run."""
    return target_path / f"disk_speed_test_{int(now() * 1000)}.tmp"


class BenchmarkOrchestrator:
    """Runs every round of a benchmark and aggregates the results."""

    def __init__(
        self,
        runner: IORunner | None = None,
        cache: CacheInvalidator | None = None,
        listener: BenchmarkListener | None = None,
        stop_token: StopToken | None = None,
        disk_usage: Callable[[str], Any] = psutil.disk_usage,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._runner = runner
        self._cache = cache or CacheInvalidator()
        self._listener = listener or NoOpListener()
        self._stop_token = stop_token
        self._disk_usage = disk_usage
        self._clock = clock
        self.artifact_path: Optional[Path] = None

    def required_free_bytes(self, config: BenchmarkConfig) -> int:
        return math.ceil(config.target_size_bytes * config.settings.space_margin)

    def check_free_space(self, config: BenchmarkConfig) -> int:
        """Return the free bytes on the target volume or raise if below the margin."""
        free = int(self._disk_usage(str(config.target_path)).free)
        required = self.required_free_bytes(config)
        if free < required:
            raise InsufficientSpaceError(
                f"Not enough free space: at least {required / BYTES_PER_GB:.1f}GB required",
                context={
                    "target_path": str(config.target_path),
                    "free_bytes": free,
                    "required_bytes": required,
                },
            )
        return free

    def run(self, config: BenchmarkConfig) -> AggregateResult:
        settings = config.settings
        logger.info(
            "Starting disk benchmark on %s (%s bytes, %s rounds)",
            config.target_path,
            config.target_size_bytes,
            settings.rounds,
        )
        validate_target_path(config.target_path)
        self.check_free_space(config)

        runner = self._runner or DDRunner(
            block_size_bytes=settings.block_size_bytes,
            poll_interval=settings.poll_interval_seconds,
        )
        self.artifact_path = artifact_path_for(config.target_path)
        controller = RoundController(
            artifact_path=self.artifact_path,
            size_bytes=config.target_size_bytes,
            runner=runner,
            cache=self._cache,
            listener=self._listener,
            settings=settings,
            stop_token=self._stop_token,
            clock=self._clock,
        )

        self._listener.benchmark_started(config.target_path, config.target_size_bytes, settings.rounds)
        samples: List[RoundSample] = []
        try:
            for round_index in range(1, settings.rounds + 1):
                samples.append(controller.run(round_index, settings.rounds))
        except (BenchmarkInterrupted, KeyboardInterrupt):
            logger.warning("Benchmark interrupted during round %s", len(samples) + 1)
            self.force_cleanup()
            raise
        except BaseException as exc:
            logger.error("Benchmark aborted during round %s: %s", len(samples) + 1, exc)
            self.force_cleanup()
            raise

        result = AggregateResult.from_samples(samples)
        logger.info(
            "Completed disk benchmark: write %.2f MB/s, read %.2f MB/s",
            result.average_write_mbps,
            result.average_read_mbps,
        )
        self._listener.benchmark_completed(result)
        return result

    def force_cleanup(self) -> None:
        """Remove the transient artifact if a run left one behind. Safe to repeat."""
        if self.artifact_path is None:
            return
        remove_artifact(self.artifact_path)
