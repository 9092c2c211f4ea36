"""One write-then-read measurement cycle."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from dsb_common.errors import BenchmarkInterrupted, MeasurementFailure
from dsb_runner.engine.cache import CacheInvalidator
from dsb_runner.engine.progress import ObservedProgress, ProgressSampler, SyntheticProgress
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.interfaces import BenchmarkListener, IORunner, ProgressEstimator
from dsb_runner.models.config import RunnerSettings
from dsb_runner.models.results import Phase, RoundSample, throughput_mbps

logger = logging.getLogger(__name__)


def remove_artifact(path: Path) -> None:
    """Delete the transient artifact; missing files and errors are only logged."""
    try:
        path.unlink()
        logger.info("Cleaned up test file: %s", path)
    except FileNotFoundError:
        logger.debug("Test file already gone: %s", path)
    except OSError as exc:
        logger.warning("Failed to clean up test file %s: %s", path, exc)


class RoundController:
    """Runs purge -> write -> purge -> read -> cleanup for one round.

    Throughput is the whole phase size over the wall-clock time from spawning
    dd to its exit, as measured by `clock`; progress samples never feed it.
    """

    def __init__(
        self,
        artifact_path: Path,
        size_bytes: int,
        runner: IORunner,
        cache: CacheInvalidator,
        listener: BenchmarkListener,
        settings: RunnerSettings | None = None,
        stop_token: StopToken | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.artifact_path = artifact_path
        self.size_bytes = size_bytes
        self._runner = runner
        self._cache = cache
        self._listener = listener
        self._settings = settings or RunnerSettings()
        self._stop_token = stop_token
        self._clock = clock

    def run(self, round_index: int, total_rounds: int) -> RoundSample:
        """Measure one round and return its sample; cleanup runs on every path."""
        self._listener.round_started(round_index, total_rounds)
        try:
            write_mbps = self._run_phase(Phase.WRITE, round_index)
            read_mbps = self._run_phase(Phase.READ, round_index)
        finally:
            self.cleanup()

        sample = RoundSample(round_index=round_index, write_mbps=write_mbps, read_mbps=read_mbps)
        self._listener.round_completed(sample)
        if round_index < total_rounds:
            self._pause()
        return sample

    def cleanup(self) -> None:
        remove_artifact(self.artifact_path)

    def _check_stop(self) -> None:
        if self._stop_token and self._stop_token.should_stop():
            raise BenchmarkInterrupted("Benchmark interrupted by user")

    def _estimator(self, phase: Phase) -> ProgressEstimator:
        if phase is Phase.WRITE:
            return ObservedProgress(self.artifact_path, self.size_bytes)
        return SyntheticProgress(self.size_bytes, steps=self._settings.synthetic_steps)

    def _run_phase(self, phase: Phase, round_index: int) -> float:
        self._check_stop()
        self._cache.purge()
        self._check_stop()

        logger.info("Round %s: starting %s phase", round_index, phase.value)
        handle = self._listener.phase_started(phase, self.size_bytes)
        sampler = ProgressSampler(
            self._estimator(phase),
            handle,
            total_bytes=self.size_bytes,
            interval=self._settings.sample_interval_seconds,
        )

        started = self._clock()
        with sampler:
            process = self._runner.start(phase, self.artifact_path, self.size_bytes)
            outcome = process.wait(self._stop_token)
            elapsed = self._clock() - started
            sampler.stop(elapsed_seconds=elapsed)
            if not outcome.success:
                # A terminal Ctrl-C also reaches dd, which then exits nonzero.
                self._check_stop()
                raise MeasurementFailure(
                    f"{phase.value.capitalize()} test failed with exit code {outcome.returncode}",
                    context={
                        "phase": phase.value,
                        "round": round_index,
                        "returncode": outcome.returncode,
                        "stderr": outcome.stderr,
                    },
                )

        mbps = throughput_mbps(self.size_bytes, elapsed)
        logger.info("Round %s: %s %.2f MB/s in %.2fs", round_index, phase.value, mbps, elapsed)
        self._listener.phase_completed(phase, mbps)
        return mbps

    def _pause(self) -> None:
        delay = self._settings.inter_round_delay_seconds
        if delay <= 0:
            return
        if self._stop_token is None:
            time.sleep(delay)
            return
        if self._stop_token.wait(delay):
            raise BenchmarkInterrupted("Benchmark interrupted by user")
