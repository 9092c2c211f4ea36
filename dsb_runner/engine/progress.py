"""
Progress estimation for running phases.

Two strategies implement the `ProgressEstimator` protocol:

- `ObservedProgress` (write phase) reports the on-disk size of the artifact.
  The OS may buffer writes so the size can lag true progress; it drives the
  progress bar only, never the reported throughput.
- `SyntheticProgress` (read phase) interpolates linearly over a fixed number
  of steps, one step per tick, because read progress of a running dd cannot
  be observed. It is a UX approximation, not telemetry.

`ProgressSampler` ticks an estimator on a background thread for the lifetime
of one phase.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from dsb_runner.interfaces import ProgressEstimator, ProgressHandle
from dsb_runner.models.results import ProgressSnapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ObservedProgress(ProgressEstimator):
    """Reports the artifact's current size, clamped to the target size."""

    def __init__(self, artifact_path: Path, total_bytes: int, clock: Clock = time.monotonic) -> None:
        self._path = artifact_path
        self._total = total_bytes
        self._clock = clock
        self._started = clock()

    def _observed_size(self) -> int:
        try:
            return self._path.stat().st_size
        except OSError:
            return 0

    def sample(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            bytes_completed=min(self._observed_size(), self._total),
            total_bytes=self._total,
            elapsed_seconds=self._clock() - self._started,
        )


class SyntheticProgress(ProgressEstimator):
    """Advances one fixed step per sample regardless of actual I/O state."""

    def __init__(self, total_bytes: int, steps: int = 50, clock: Clock = time.monotonic) -> None:
        self._total = total_bytes
        self._steps = max(1, steps)
        self._step = 0
        self._clock = clock
        self._started = clock()

    def sample(self) -> ProgressSnapshot:
        completed = min(self._step * self._total // self._steps, self._total)
        snapshot = ProgressSnapshot(
            bytes_completed=completed,
            total_bytes=self._total,
            elapsed_seconds=self._clock() - self._started,
        )
        self._step = min(self._step + 1, self._steps)
        return snapshot


class ProgressSampler:
    """Background loop feeding estimator samples to a progress handle.

    Emitted `bytes_completed` values never decrease. `stop()` cancels the
    loop, joins the thread and always emits a final 100% snapshot.
    """

    def __init__(
        self,
        estimator: ProgressEstimator,
        handle: ProgressHandle,
        total_bytes: int,
        interval: float = 0.1,
    ) -> None:
        self._estimator = estimator
        self._handle = handle
        self._total = total_bytes
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_completed = 0
        self._last_elapsed = 0.0

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._loop, name="dsb-progress", daemon=True)
        self._thread.start()

    def _loop(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                snapshot = self._estimator.sample()
            except Exception as exc:  # pragma: no cover
                logger.debug("Progress sample failed: %s", exc)
                continue
            self._emit(snapshot)

    def _emit(self, snapshot: ProgressSnapshot) -> None:
        if snapshot.bytes_completed < self._last_completed:
            snapshot = ProgressSnapshot(
                bytes_completed=self._last_completed,
                total_bytes=snapshot.total_bytes,
                elapsed_seconds=snapshot.elapsed_seconds,
            )
        self._last_completed = snapshot.bytes_completed
        self._last_elapsed = snapshot.elapsed_seconds
        try:
            self._handle.update(snapshot)
        except Exception as exc:
            # Never break a measurement on the progress path
            logger.debug("Progress handle update failed: %s", exc)

    def stop(self, elapsed_seconds: float | None = None) -> ProgressSnapshot:
        """Cancel sampling and emit the final, complete snapshot."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        final = ProgressSnapshot(
            bytes_completed=self._total,
            total_bytes=self._total,
            elapsed_seconds=self._last_elapsed if elapsed_seconds is None else elapsed_seconds,
        )
        self._last_completed = self._total
        try:
            self._handle.finish(final)
        except Exception as exc:
            logger.debug("Progress handle finish failed: %s", exc)
        return final

    def cancel(self) -> None:
        """Stop sampling when dd never exited (spawn error or interruption); no completion is shown."""
        self._stop_event.set()
        if self._thread is None:
            return
        self._thread.join()
        self._thread = None
        try:
            self._handle.abort()
        except Exception as exc:
            logger.debug("Progress handle abort failed: %s", exc)

    def __enter__(self) -> "ProgressSampler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
