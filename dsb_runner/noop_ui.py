"""No-op listener implementations for headless execution."""

from __future__ import annotations

from pathlib import Path

from dsb_runner.interfaces import BenchmarkListener, ProgressHandle
from dsb_runner.models.results import AggregateResult, Phase, ProgressSnapshot, RoundSample


class NoOpProgressHandle(ProgressHandle):
    """No-op progress handle."""

    def update(self, snapshot: ProgressSnapshot) -> None:
        pass

    def finish(self, snapshot: ProgressSnapshot) -> None:
        pass

    def abort(self) -> None:
        pass


class NoOpListener(BenchmarkListener):
    """Listener that discards all events."""

    def benchmark_started(self, target: Path, size_bytes: int, rounds: int) -> None:
        pass

    def round_started(self, round_index: int, total_rounds: int) -> None:
        pass

    def phase_started(self, phase: Phase, total_bytes: int) -> ProgressHandle:
        return NoOpProgressHandle()

    def phase_completed(self, phase: Phase, throughput_mbps: float) -> None:
        pass

    def round_completed(self, sample: RoundSample) -> None:
        pass

    def benchmark_completed(self, result: AggregateResult) -> None:
        pass
