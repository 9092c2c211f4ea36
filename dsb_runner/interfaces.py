"""Protocols the engine depends on, implemented by the runner and the UI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from dsb_runner.models.results import (
    AggregateResult,
    ExitOutcome,
    Phase,
    ProgressSnapshot,
    RoundSample,
)

if TYPE_CHECKING:
    from dsb_runner.engine.stop_token import StopToken


class PhaseProcess(Protocol):
    """Handle on one running external I/O operation."""

    def is_running(self) -> bool: ...

    def wait(self, stop_token: "StopToken | None" = None) -> ExitOutcome: ...

    def terminate(self) -> None: ...


class IORunner(Protocol):
    """Starts a single bulk sequential copy operation."""

    def start(self, phase: Phase, artifact_path: Path, size_bytes: int) -> PhaseProcess: ...


class ProgressEstimator(Protocol):
    """Produces the next progress snapshot of the running phase."""

    def sample(self) -> ProgressSnapshot: ...


class ProgressHandle(Protocol):
    """Receives progress snapshots for one phase."""

    def update(self, snapshot: ProgressSnapshot) -> None: ...

    def finish(self, snapshot: ProgressSnapshot) -> None: ...

    def abort(self) -> None: ...


class BenchmarkListener(Protocol):
    """Presentation sink notified as the benchmark advances."""

    def benchmark_started(self, target: Path, size_bytes: int, rounds: int) -> None: ...

    def round_started(self, round_index: int, total_rounds: int) -> None: ...

    def phase_started(self, phase: Phase, total_bytes: int) -> ProgressHandle: ...

    def phase_completed(self, phase: Phase, throughput_mbps: float) -> None: ...

    def round_completed(self, sample: RoundSample) -> None: ...

    def benchmark_completed(self, result: AggregateResult) -> None: ...
