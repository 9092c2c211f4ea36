"""Fakes for the runner's external collaborators."""

from __future__ import annotations

from collections import namedtuple
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from dsb_runner.models.config import RunnerSettings
from dsb_runner.models.results import AggregateResult, ExitOutcome, Phase, RoundSample
from dsb_runner.noop_ui import NoOpListener, NoOpProgressHandle

DiskUsage = namedtuple("DiskUsage", "total used free percent")


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProcess:
    def __init__(self, returncode: int = 0, on_wait: Optional[Callable[[], None]] = None) -> None:
        self.returncode = returncode
        self.on_wait = on_wait
        self.terminated = False

    def is_running(self) -> bool:
        return False

    def wait(self, stop_token=None) -> ExitOutcome:
        if self.on_wait is not None:
            self.on_wait()
        return ExitOutcome(returncode=self.returncode, stderr="boom" if self.returncode else "")

    def terminate(self) -> None:
        self.terminated = True


class FakeRunner:
    """Creates a tiny artifact on write and advances the clock while "running"."""

    def __init__(
        self,
        clock: FakeClock,
        durations: Optional[Dict[Phase, float]] = None,
        failures: Optional[Dict[Tuple[int, Phase], int]] = None,
    ) -> None:
        self.clock = clock
        self.durations = durations or {Phase.WRITE: 2.0, Phase.READ: 1.0}
        self.failures = failures or {}
        self.calls: List[Tuple[Phase, Path, bool]] = []
        self.hooks: Dict[Tuple[int, Phase], Callable[[], None]] = {}
        self.round = 0

    def start(self, phase: Phase, artifact_path: Path, size_bytes: int) -> FakeProcess:
        if phase is Phase.WRITE:
            self.round += 1
        self.calls.append((phase, artifact_path, artifact_path.exists()))
        if phase is Phase.WRITE:
            artifact_path.write_bytes(b"\0" * 16)
        key = (self.round, phase)
        hook = self.hooks.get(key)

        def _on_wait() -> None:
            self.clock.advance(self.durations[phase])
            if hook is not None:
                hook()

        return FakeProcess(returncode=self.failures.get(key, 0), on_wait=_on_wait)


class FakeCache:
    def __init__(self) -> None:
        self.purges = 0

    def purge(self) -> None:
        self.purges += 1


class RecordingHandle(NoOpProgressHandle):
    def __init__(self) -> None:
        self.updates = []
        self.finished = None
        self.aborted = False

    def update(self, snapshot) -> None:
        self.updates.append(snapshot)

    def finish(self, snapshot) -> None:
        self.finished = snapshot

    def abort(self) -> None:
        self.aborted = True


class RecordingListener(NoOpListener):
    def __init__(self) -> None:
        self.events: List[tuple] = []
        self.handles: List[RecordingHandle] = []
        self.result: Optional[AggregateResult] = None

    def benchmark_started(self, target, size_bytes, rounds) -> None:
        self.events.append(("benchmark_started", rounds))

    def round_started(self, round_index, total_rounds) -> None:
        self.events.append(("round_started", round_index))

    def phase_started(self, phase, total_bytes) -> RecordingHandle:
        self.events.append(("phase_started", phase))
        handle = RecordingHandle()
        self.handles.append(handle)
        return handle

    def phase_completed(self, phase, throughput_mbps) -> None:
        self.events.append(("phase_completed", phase, throughput_mbps))

    def round_completed(self, sample: RoundSample) -> None:
        self.events.append(("round_completed", sample.round_index))

    def benchmark_completed(self, result: AggregateResult) -> None:
        self.events.append(("benchmark_completed",))
        self.result = result


@pytest.fixture
def fast_settings() -> RunnerSettings:
    return RunnerSettings(inter_round_delay_seconds=0, sample_interval_seconds=0.01)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_runner(clock: FakeClock) -> FakeRunner:
    return FakeRunner(clock)


@pytest.fixture
def fake_cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def plenty_of_space() -> Callable[[str], DiskUsage]:
    return lambda _path: DiskUsage(total=1 << 40, used=0, free=1 << 40, percent=0.0)


@pytest.fixture
def make_runner(clock: FakeClock) -> Callable[..., FakeRunner]:
    return lambda **kwargs: FakeRunner(clock, **kwargs)
