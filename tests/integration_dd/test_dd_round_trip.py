"""Drives the real dd binary against a tiny artifact."""

from __future__ import annotations

import shutil

import pytest

from dsb_runner.engine.cache import CacheInvalidator
from dsb_runner.engine.io_runner import DDRunner
from dsb_runner.engine.orchestrator import BenchmarkOrchestrator
from dsb_runner.models.config import BenchmarkConfig, RunnerSettings
from dsb_runner.models.results import Phase

pytestmark = [
    pytest.mark.inter_dd,
    pytest.mark.skipif(shutil.which("dd") is None, reason="dd not available"),
]

BLOCK = 64 * 1024


class _NoPurge(CacheInvalidator):
    def commands(self) -> list[list[str]]:
        return [["sync"]]


def test_two_rounds_with_real_dd(tmp_path) -> None:
    settings = RunnerSettings(
        rounds=2,
        inter_round_delay_seconds=0,
        sample_interval_seconds=0.01,
        block_size_bytes=BLOCK,
    )
    config = BenchmarkConfig(target_path=tmp_path, target_size_bytes=16 * BLOCK, settings=settings)
    orchestrator = BenchmarkOrchestrator(cache=_NoPurge())

    result = orchestrator.run(config)

    assert len(result.samples) == 2
    assert all(sample.write_mbps >= 0 and sample.read_mbps >= 0 for sample in result.samples)
    assert not list(tmp_path.glob("disk_speed_test_*.tmp"))


@pytest.mark.parametrize("size", [1, 1000, 3 * 1024 * 1024 + 17])
def test_write_phase_produces_exact_size(tmp_path, size) -> None:
    artifact = tmp_path / "exact.tmp"
    outcome = DDRunner(block_size_bytes=BLOCK).start(Phase.WRITE, artifact, size).wait()

    assert outcome.success, outcome.stderr
    assert artifact.stat().st_size == size


@pytest.mark.parametrize("size", [1000, BLOCK + 17])
def test_single_round_off_the_block_boundary(tmp_path, size) -> None:
    settings = RunnerSettings(
        rounds=1,
        inter_round_delay_seconds=0,
        sample_interval_seconds=0.01,
        block_size_bytes=BLOCK,
    )
    config = BenchmarkConfig(target_path=tmp_path, target_size_bytes=size, settings=settings)

    result = BenchmarkOrchestrator(cache=_NoPurge()).run(config)

    assert len(result.samples) == 1
    assert not list(tmp_path.glob("disk_speed_test_*.tmp"))
