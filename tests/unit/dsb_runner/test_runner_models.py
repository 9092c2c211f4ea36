"""Tests for configuration and result models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dsb_runner.models.config import GIB, MIB, BenchmarkConfig, RunnerSettings, SizePreset, size_tag
from dsb_runner.models.results import AggregateResult, ExitOutcome, RoundSample, throughput_mbps

pytestmark = [pytest.mark.unit, pytest.mark.unit_runner]


def test_presets_map_to_gibibytes() -> None:
    assert SizePreset.QUICK.size_bytes == GIB
    assert SizePreset.STANDARD.size_bytes == 5 * GIB
    assert SizePreset.DEEP.size_bytes == 10 * GIB
    assert SizePreset("5g") is SizePreset.STANDARD


def test_from_preset_keeps_tag_and_defaults(tmp_path) -> None:
    config = BenchmarkConfig.from_preset(tmp_path, SizePreset.QUICK)
    assert config.target_size_bytes == GIB
    assert config.size_tag == "1g"
    assert config.settings.rounds == 3
    assert config.settings.space_margin == 2.0
    assert config.settings.inter_round_delay_seconds == 1.0
    assert config.settings.sample_interval_seconds == 0.1


def test_size_tag_formats() -> None:
    assert size_tag(10 * GIB) == "10g"
    assert size_tag(512 * MIB) == "512m"
    assert size_tag(1000) == "1000b"


def test_config_rejects_empty_size() -> None:
    with pytest.raises(ValidationError):
        BenchmarkConfig(target_path=Path("/tmp"), target_size_bytes=0)


def test_config_is_immutable(tmp_path) -> None:
    config = BenchmarkConfig.from_preset(tmp_path, SizePreset.QUICK)
    with pytest.raises(ValidationError):
        config.target_size_bytes = MIB


def test_settings_round_trip_through_json(tmp_path) -> None:
    path = tmp_path / "settings.json"
    RunnerSettings(rounds=5, block_size_bytes=4096).save(path)
    loaded = RunnerSettings.load(path)
    assert loaded.rounds == 5
    assert loaded.block_size_bytes == 4096


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        RunnerSettings(rounds=0)
    with pytest.raises(ValidationError):
        RunnerSettings(space_margin=0.5)


def test_throughput_uses_binary_megabytes() -> None:
    assert throughput_mbps(GIB, 2.0) == pytest.approx(512.0)
    assert throughput_mbps(GIB, 0.0) == 0.0


def test_aggregate_requires_samples() -> None:
    with pytest.raises(ValueError):
        AggregateResult.from_samples([])
    result = AggregateResult.from_samples(
        [RoundSample(1, 100.0, 200.0), RoundSample(2, 300.0, 400.0)]
    )
    assert result.average_write_mbps == 200.0
    assert result.average_read_mbps == 300.0
    assert result.to_dict()["samples"][1]["round_index"] == 2


def test_exit_outcome_signal() -> None:
    assert ExitOutcome(0).success
    assert ExitOutcome(-2).signal == 2
    assert ExitOutcome(1).signal is None


@pytest.mark.parametrize("size", [1, 1000, 3 * MIB + 17])
def test_config_accepts_sizes_off_the_block_boundary(size) -> None:
    config = BenchmarkConfig(target_path=Path("/tmp"), target_size_bytes=size)
    assert config.target_size_bytes == size
    assert config.settings.block_size_bytes == MIB
