"""Benchmark configuration models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

MIB = 1024 * 1024
GIB = 1024 * MIB


class SizePreset(str, Enum):
    """Preset artifact sizes offered by the interactive selector."""

    QUICK = "1g"
    STANDARD = "5g"
    DEEP = "10g"

    @property
    def size_bytes(self) -> int:
        return _PRESET_BYTES[self]

    @property
    def label(self) -> str:
        return _PRESET_LABELS[self]


_PRESET_BYTES = {
    SizePreset.QUICK: 1 * GIB,
    SizePreset.STANDARD: 5 * GIB,
    SizePreset.DEEP: 10 * GIB,
}

_PRESET_LABELS = {
    SizePreset.QUICK: "1GB - quick test",
    SizePreset.STANDARD: "5GB - standard test",
    SizePreset.DEEP: "10GB - deep test",
}


def size_tag(size_bytes: int) -> str:
    """Return a short tag (``1g``, ``512m``) used in report names."""
    if size_bytes % GIB == 0:
        return f"{size_bytes // GIB}g"
    if size_bytes % MIB == 0:
        return f"{size_bytes // MIB}m"
    return f"{size_bytes}b"


class RunnerSettings(BaseModel):
    """Tunable defaults for the benchmark engine."""

    model_config = ConfigDict(frozen=True)

    rounds: int = Field(default=3, gt=0, description="Number of write+read rounds")
    space_margin: float = Field(
        default=2.0, ge=1.0, description="Required free space as a multiple of the artifact size"
    )
    inter_round_delay_seconds: float = Field(
        default=1.0, ge=0, description="Pause between rounds to let caches settle"
    )
    sample_interval_seconds: float = Field(
        default=0.1, gt=0, description="Progress sampling interval in seconds"
    )
    synthetic_steps: int = Field(
        default=50, gt=0, description="Number of interpolation steps for read progress"
    )
    block_size_bytes: int = Field(default=MIB, gt=0, description="dd block size in bytes")
    poll_interval_seconds: float = Field(
        default=0.1, gt=0, description="How often a running phase checks for interruption"
    )

    def save(self, filepath: Path) -> None:
        filepath.write_text(self.model_dump_json(indent=2))

    @classmethod
    def load(cls, filepath: Path) -> "RunnerSettings":
        return cls.model_validate_json(filepath.read_text())


class BenchmarkConfig(BaseModel):
    """Target and size of one benchmark run. Immutable once the run starts."""

    model_config = ConfigDict(frozen=True)

    target_path: Path = Field(description="Directory on the volume under test")
    target_size_bytes: int = Field(gt=0, description="Size of the transient artifact in bytes")
    size_label: str = Field(default="", description="Preset tag used in report names")
    settings: RunnerSettings = Field(default_factory=RunnerSettings)

    @property
    def size_tag(self) -> str:
        return self.size_label or size_tag(self.target_size_bytes)

    @classmethod
    def from_preset(
        cls,
        target_path: Path,
        preset: SizePreset,
        settings: RunnerSettings | None = None,
    ) -> "BenchmarkConfig":
        return cls(
            target_path=target_path,
            target_size_bytes=preset.size_bytes,
            size_label=preset.value,
            settings=settings or RunnerSettings(),
        )
