"""Value objects produced while a benchmark runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Sequence

BYTES_PER_MB = 1024 * 1024


class Phase(str, Enum):
    """One directional I/O measurement inside a round."""

    WRITE = "write"
    READ = "read"

    @property
    def label(self) -> str:
        return "Writing data" if self is Phase.WRITE else "Reading data"


def throughput_mbps(size_bytes: int, elapsed_seconds: float) -> float:
    """Return MB/s (1 MB = 1024*1024 bytes) for a whole phase."""
    if elapsed_seconds <= 0:
        return 0.0
    return (size_bytes / BYTES_PER_MB) / elapsed_seconds


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time progress of the running phase."""

    bytes_completed: int
    total_bytes: int
    elapsed_seconds: float

    def __post_init__(self) -> None:
        clamped = max(0, min(int(self.bytes_completed), self.total_bytes))
        object.__setattr__(self, "bytes_completed", clamped)
        object.__setattr__(self, "elapsed_seconds", max(0.0, float(self.elapsed_seconds)))

    @property
    def complete(self) -> bool:
        return self.bytes_completed >= self.total_bytes

    @property
    def percent(self) -> int:
        if self.total_bytes <= 0:
            return 100
        return (self.bytes_completed * 100) // self.total_bytes

    @property
    def throughput_mbps(self) -> float:
        return throughput_mbps(self.bytes_completed, self.elapsed_seconds)

    @property
    def eta_seconds(self) -> float | None:
        pct = self.percent
        if pct <= 0 or pct >= 100 or self.elapsed_seconds <= 0:
            return None
        return self.elapsed_seconds * (100 - pct) / pct


@dataclass(frozen=True)
class ExitOutcome:
    """Completion status of an external I/O process."""

    returncode: int
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def signal(self) -> int | None:
        """Signal number when the process was killed by a signal."""
        return -self.returncode if self.returncode < 0 else None


@dataclass(frozen=True)
class RoundSample:
    """Throughput pair measured by one completed round."""

    round_index: int
    write_mbps: float
    read_mbps: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AggregateResult:
    """All round samples of a successful run plus their averages."""

    samples: tuple[RoundSample, ...]
    average_write_mbps: float
    average_read_mbps: float

    @classmethod
    def from_samples(cls, samples: Sequence[RoundSample]) -> "AggregateResult":
        if not samples:
            raise ValueError("AggregateResult requires at least one sample")
        count = len(samples)
        return cls(
            samples=tuple(samples),
            average_write_mbps=sum(s.write_mbps for s in samples) / count,
            average_read_mbps=sum(s.read_mbps for s in samples) / count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "samples": [sample.to_dict() for sample in self.samples],
            "average_write_mbps": self.average_write_mbps,
            "average_read_mbps": self.average_read_mbps,
        }
