"""Qualitative rating of measured throughput."""

from __future__ import annotations

from enum import Enum
from typing import List


class PerformanceTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    SLOW = "slow"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    PerformanceTier.EXCELLENT: "Excellent (>1000 MB/s)",
    PerformanceTier.GOOD: "Good (500-1000 MB/s)",
    PerformanceTier.FAIR: "Fair (100-500 MB/s)",
    PerformanceTier.SLOW: "Slow (<100 MB/s)",
}


def performance_tier(mbps: float) -> PerformanceTier:
    if mbps >= 1000:
        return PerformanceTier.EXCELLENT
    if mbps >= 500:
        return PerformanceTier.GOOD
    if mbps >= 100:
        return PerformanceTier.FAIR
    return PerformanceTier.SLOW


def recommendations(write_mbps: float, read_mbps: float) -> List[str]:
    """Return human-readable suggestions derived from the averages."""
    tips: List[str] = []
    if write_mbps < 100 or read_mbps < 100:
        tips.append("Consider upgrading to an SSD for better performance")
    if write_mbps < 500 and read_mbps < 500:
        tips.append("Check that the volume has enough free space")
        tips.append("Consider defragmenting the volume")
    if abs(write_mbps - read_mbps) > write_mbps * 0.5:
        tips.append("Write and read speeds differ widely; the drive may have a problem")
    if not tips:
        tips.append("Drive performance looks good; no tuning needed")
    return tips
