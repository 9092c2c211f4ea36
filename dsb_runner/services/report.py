"""Human-readable benchmark report persistence."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dsb_common.errors import ResultPersistenceError
from dsb_runner.models.config import BenchmarkConfig
from dsb_runner.models.results import AggregateResult
from dsb_runner.services.assessment import performance_tier, recommendations
from dsb_runner.services.environment import EnvironmentInfo
from dsb_runner.services.volumes import VolumeInfo, human_bytes

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path("logs")
SEPARATOR = "=" * 40


@dataclass
class BenchmarkReport:
    """Everything persisted about one completed benchmark run."""

    config: BenchmarkConfig
    result: AggregateResult
    environment: EnvironmentInfo
    volume: Optional[VolumeInfo] = None
    timestamp: datetime = field(default_factory=datetime.now)


def sanitize_path_tag(path: Path | str) -> str:
    """Turn a mount path into a file-name-safe tag (``/Volumes/My Disk`` -> ``Volumes_My_Disk``)."""
    tag = re.sub(r"[^a-zA-Z0-9]", "_", str(path))
    tag = re.sub(r"_+", "_", tag).strip("_")
    return tag or "root"


def report_file_name(report: BenchmarkReport) -> str:
    stamp = report.timestamp.strftime("%Y-%m-%d_%H-%M-%S")
    path_tag = sanitize_path_tag(report.config.target_path)
    return f"benchmark_{path_tag}_{report.config.size_tag}_{stamp}.log"


def render_report(report: BenchmarkReport, generated_at: datetime | None = None) -> str:
    config = report.config
    result = report.result
    env = report.environment
    write_avg = result.average_write_mbps
    read_avg = result.average_read_mbps

    lines: List[str] = [
        SEPARATOR,
        "Disk speed benchmark results",
        SEPARATOR,
        f"Test time: {report.timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Target path: {config.target_path}",
        f"File size: {config.size_tag} ({config.target_size_bytes} bytes)",
        f"Rounds: {len(result.samples)}",
        "",
        "System:",
        f"  Host: {env.host}",
        f"  OS: {env.system} {env.release} ({env.machine})",
        f"  Python: {env.python_version}",
        f"  Total memory: {env.total_memory_bytes / 1024 ** 3:.2f}GB",
        f"  Available memory: {env.available_memory_bytes / 1024 ** 3:.2f}GB",
        "",
    ]
    if report.volume is not None:
        volume = report.volume
        lines += [
            "Volume:",
            f"  Mount point: {volume.mount_path}",
            f"  Capacity: {human_bytes(volume.capacity_bytes)}",
            f"  Available: {human_bytes(volume.available_bytes)}",
            f"  Device: {volume.device_id}",
            f"  Type: {volume.media_type}",
            f"  Filesystem: {volume.filesystem_kind}",
            "",
        ]
    lines.append("Round results:")
    for sample in result.samples:
        lines.append(
            f"Round {sample.round_index} - write: {sample.write_mbps:.2f} MB/s"
            f"  read: {sample.read_mbps:.2f} MB/s"
        )
    lines += [
        "",
        "Average speed:",
        f"  Write: {write_avg:.2f} MB/s",
        f"  Read: {read_avg:.2f} MB/s",
        "",
        "Assessment:",
        f"  Write performance: {performance_tier(write_avg).description}",
        f"  Read performance: {performance_tier(read_avg).description}",
        "",
        "Recommendations:",
    ]
    lines += [f"  - {tip}" for tip in recommendations(write_avg, read_avg)]
    lines += [
        "",
        SEPARATOR,
        f"Report generated: {(generated_at or datetime.now()).strftime('%Y-%m-%d %H:%M:%S')}",
        SEPARATOR,
    ]
    return "\n".join(lines) + "\n"


def save_report(report: BenchmarkReport, log_dir: Path = DEFAULT_LOG_DIR) -> Path:
    """Write the report into `log_dir` and return its path."""
    path = log_dir / report_file_name(report)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(render_report(report), encoding="utf-8")
    except OSError as exc:
        raise ResultPersistenceError(
            f"Failed to save report to {path}: {exc}",
            context={"path": str(path)},
            cause=exc,
        ) from exc
    logger.info("Saved benchmark report to %s", path)
    return path
