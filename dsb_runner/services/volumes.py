"""Mounted volume enumeration.

Partitions come from psutil; media details come from sysfs on Linux and
`diskutil info` on macOS. Lookups that fail degrade to "Unknown" rather
than hiding the volume.
"""

from __future__ import annotations

import logging
import platform
import re
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

import psutil

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

DARWIN_SYSTEM_VOLUMES = {
    "/System/Volumes/VM",
    "/System/Volumes/Preboot",
    "/System/Volumes/Update",
    "/System/Volumes/xarts",
    "/System/Volumes/iSCPreboot",
    "/System/Volumes/Hardware",
}

PSEUDO_FILESYSTEMS = {
    "autofs",
    "devfs",
    "devtmpfs",
    "overlay",
    "proc",
    "squashfs",
    "sysfs",
    "tmpfs",
}


@dataclass
class VolumeInfo:
    mount_path: str
    capacity_bytes: int
    available_bytes: int
    device_id: str
    media_type: str = UNKNOWN
    filesystem_kind: str = UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def human_bytes(value: float) -> str:
    """Format a byte count using binary units (``931.5G``)."""
    for unit in ("B", "K", "M", "G"):
        if value < 1024.0:
            return f"{value:.1f}{unit}"
        value /= 1024.0
    return f"{value:.1f}T"


def _run(cmd: list[str], timeout: float = 5.0) -> str:
    """Run a command safely, returning stdout or empty string on failure."""
    try:
        result = subprocess.run(
            cmd, check=False, capture_output=True, text=True, timeout=timeout
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("Command %s failed: %s", " ".join(cmd), exc)
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def is_system_volume(mount_path: str, system: Optional[str] = None) -> bool:
    if (system or platform.system()) == "Darwin":
        return mount_path in DARWIN_SYSTEM_VOLUMES
    return mount_path.startswith(("/boot", "/snap"))


def parse_diskutil_info(output: str) -> tuple[str, str]:
    """Return (media type, filesystem) parsed from `diskutil info` output."""
    media_type = UNKNOWN
    filesystem = UNKNOWN
    media_name = ""
    for line in output.splitlines():
        if ":" not in line:
            continue
        key, value = (part.strip() for part in line.split(":", 1))
        if key == "Protocol" and value:
            media_type = value
        elif key == "File System Personality" and value:
            filesystem = value
        elif key == "Media Name" and value:
            media_name = value
    if media_name and media_type == UNKNOWN:
        media_type = media_name
    elif media_name and media_name not in media_type:
        media_type = f"{media_name} {media_type}"
    return media_type, filesystem


def _linux_block_name(device: str) -> str:
    """Map a partition device (/dev/nvme0n1p2, /dev/sda1) to its parent disk."""
    name = Path(device).name
    sys_class = Path("/sys/class/block") / name
    try:
        resolved = sys_class.resolve()
        if (resolved / "partition").exists():
            return resolved.parent.name
    except OSError:
        pass
    return re.sub(r"(p?\d+)$", "", name) if not name.startswith("dm-") else name


def linux_media_type(device: str, sys_block: Path = Path("/sys/block")) -> str:
    block = sys_block / _linux_block_name(device)
    try:
        rotational = (block / "queue" / "rotational").read_text().strip()
    except OSError:
        return UNKNOWN
    removable = ""
    try:
        removable = (block / "removable").read_text().strip()
    except OSError:
        pass
    kind = "HDD" if rotational == "1" else "SSD"
    return f"Removable {kind}" if removable == "1" else kind


def _media_details(device: str, fstype: str, system: str) -> tuple[str, str]:
    if system == "Darwin":
        media_type, filesystem = parse_diskutil_info(_run(["diskutil", "info", device]))
        return media_type, filesystem if filesystem != UNKNOWN else (fstype or UNKNOWN)
    return linux_media_type(device), fstype or UNKNOWN


def list_volumes(
    system: Optional[str] = None,
    partitions: Callable[..., list] = psutil.disk_partitions,
    disk_usage: Callable[[str], Any] = psutil.disk_usage,
) -> List[VolumeInfo]:
    """Return the mounted, benchmarkable volumes."""
    resolved = system or platform.system()
    volumes: List[VolumeInfo] = []
    seen: set[str] = set()
    for part in partitions(all=False):
        if not part.device.startswith("/dev/"):
            continue
        if part.fstype in PSEUDO_FILESYSTEMS or part.mountpoint in seen:
            continue
        if is_system_volume(part.mountpoint, resolved):
            continue
        try:
            usage = disk_usage(part.mountpoint)
        except OSError as exc:
            logger.debug("Skipping %s: %s", part.mountpoint, exc)
            continue
        media_type, filesystem = _media_details(part.device, part.fstype, resolved)
        seen.add(part.mountpoint)
        volumes.append(
            VolumeInfo(
                mount_path=part.mountpoint,
                capacity_bytes=int(usage.total),
                available_bytes=int(usage.free),
                device_id=part.device,
                media_type=media_type,
                filesystem_kind=filesystem,
            )
        )
    return volumes


def volume_for_path(path: Path | str, volumes: List[VolumeInfo]) -> Optional[VolumeInfo]:
    """Return the volume whose mount point is the longest prefix of `path`."""
    target = Path(path).resolve()
    best: Optional[VolumeInfo] = None
    for volume in volumes:
        mount = Path(volume.mount_path)
        if target != mount and mount not in target.parents:
            continue
        if best is None or len(mount.parts) > len(Path(best.mount_path).parts):
            best = volume
    return best
