"""Platform, tool and target path checks plus host metadata for reports."""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

import psutil

from dsb_common.errors import ConfigurationError

SUPPORTED_SYSTEMS = ("Linux", "Darwin")

_REQUIRED_TOOLS = {
    "Linux": ["dd", "sync"],
    "Darwin": ["dd", "sync", "diskutil"],
}


@dataclass
class EnvironmentInfo:
    host: str
    system: str
    release: str
    machine: str
    python_version: str
    total_memory_bytes: int
    available_memory_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def check_platform(system: Optional[str] = None) -> str:
    """Return the platform name or raise when it is not supported."""
    resolved = system or platform.system()
    if resolved not in SUPPORTED_SYSTEMS:
        raise ConfigurationError(
            f"Unsupported platform: {resolved} (supported: {', '.join(SUPPORTED_SYSTEMS)})",
            context={"platform": resolved},
        )
    return resolved


def required_tools(system: Optional[str] = None) -> List[str]:
    return list(_REQUIRED_TOOLS.get(system or platform.system(), ["dd"]))


def missing_tools(
    system: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> List[str]:
    """Return the required external commands that are not on PATH."""
    return [tool for tool in required_tools(system) if which(tool) is None]


def check_environment(
    system: Optional[str] = None,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> str:
    """Verify platform and external tools; raise ConfigurationError otherwise."""
    resolved = check_platform(system)
    missing = missing_tools(resolved, which)
    if missing:
        raise ConfigurationError(
            f"Missing required commands: {', '.join(missing)}",
            context={"platform": resolved, "missing": missing},
        )
    return resolved


def validate_target_path(path: Path) -> Path:
    """Ensure the target is an existing, writable directory."""
    if not path.exists():
        raise ConfigurationError(
            f"Target path does not exist: {path}", context={"target_path": str(path)}
        )
    if not path.is_dir():
        raise ConfigurationError(
            f"Target path is not a directory: {path}", context={"target_path": str(path)}
        )
    if not os.access(path, os.W_OK):
        raise ConfigurationError(
            f"Target path is not writable: {path}", context={"target_path": str(path)}
        )
    return path


def collect_environment() -> EnvironmentInfo:
    """Collect host metadata recorded alongside benchmark results."""
    uname = platform.uname()
    memory = psutil.virtual_memory()
    return EnvironmentInfo(
        host=uname.node or platform.node() or "",
        system=uname.system,
        release=uname.release,
        machine=uname.machine,
        python_version=platform.python_version(),
        total_memory_bytes=int(memory.total),
        available_memory_bytes=int(memory.available),
    )
