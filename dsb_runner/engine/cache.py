"""Best-effort file-system cache invalidation."""

from __future__ import annotations

import logging
import platform
import subprocess
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

LINUX_DROP_CACHES = ["sudo", "-n", "sh", "-c", "echo 3 > /proc/sys/vm/drop_caches"]
DARWIN_PURGE = ["sudo", "-n", "purge"]


class CacheInvalidator:
    """Ask the OS to drop page-cache contents before a measurement.

    `purge()` never raises: without privileges the next phase may see cached
    data, which only costs accuracy. `sudo -n` keeps it from ever prompting.
    """

    def __init__(
        self,
        system: str | None = None,
        run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self._system = system or platform.system()
        self._run = run

    def commands(self) -> list[list[str]]:
        if self._system == "Linux":
            return [["sync"], LINUX_DROP_CACHES]
        if self._system == "Darwin":
            return [["sync"], DARWIN_PURGE]
        return [["sync"]]

    def purge(self) -> None:
        for cmd in self.commands():
            if not self._run_quietly(cmd):
                return
        logger.debug("Cleared filesystem caches")

    def _run_quietly(self, cmd: Sequence[str]) -> bool:
        try:
            self._run(
                list(cmd),
                check=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except Exception as exc:
            logger.debug("Skipping cache clearing (%s): %s", " ".join(cmd), exc)
            return False
        return True
