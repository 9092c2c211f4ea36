"""
dd-backed external I/O runner.

Each phase is a single `dd` invocation: the write phase generates the
artifact from /dev/zero with `conv=fsync` so completion implies the data
reached stable storage; the read phase streams the artifact to /dev/null.
"""

from __future__ import annotations

import logging
import math
import subprocess
from pathlib import Path
from typing import Callable, List

from dsb_common.errors import BenchmarkInterrupted, SpawnError
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.interfaces import IORunner, PhaseProcess
from dsb_runner.models.config import MIB
from dsb_runner.models.results import ExitOutcome, Phase

logger = logging.getLogger(__name__)

TERMINATE_GRACE_SECONDS = 5


class DDProcess(PhaseProcess):
    """Handle on a running dd process."""

    def __init__(
        self,
        process: subprocess.Popen,
        command: List[str],
        phase: Phase,
        poll_interval: float = 0.1,
    ) -> None:
        self._process = process
        self.command = command
        self.phase = phase
        self._poll_interval = poll_interval

    @property
    def pid(self) -> int:
        return self._process.pid

    def is_running(self) -> bool:
        return self._process.poll() is None

    def wait(self, stop_token: StopToken | None = None) -> ExitOutcome:
        """Block until dd exits; terminate it and raise if a stop arrives first."""
        while True:
            if stop_token and stop_token.should_stop():
                logger.info("Stop requested during %s phase", self.phase.value)
                self.terminate()
                raise BenchmarkInterrupted(
                    "Benchmark interrupted by user",
                    context={"phase": self.phase.value, "command": " ".join(self.command)},
                )
            try:
                returncode = self._process.wait(timeout=self._poll_interval)
                break
            except subprocess.TimeoutExpired:
                continue

        stderr = ""
        if self._process.stderr is not None:
            stderr = self._process.stderr.read() or ""
            self._process.stderr.close()
        if returncode != 0:
            logger.error("dd failed with return code %s", returncode)
            if stderr:
                logger.error("stderr: %s", stderr.strip())
        return ExitOutcome(returncode=returncode, stderr=stderr.strip())

    def terminate(self) -> None:
        proc = self._process
        if proc.poll() is None:
            logger.info("Terminating dd process")
            proc.terminate()
            try:
                proc.wait(timeout=TERMINATE_GRACE_SECONDS)
            except subprocess.TimeoutExpired:
                logger.warning("Force killing dd process")
                proc.kill()
                proc.wait()
        if proc.stderr is not None and not proc.stderr.closed:
            proc.stderr.close()


class DDRunner(IORunner):
    """Starts dd for the write or read phase of a round."""

    def __init__(
        self,
        block_size_bytes: int = MIB,
        dd_binary: str = "dd",
        poll_interval: float = 0.1,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ) -> None:
        self.block_size_bytes = block_size_bytes
        self.dd_binary = dd_binary
        self._poll_interval = poll_interval
        self._popen = popen

    def write_block_size(self, size_bytes: int) -> int:
        return math.gcd(size_bytes, self.block_size_bytes) or self.block_size_bytes

    def build_command(self, phase: Phase, artifact_path: Path, size_bytes: int) -> List[str]:
        """
        Build the dd command for a phase.

        Block size is given in plain bytes, which GNU and BSD dd both accept.
        Writes shrink it to the largest divisor of the size so that
        `bs * count` is exactly `size_bytes`.
        """
        cmd = [self.dd_binary]
        if phase is Phase.WRITE:
            block = self.write_block_size(size_bytes)
            count = size_bytes // block
            cmd.append("if=/dev/zero")
            cmd.append(f"of={artifact_path}")
            cmd.append(f"bs={block}")
            cmd.append(f"count={count}")
            cmd.append("conv=fsync")
        else:
            cmd.append(f"if={artifact_path}")
            cmd.append("of=/dev/null")
            cmd.append(f"bs={self.block_size_bytes}")
        return cmd

    def start(self, phase: Phase, artifact_path: Path, size_bytes: int) -> DDProcess:
        cmd = self.build_command(phase, artifact_path, size_bytes)
        logger.info("Running command: %s", " ".join(cmd))
        try:
            process = self._popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as exc:
            raise SpawnError(
                f"Failed to start dd for the {phase.value} phase: {exc}",
                context={"phase": phase.value, "command": " ".join(cmd)},
                cause=exc,
            ) from exc
        return DDProcess(process, cmd, phase, poll_interval=self._poll_interval)
