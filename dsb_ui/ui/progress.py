"""Progress handles rendering phase snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO

from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from dsb_runner.models.results import ProgressSnapshot
from dsb_ui.ui.interfaces import ProgressHandle

BAR_LENGTH = 40


def format_speed(snapshot: ProgressSnapshot) -> str:
    """Return ``123.4MB/s`` plus ``ETA:1.2s`` while the phase is in flight."""
    if snapshot.elapsed_seconds <= 0 or snapshot.bytes_completed <= 0:
        return ""
    speed = f"{snapshot.throughput_mbps:.1f}MB/s"
    eta = snapshot.eta_seconds
    if eta is None:
        return speed
    return f"{speed} ETA:{eta:.1f}s"


def format_progress_line(description: str, snapshot: ProgressSnapshot, bar_length: int = BAR_LENGTH) -> str:
    """Render a text progress bar: ``Writing data [████░░░░]  42% 120.3MB/s ETA:1.2s``."""
    total = snapshot.total_bytes
    filled = (snapshot.bytes_completed * bar_length) // total if total else bar_length
    bar = "█" * filled + "░" * (bar_length - filled)
    line = f"{description} [{bar}] {snapshot.percent:>3}%"
    speed = format_speed(snapshot)
    return f"{line} {speed}" if speed else line


@dataclass
class RichProgressHandle(ProgressHandle):
    """Progress handle backed by rich.Progress."""

    description: str
    total: int
    progress: Progress
    task_id: TaskID
    finished: bool = False

    def update(self, snapshot: ProgressSnapshot) -> None:
        if self.finished:
            return
        self.progress.update(
            self.task_id,
            completed=min(snapshot.bytes_completed, self.total),
            speed=format_speed(snapshot),
        )

    def finish(self, snapshot: ProgressSnapshot) -> None:
        if self.finished:
            return
        self.progress.update(self.task_id, completed=self.total, speed=format_speed(snapshot))
        self.progress.stop()
        self.finished = True

    def abort(self) -> None:
        if self.finished:
            return
        self.progress.stop()
        self.finished = True


@dataclass
class StreamProgressHandle(ProgressHandle):
    """Single-line text progress for headless mode."""

    description: str
    total: int
    stream: IO[str]
    last_line: str = ""
    finished: bool = False

    def update(self, snapshot: ProgressSnapshot) -> None:
        if self.finished:
            return
        line = format_progress_line(self.description, snapshot)
        if line == self.last_line:
            return
        self.last_line = line
        self.stream.write(f"\r[INFO] {line}")
        self.stream.flush()

    def finish(self, snapshot: ProgressSnapshot) -> None:
        if self.finished:
            return
        self.update(snapshot)
        self.stream.write("\n")
        self.stream.flush()
        self.finished = True

    def abort(self) -> None:
        if self.finished:
            return
        if self.last_line:
            self.stream.write("\n")
            self.stream.flush()
        self.finished = True


def rich_progress(console) -> Progress:
    """Create a Rich Progress instance."""
    return Progress(
        TextColumn("[bold accent]{task.description}[/bold accent]"),
        BarColumn(bar_width=BAR_LENGTH, complete_style="accent", finished_style="success"),
        TaskProgressColumn(),
        TextColumn("{task.fields[speed]}"),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )
