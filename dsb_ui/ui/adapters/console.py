"""Rich-based console adapter used for all TTY output."""

from __future__ import annotations

import shutil
import sys
from contextlib import contextmanager
from typing import IO, Sequence

from rich.console import Console
from rich.progress import TaskID
from rich.table import Table
from rich.theme import Theme

from dsb_ui.ui.interfaces import UIAdapter
from dsb_ui.ui.progress import RichProgressHandle, rich_progress

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "success": "green",
        "accent": "#3ea6ff",
    }
)


class ConsoleUIAdapter(UIAdapter):
    """ANSI-friendly output with Rich tables and progress bars."""

    def __init__(self, stream: IO[str] | None = None, console: Console | None = None):
        self.console = console or Console(
            theme=THEME,
            file=stream or sys.stdout,
            highlight=False,
            soft_wrap=True,
        )

    def show_info(self, message: str) -> None:
        self.console.print(message, style="info")

    def show_warning(self, message: str) -> None:
        self.console.print(message, style="warning")

    def show_error(self, message: str) -> None:
        self.console.print(message, style="error")

    def show_success(self, message: str) -> None:
        self.console.print(message, style="success")

    def show_rule(self, title: str) -> None:
        self.console.rule(f"[b]{title}[/b]", style="accent")

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None:
        term_width = self.console.size.width or shutil.get_terminal_size(fallback=(100, 24)).columns
        table = Table(
            title=f"[b]{title}[/b]",
            border_style="accent",
            header_style="bold white",
            row_styles=("", "dim"),
            width=min(max(60, term_width - 2), 120),
        )
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows:
            table.add_row(*[str(cell) for cell in row])
        self.console.print(table)

    @contextmanager
    def status(self, message: str):
        with self.console.status(f"[accent]{message}...[/accent]", spinner="dots") as status:
            try:
                yield
                status.update("[success]Done.[/success]")
            except Exception:
                status.update("[error]Failed.[/error]")
                raise

    def create_progress(self, description: str, total: int) -> RichProgressHandle:
        normalized_total = max(total, 1)
        progress = rich_progress(self.console)
        task_id: TaskID = progress.add_task(description, total=normalized_total, speed="")
        progress.start()
        return RichProgressHandle(
            description=description,
            total=normalized_total,
            progress=progress,
            task_id=task_id,
        )
