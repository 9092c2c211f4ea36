"""UI adapter contract shared by the console and headless renderers."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, Sequence

from dsb_runner.interfaces import ProgressHandle


class UIAdapter(Protocol):
    """Output surface used by the CLI and the benchmark presenter."""

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_success(self, message: str) -> None: ...

    def show_rule(self, title: str) -> None: ...

    def show_table(self, title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> None: ...

    def status(self, message: str) -> AbstractContextManager[None]: ...

    def create_progress(self, description: str, total: int) -> ProgressHandle: ...


__all__ = ["ProgressHandle", "UIAdapter"]
