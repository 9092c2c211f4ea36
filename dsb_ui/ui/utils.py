"""UI utility helpers."""

from __future__ import annotations

from typing import Sequence


def format_table(title: str, columns: Sequence[str], rows: list[Sequence[str]]) -> str:
    """Return a plain text table for headless output."""
    widths = [len(col) for col in columns]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(str(cell)))

    def _fmt_row(values: Sequence[object]) -> str:
        return " | ".join(str(cell).ljust(widths[idx]) for idx, cell in enumerate(values)).rstrip()

    sections = [f"== {title} ==" if title else "", _fmt_row(columns), "-+-".join("-" * w for w in widths)]
    sections += [_fmt_row(row) for row in rows]
    return "\n".join(s for s in sections if s)
