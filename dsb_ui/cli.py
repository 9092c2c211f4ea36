"""
Command-line interface for disk-speed-bench.

Measures sequential write and read throughput of a mounted volume with dd,
either fully from options or by prompting for the volume and file size.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from dsb_common.api import configure_logging
from dsb_runner.models.config import SizePreset
from dsb_runner.services.report import DEFAULT_LOG_DIR
from dsb_ui.session import BenchmarkSession, SessionOptions
from dsb_ui.ui.adapters.console import ConsoleUIAdapter
from dsb_ui.ui.adapters.headless import HeadlessUIAdapter

app = typer.Typer(
    help="Measure sequential disk write/read speed with dd.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def run(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory on the volume to test; prompts for a volume when omitted.",
    ),
    size: Optional[SizePreset] = typer.Option(
        None,
        "--size",
        "-s",
        case_sensitive=False,
        help="Test file size preset; prompts when omitted.",
    ),
    rounds: Optional[int] = typer.Option(
        None,
        "--rounds",
        "-r",
        min=1,
        help="Number of write+read rounds (default 3).",
    ),
    settings: Optional[Path] = typer.Option(
        None,
        "--settings",
        help="JSON file with runner settings (rounds, delays, block size).",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Start without asking for confirmation.",
    ),
    save: Optional[bool] = typer.Option(
        None,
        "--save/--no-save",
        help="Save the report without asking (or skip saving).",
    ),
    log_dir: Path = typer.Option(
        DEFAULT_LOG_DIR,
        "--log-dir",
        help="Directory receiving saved reports.",
    ),
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Force plain text output (useful in CI).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable verbose debug logging.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write a DEBUG-level trace of the run to this file.",
    ),
    log_json: Optional[bool] = typer.Option(
        None,
        "--log-json/--no-log-json",
        help="Render log records as JSON (default from DSB_LOG_JSON).",
    ),
) -> None:
    """Run the disk speed benchmark."""
    configure_logging(debug=debug, log_file=log_file, json=log_json, force=True)
    ui = HeadlessUIAdapter() if headless else ConsoleUIAdapter()
    options = SessionOptions(
        path=path,
        size=size,
        rounds=rounds,
        settings_file=settings,
        assume_yes=yes,
        save=save,
        log_dir=log_dir,
    )
    raise typer.Exit(BenchmarkSession(ui, options).run())


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
