"""Interactive prompt helpers."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from dsb_runner.models.config import BenchmarkConfig, SizePreset
from dsb_runner.services.volumes import VolumeInfo, human_bytes
from dsb_ui.ui.adapters.console import THEME
from dsb_ui.ui.interfaces import UIAdapter

console = Console(theme=THEME)

VOLUME_COLUMNS = ("#", "Mount point", "Capacity", "Available", "Type", "Filesystem")


def _check_tty() -> bool:
    """Return True when running in an interactive terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def volume_rows(volumes: Sequence[VolumeInfo]) -> list[list[str]]:
    return [
        [
            str(idx),
            volume.mount_path,
            human_bytes(volume.capacity_bytes),
            human_bytes(volume.available_bytes),
            volume.media_type,
            volume.filesystem_kind,
        ]
        for idx, volume in enumerate(volumes, start=1)
    ]


def select_volume(volumes: Sequence[VolumeInfo], ui: UIAdapter) -> Optional[VolumeInfo]:
    """Show the volume table and return the chosen entry, or None when there is nothing to pick."""
    if not volumes:
        return None
    ui.show_table("Available volumes", VOLUME_COLUMNS, volume_rows(volumes))
    choices = [str(idx) for idx in range(1, len(volumes) + 1)]
    answer = Prompt.ask("Select the volume to test", choices=choices, default="1", console=console)
    return volumes[int(answer) - 1]


def select_size() -> SizePreset:
    """Prompt for one of the test file size presets."""
    for preset in SizePreset:
        console.print(f"  [accent]{preset.value}[/accent]  {preset.label}")
    answer = Prompt.ask(
        "Select the test file size",
        choices=[preset.value for preset in SizePreset],
        default=SizePreset.QUICK.value,
        console=console,
    )
    return SizePreset(answer)


def confirm_run(config: BenchmarkConfig) -> bool:
    return Confirm.ask(
        f"Run {config.settings.rounds} rounds with a {config.size_tag} file on {config.target_path}?",
        default=True,
        console=console,
    )


def ask_save() -> bool:
    return Confirm.ask("Save the results to a report file?", default=True, console=console)


def ask_continue() -> bool:
    return Confirm.ask("Run another benchmark?", default=False, console=console)
