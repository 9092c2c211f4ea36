"""UI facade for the disk-speed-bench CLI.

Keeps presentation (Rich console, headless output, prompts) separate from
the runner package.
"""

from dsb_ui.cli import app
from dsb_ui.ui.adapters.console import ConsoleUIAdapter

__all__ = ["app", "ConsoleUIAdapter"]
