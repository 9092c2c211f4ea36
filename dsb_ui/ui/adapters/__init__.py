"""UI adapters package."""

from dsb_ui.ui.adapters.console import ConsoleUIAdapter
from dsb_ui.ui.adapters.headless import HeadlessUIAdapter

__all__ = ["ConsoleUIAdapter", "HeadlessUIAdapter"]
