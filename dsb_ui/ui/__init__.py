"""
UI adapter package providing Rich-based and headless renderers.
"""

from dsb_ui.ui.interfaces import ProgressHandle, UIAdapter  # re-export contract
from dsb_ui.ui.adapters.console import ConsoleUIAdapter
from dsb_ui.ui.adapters.headless import HeadlessUIAdapter
from dsb_ui.ui.prompts import ask_continue, ask_save, confirm_run, select_size, select_volume

__all__ = [
    "UIAdapter",
    "ProgressHandle",
    "ConsoleUIAdapter",
    "HeadlessUIAdapter",
    "ask_continue",
    "ask_save",
    "confirm_run",
    "select_size",
    "select_volume",
]
