"""Shared helpers for disk-speed-bench."""

from dsb_common.api import DSBError, configure_logging

__all__ = ["configure_logging", "DSBError"]
