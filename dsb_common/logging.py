"""Logging setup for the benchmark: quiet console, optional full-trace file."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

ENV_LEVEL = "DSB_LOG_LEVEL"
ENV_JSON = "DSB_LOG_JSON"
ENV_FILE = "DSB_LOG_FILE"

# Marks handlers installed here so a forced reconfigure only replaces ours.
_HANDLER_TAG = "_dsb_handler"


@dataclass(frozen=True)
class LogTargets:
    """Where log records go and how they are rendered."""

    console_level: int = logging.WARNING
    json: bool = False
    log_file: Optional[Path] = None

    @property
    def root_level(self) -> int:
        # The file keeps the whole run trace even when the console is quiet.
        if self.log_file is not None:
            return logging.DEBUG
        return self.console_level


def parse_level(value: str | int | None, default: int = logging.WARNING) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    return logging._nameToLevel.get(value.strip().upper(), default)


def parse_flag(value: str | None) -> Optional[bool]:
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def resolve_targets(
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | Path | None = None,
    json: bool | None = None,
) -> LogTargets:
    """Merge explicit arguments with the DSB_LOG_* environment; arguments win."""
    if level is None:
        level = os.environ.get(ENV_LEVEL)
    console_level = logging.DEBUG if debug else parse_level(level)
    if json is None:
        json = bool(parse_flag(os.environ.get(ENV_JSON)))
    if log_file is None:
        log_file = os.environ.get(ENV_FILE) or None
    return LogTargets(
        console_level=console_level,
        json=json,
        log_file=Path(log_file).expanduser() if log_file else None,
    )


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _formatter(json: bool, colors: bool) -> logging.Formatter:
    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_pre_chain())


def _tagged(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def build_handlers(targets: LogTargets) -> list[logging.Handler]:
    handlers = [
        _tagged(
            logging.StreamHandler(sys.stderr),
            targets.console_level,
            _formatter(targets.json, colors=sys.stderr.isatty()),
        )
    ]
    if targets.log_file is not None:
        targets.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _tagged(
                logging.FileHandler(targets.log_file, encoding="utf-8"),
                logging.DEBUG,
                _formatter(targets.json, colors=False),
            )
        )
    return handlers


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | Path | None = None,
    json: bool | None = None,
    force: bool = False,
) -> LogTargets:
    """Route stdlib and structlog records through one structlog formatter.

    The console handler defaults to WARNING so log lines do not tear the
    progress bar. A log file, when given, always records at DEBUG. Without
    ``force`` an already configured root logger is left alone.
    """
    targets = resolve_targets(level=level, debug=debug, log_file=log_file, json=json)
    root = logging.getLogger()

    if force or not root.handlers:
        for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
            root.removeHandler(handler)
            handler.close()
        for handler in build_handlers(targets):
            root.addHandler(handler)
        root.setLevel(targets.root_level)

    structlog.configure(
        processors=_pre_chain() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return targets
