"""Stable runner API surface."""

from dsb_runner.engine.cache import CacheInvalidator
from dsb_runner.engine.io_runner import DDProcess, DDRunner
from dsb_runner.engine.orchestrator import BenchmarkOrchestrator, artifact_path_for
from dsb_runner.engine.progress import ObservedProgress, ProgressSampler, SyntheticProgress
from dsb_runner.engine.round import RoundController
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.interfaces import BenchmarkListener, IORunner, PhaseProcess, ProgressHandle
from dsb_runner.models.config import BenchmarkConfig, RunnerSettings, SizePreset
from dsb_runner.models.results import (
    AggregateResult,
    ExitOutcome,
    Phase,
    ProgressSnapshot,
    RoundSample,
)
from dsb_runner.noop_ui import NoOpListener
from dsb_runner.services import environment, volumes
from dsb_runner.services.report import BenchmarkReport, save_report

__all__ = [
    "AggregateResult",
    "BenchmarkConfig",
    "BenchmarkListener",
    "BenchmarkOrchestrator",
    "BenchmarkReport",
    "CacheInvalidator",
    "DDProcess",
    "DDRunner",
    "ExitOutcome",
    "IORunner",
    "NoOpListener",
    "ObservedProgress",
    "Phase",
    "PhaseProcess",
    "ProgressHandle",
    "ProgressSampler",
    "ProgressSnapshot",
    "RoundController",
    "RoundSample",
    "RunnerSettings",
    "SizePreset",
    "StopToken",
    "SyntheticProgress",
    "artifact_path_for",
    "environment",
    "save_report",
    "volumes",
]
