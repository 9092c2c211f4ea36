"""Runner facade for disk-speed-bench.

Re-exports the engine-facing types most callers need.
"""

from dsb_runner.engine.orchestrator import BenchmarkOrchestrator
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.models.config import BenchmarkConfig, RunnerSettings, SizePreset
from dsb_runner.models.results import AggregateResult, RoundSample

__all__ = [
    "AggregateResult",
    "BenchmarkConfig",
    "BenchmarkOrchestrator",
    "RoundSample",
    "RunnerSettings",
    "SizePreset",
    "StopToken",
]
