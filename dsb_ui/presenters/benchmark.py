"""Bridges runner events to a UI adapter."""

from __future__ import annotations

from pathlib import Path

from dsb_runner.interfaces import BenchmarkListener, ProgressHandle
from dsb_runner.models.config import size_tag
from dsb_runner.models.results import AggregateResult, Phase, RoundSample
from dsb_ui.presenters.summary import render_summary
from dsb_ui.ui.interfaces import UIAdapter


class UIBenchmarkListener(BenchmarkListener):
    """Renders round headers, per-phase progress bars and the final summary."""

    def __init__(self, ui: UIAdapter):
        self.ui = ui

    def benchmark_started(self, target: Path, size_bytes: int, rounds: int) -> None:
        self.ui.show_rule("Disk speed benchmark")
        self.ui.show_info(f"Target: {target}")
        self.ui.show_info(f"File size: {size_tag(size_bytes)}, rounds: {rounds}")

    def round_started(self, round_index: int, total_rounds: int) -> None:
        self.ui.show_rule(f"Round {round_index}/{total_rounds}")

    def phase_started(self, phase: Phase, total_bytes: int) -> ProgressHandle:
        return self.ui.create_progress(phase.label, total_bytes)

    def phase_completed(self, phase: Phase, throughput_mbps: float) -> None:
        direction = "Write" if phase is Phase.WRITE else "Read"
        self.ui.show_success(f"{direction} speed: {throughput_mbps:.2f} MB/s")

    def round_completed(self, sample: RoundSample) -> None:
        pass

    def benchmark_completed(self, result: AggregateResult) -> None:
        render_summary(self.ui, result)
