"""Presenter for the end-of-run summary."""

from __future__ import annotations

from typing import List

from dsb_runner.models.results import AggregateResult
from dsb_runner.services.assessment import performance_tier, recommendations
from dsb_ui.ui.interfaces import UIAdapter

SUMMARY_COLUMNS = ["Round", "Write (MB/s)", "Read (MB/s)"]


def build_summary_rows(result: AggregateResult) -> List[List[str]]:
    """One row per round followed by the averages row."""
    rows = [
        [str(sample.round_index), f"{sample.write_mbps:.2f}", f"{sample.read_mbps:.2f}"]
        for sample in result.samples
    ]
    rows.append(["Average", f"{result.average_write_mbps:.2f}", f"{result.average_read_mbps:.2f}"])
    return rows


def render_summary(ui: UIAdapter, result: AggregateResult) -> None:
    ui.show_table("Benchmark results", SUMMARY_COLUMNS, build_summary_rows(result))
    ui.show_info(f"Write performance: {performance_tier(result.average_write_mbps).description}")
    ui.show_info(f"Read performance: {performance_tier(result.average_read_mbps).description}")
    for tip in recommendations(result.average_write_mbps, result.average_read_mbps):
        ui.show_info(f"  - {tip}")
