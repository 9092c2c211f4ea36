"""Benchmark engine: dd runner, cache purge, progress, rounds and orchestration."""
