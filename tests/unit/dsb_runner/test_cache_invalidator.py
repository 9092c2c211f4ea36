"""Tests for best-effort cache purging."""

from __future__ import annotations

import subprocess

import pytest

from dsb_runner.engine.cache import DARWIN_PURGE, LINUX_DROP_CACHES, CacheInvalidator

pytestmark = [pytest.mark.unit, pytest.mark.unit_runner]


def test_linux_syncs_then_drops_caches() -> None:
    calls = []
    CacheInvalidator(system="Linux", run=lambda cmd, **_: calls.append(cmd)).purge()
    assert calls == [["sync"], LINUX_DROP_CACHES]


def test_darwin_uses_purge() -> None:
    assert CacheInvalidator(system="Darwin").commands() == [["sync"], DARWIN_PURGE]


def test_purge_never_raises_without_privileges() -> None:
    calls = []

    def _run(cmd, **kwargs):
        calls.append(cmd)
        assert kwargs["check"] is True
        if cmd[0] == "sudo":
            raise subprocess.CalledProcessError(1, cmd)

    CacheInvalidator(system="Linux", run=_run).purge()
    assert len(calls) == 2


def test_purge_stops_after_first_failure() -> None:
    calls = []

    def _run(cmd, **_kwargs):
        calls.append(cmd)
        raise FileNotFoundError(cmd[0])

    CacheInvalidator(system="Linux", run=_run).purge()
    assert calls == [["sync"]]
