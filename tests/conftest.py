"""Shared fixtures: captured output, scripted input, sample registries."""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional

import pytest
from rich.console import Console

from tenant_console.config import reset_configuration
from tenant_console.lib.output import Output
from tenant_console.services.context import TenantContext

ENV_VARS = (
    "TENANT_CONSOLE_PRETTY_OUTPUT",
    "TENANT_CONSOLE_TIMESTAMPS",
    "TENANT_CONSOLE_REGISTRY",
    "TENANT_CONSOLE_CONTEXT",
)


class ScriptedInput:
    """Line reader that replays canned answers, then reports end-of-input."""

    def __init__(self, lines: Iterable[Optional[str]]):
        self._lines = list(lines)
        self.calls = 0

    def __call__(self) -> Optional[str]:
        self.calls += 1
        if not self._lines:
            return None
        return self._lines.pop(0)


class RecordingContext(TenantContext):
    """TenantContext that records every field assignment in order."""

    def __init__(self, *args, **kwargs):
        object.__setattr__(self, "writes", [])
        super().__init__(*args, **kwargs)
        self.writes.clear()

    def __setattr__(self, name, value):
        self.writes.append((name, value))
        super().__setattr__(name, value)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def console(buffer) -> Console:
    return Console(file=buffer, width=200, force_terminal=False, color_system=None)


@pytest.fixture
def output(console) -> Output:
    return Output(console=console, pretty=False)


@pytest.fixture
def scripted():
    """Factory: scripted(["2", ""]) -> reader callable."""
    return ScriptedInput


@pytest.fixture
def context() -> RecordingContext:
    return RecordingContext()


@pytest.fixture
def acme_only() -> dict:
    return {"acme": {"shard": "s1", "partner_code": "A"}}


@pytest.fixture
def two_tenants() -> dict:
    return {
        "acme": {"constants": {"shard": "s1", "mongo_db": "acme_docs", "partner_code": "A"}},
        "globex": {"constants": {"shard": "s2", "mongo_db": "globex_docs", "partner_code": "G"}},
    }
