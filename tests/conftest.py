# tests/conftest.py
"""
Shared test setup for project.

Every test starts from a clean runtime (info level, no color) with no
libpack environment overrides. Tests that run a build use the
`fake_tools` fixture, which points libpack at scripted stand-ins for
esbuild and tsc.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from pytest import Config, Item as PytestItem

import libpack.runtime as mod_runtime
from libpack.constants import (
    DEFAULT_ENV_BUNDLER,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_TYPECHECKER,
    DEFAULT_ENV_WATCH_INTERVAL,
)
from libpack.meta import PROGRAM_ENV
from tests.utils import install_fake_tools, make_trace

TRACE = make_trace("⚡️")

_ENV_OVERRIDES = [
    f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}",
    DEFAULT_ENV_LOG_LEVEL,
    f"{PROGRAM_ENV}_{DEFAULT_ENV_WATCH_INTERVAL}",
    f"{PROGRAM_ENV}_{DEFAULT_ENV_BUNDLER}",
    f"{PROGRAM_ENV}_{DEFAULT_ENV_TYPECHECKER}",
]


@pytest.fixture(autouse=True)
def clean_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset shared runtime state and env overrides around each test."""
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setitem(mod_runtime.current_runtime, "log_level", "info")
    monkeypatch.setitem(mod_runtime.current_runtime, "use_color", False)
    yield
    TRACE("runtime restored")


@pytest.fixture
def fake_tools(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Install fake esbuild/tsc commands for the duration of a test."""
    return install_fake_tools(tmp_path_factory.mktemp("tools"), monkeypatch)


def pytest_collection_modifyitems(
    config: Config,
    items: list[PytestItem],
) -> None:
    """Automatically skip debug tests unless asked for."""
    keywords = config.getoption("-k") or ""
    if "debug" in keywords.lower():
        return  # user explicitly requested them, don't skip

    for item in items:
        if "debug" in item.keywords:
            item.add_marker(
                pytest.mark.skip(reason="Skipped debug test (use -k debug to run)")
            )
