"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from allure_adapter.config import get_settings
from allure_adapter.listener import AllureListener
from tests.factories import FakeClock, SequentialIds


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Isolate cached settings and logging configuration between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Report output directory inside the test's temp dir (not created yet)."""
    return tmp_path / "allure-report"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def make_listener(
    output_dir: Path, clock: FakeClock, ids: SequentialIds
) -> Callable[..., AllureListener]:
    """Factory for listeners wired to the fake clock and id generator."""

    def _make(**kwargs) -> AllureListener:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("id_generator", ids)
        return AllureListener(output_dir, **kwargs)

    return _make


@pytest.fixture
def listener(make_listener: Callable[..., AllureListener]) -> AllureListener:
    return make_listener()
