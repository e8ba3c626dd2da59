"""Pytest configuration helpers for the favorites project.

The ``pytest`` plugin system automatically imports ``tests.conftest``. We use
that behavior to ensure the repository root is present on ``sys.path`` before
any test modules import application code.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from backend.settings import get_settings
from frontend.settings import get_client_settings
from tests import _ensure_repo_on_path


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest.fixture(autouse=True)
def reset_cached_settings() -> Iterator[None]:
    """Drop cached settings so environment patches take effect per test."""

    get_settings.cache_clear()
    get_client_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_client_settings.cache_clear()
