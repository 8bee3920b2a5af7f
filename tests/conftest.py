"""Shared pytest fixtures for sls-multicloud tests."""

from __future__ import annotations

from typing import Any

import pytest

from sls_multicloud.app import App
from sls_multicloud.config import Settings
from sls_multicloud.providers.memory import MemoryContext, MemoryProvider
from sls_multicloud.request import CloudRequest


@pytest.fixture
def provider() -> MemoryProvider:
    return MemoryProvider()


@pytest.fixture
def app(provider: MemoryProvider) -> App:
    """App over a MemoryProvider with default settings (environment ignored)."""
    return App(provider, settings=Settings())


@pytest.fixture
def make_context(provider: MemoryProvider) -> Any:
    """Factory for MemoryContext instances."""

    def _make(request: CloudRequest | None = None, *args: Any) -> MemoryContext:
        runtime = (request, *args) if request is not None else args
        return provider.create_context(tuple(runtime))

    return _make


@pytest.fixture
def order() -> list[str]:
    """Shared execution log for ordering assertions."""
    return []
