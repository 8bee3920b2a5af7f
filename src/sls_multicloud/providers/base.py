"""Provider: strategy object that adapts one host runtime to the App."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from sls_multicloud._types import ComposedHandler, Invocable
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import ProviderNotFound


class Provider(ABC):
    """Builds a fresh CloudContext per invocation and adapts the host signature."""

    name: ClassVar[str]

    @abstractmethod
    def create_context(self, args: tuple[Any, ...]) -> CloudContext: ...

    def entrypoint(self, invoke: ComposedHandler) -> Invocable:
        """Adapt the async invocable to what the host runtime calls.

        The default suits hosts that await coroutine functions.
        """
        return invoke


_REGISTRY: dict[str, Callable[[], Provider]] = {}


def register_provider(name: str, factory: Callable[[], Provider]) -> None:
    _REGISTRY[name] = factory


def get_provider(name: str | None) -> Provider:
    """Instantiate the provider registered under ``name``."""
    if name is None or name not in _REGISTRY:
        raise ProviderNotFound(name or "")
    return _REGISTRY[name]()


def available_providers() -> list[str]:
    return sorted(_REGISTRY)
