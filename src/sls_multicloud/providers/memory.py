"""In-memory provider: records committed responses instead of sending them."""

from __future__ import annotations

from typing import Any

from sls_multicloud.context import CloudContext
from sls_multicloud.providers.base import Provider
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse, ResponsePayload


class MemoryResponse(CloudResponse):
    provider = "memory"

    def __init__(self, sink: list[ResponsePayload]) -> None:
        super().__init__()
        self._sink = sink

    def _commit(self, payload: ResponsePayload) -> ResponsePayload:
        self._sink.append(payload)
        return payload


class MemoryContext(CloudContext):
    provider = "memory"


class MemoryProvider(Provider):
    """Provider for tests only.

    A ``CloudRequest`` passed as the first runtime arg becomes the request;
    every flush is appended to ``commits`` and every context to
    ``contexts``. Both lists grow for the lifetime of the provider and keep
    flushed contexts alive, so do not select it with ``SLS_PROVIDER`` in a
    deployed function.
    """

    name = "memory"

    def __init__(self) -> None:
        self.commits: list[ResponsePayload] = []
        self.contexts: list[MemoryContext] = []

    def create_context(self, args: tuple[Any, ...]) -> MemoryContext:
        request = args[0] if args and isinstance(args[0], CloudRequest) else None
        ctx = MemoryContext(
            runtime=args,
            request=request or CloudRequest(),
            response=MemoryResponse(self.commits),
        )
        self.contexts.append(ctx)
        return ctx
