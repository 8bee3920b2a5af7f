"""Test utilities for functions built on sls_multicloud."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sls_multicloud._types import Invocable
from sls_multicloud.headers import StringParams
from sls_multicloud.providers.memory import MemoryContext, MemoryProvider
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import ResponsePayload

__all__ = ["ContextBuilder", "MemoryContext", "MemoryProvider"]


class ContextBuilder:
    """Fluent builder for requests fed to a MemoryProvider App."""

    def __init__(self) -> None:
        self._method = "GET"
        self._path = "/"
        self._headers = StringParams()
        self._query: dict[str, str] = {}
        self._params: dict[str, str] = {}
        self._body: Any = None

    def with_method(self, method: str) -> ContextBuilder:
        self._method = method.upper()
        return self

    def with_path(self, path: str) -> ContextBuilder:
        self._path = path
        return self

    def with_header(self, name: str, value: str) -> ContextBuilder:
        self._headers[name] = value
        return self

    def with_query(self, query: Mapping[str, str]) -> ContextBuilder:
        self._query.update(query)
        return self

    def with_params(self, params: Mapping[str, str]) -> ContextBuilder:
        self._params.update(params)
        return self

    def with_body(self, body: Any) -> ContextBuilder:
        self._body = body
        return self

    def build_request(self) -> CloudRequest:
        raw_body = self._body.encode("utf-8") if isinstance(self._body, str) else None
        return CloudRequest(
            method=self._method,
            path=self._path,
            headers=self._headers.copy(),
            query=dict(self._query),
            params=dict(self._params),
            body=self._body,
            raw_body=raw_body,
        )

    async def invoke(self, invocable: Invocable, *extra: Any) -> ResponsePayload:
        """Call ``invocable`` with the built request and return the commit."""
        payload: ResponsePayload = await invocable(self.build_request(), *extra)
        return payload
