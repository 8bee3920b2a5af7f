"""Azure Functions provider.

Runtime args follow the Python worker's HTTP trigger bindings: the
``HttpRequest`` first, then the optional invocation ``Context`` and any
``Out`` bindings, in the order named by ``parameters``. Objects are
duck-typed against the ``azure.functions`` interfaces so the package
does not depend on the worker library.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import urlsplit

from sls_multicloud._types import ComposedHandler, Invocable
from sls_multicloud.context import CloudContext
from sls_multicloud.headers import StringParams
from sls_multicloud.providers.base import Provider
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse, ResponsePayload

logger = logging.getLogger(__name__)


class AzureResponse(CloudResponse):
    """Commits to the first ``Out`` binding, or returns for ``$return``."""

    provider = "azure"

    def __init__(
        self,
        output_binding: Any = None,
        response_class: Callable[..., Any] | None = None,
    ) -> None:
        super().__init__()
        self._output_binding = output_binding
        self._response_class = response_class

    def _commit(self, payload: ResponsePayload) -> Any:
        if self._response_class is not None:
            body = payload.serialized_body()
            response = self._response_class(
                body=b"" if body is None else body,
                status_code=payload.status,
                headers=payload.headers,
            )
        else:
            response = {
                "status": payload.status,
                "body": payload.body,
                "headers": payload.headers,
            }

        if self._output_binding is not None:
            self._output_binding.set(response)
            return None
        return response


class AzureContext(CloudContext):
    provider = "azure"

    @property
    def req(self) -> Any:
        return self.runtime[0] if self.runtime else None

    @property
    def function_context(self) -> Any:
        return next(
            (arg for arg in self.runtime[1:] if hasattr(arg, "invocation_id")), None
        )


def parse_request(req: Any) -> CloudRequest:
    """Translate an ``azure.functions.HttpRequest``-like object."""
    if req is None:
        return CloudRequest()

    raw_body: bytes | None = None
    get_body = getattr(req, "get_body", None)
    if callable(get_body):
        raw_body = get_body() or None

    body: Any = raw_body
    if raw_body is not None:
        try:
            body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            body = raw_body

    url = getattr(req, "url", "") or ""
    return CloudRequest(
        method=(getattr(req, "method", None) or "GET").upper(),
        path=urlsplit(url).path or "/",
        headers=StringParams(dict(getattr(req, "headers", None) or {})),
        query=dict(getattr(req, "params", None) or {}),
        params=dict(getattr(req, "route_params", None) or {}),
        body=body,
        raw_body=raw_body,
    )


class AzureProvider(Provider):
    """Azure Functions HTTP trigger adapter.

    Without ``response_class`` the committed response is a plain dict, which
    suits tests and custom bindings. The Python worker only converts ``str``
    or ``func.HttpResponse`` for HTTP outputs, so deployments pass
    ``response_class=func.HttpResponse``.
    """

    name = "azure"

    def __init__(
        self,
        *,
        response_class: Callable[..., Any] | None = None,
        parameters: Sequence[str] = ("req", "context"),
    ) -> None:
        self._response_class = response_class
        self._parameters = tuple(parameters)

    def create_context(self, args: tuple[Any, ...]) -> AzureContext:
        req = args[0] if args else None
        extras = args[1:]
        function_context = next(
            (arg for arg in extras if hasattr(arg, "invocation_id")), None
        )
        output_binding = next(
            (arg for arg in extras if callable(getattr(arg, "set", None))), None
        )
        return AzureContext(
            runtime=args,
            request=parse_request(req),
            response=AzureResponse(output_binding, self._response_class),
            invocation_id=getattr(function_context, "invocation_id", None),
        )

    def entrypoint(self, invoke: ComposedHandler) -> Invocable:
        parameters = self._parameters

        async def main(*args: Any, **kwargs: Any) -> Any:
            # The worker passes bindings by name
            ordered = list(args)
            ordered.extend(kwargs.get(name) for name in parameters[len(args) :])
            while ordered and ordered[-1] is None:
                ordered.pop()
            return await invoke(*ordered)

        main.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
            [
                inspect.Parameter(name, inspect.Parameter.POSITIONAL_OR_KEYWORD)
                for name in parameters
            ]
        )
        main.invoke = invoke  # type: ignore[attr-defined]
        return main
