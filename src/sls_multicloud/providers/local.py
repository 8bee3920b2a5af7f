"""Local provider: runs functions behind a Starlette or FastAPI app.

Used for local development and integration tests. The endpoint reads the
request body up front so context construction stays synchronous, and the
flushed response is a ``starlette.responses.Response``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter, FastAPI
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

from sls_multicloud._types import ComposedHandler, Invocable
from sls_multicloud.context import CloudContext
from sls_multicloud.headers import StringParams
from sls_multicloud.providers.base import Provider
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse, ResponsePayload

_BODY_STATE_KEY = "sls_body"


class LocalResponse(CloudResponse):
    provider = "local"

    def _commit(self, payload: ResponsePayload) -> Response:
        headers = dict(payload.headers)
        media_type = headers.pop("Content-Type", None) or headers.pop(
            "content-type", None
        )
        return Response(
            content=payload.serialized_body(),
            status_code=payload.status,
            headers=headers,
            media_type=media_type,
        )


class LocalContext(CloudContext):
    provider = "local"

    @property
    def starlette_request(self) -> Request:
        request: Request = self.runtime[0]
        return request


def parse_request(request: Request) -> CloudRequest:
    raw_body: bytes | None = getattr(request.state, _BODY_STATE_KEY, None) or None
    body: Any = raw_body
    if raw_body is not None:
        try:
            body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            body = raw_body

    return CloudRequest(
        method=request.method.upper(),
        path=request.url.path,
        headers=StringParams(request.headers.items()),
        query=dict(request.query_params),
        params={k: str(v) for k, v in request.path_params.items()},
        body=body,
        raw_body=raw_body,
    )


class LocalProvider(Provider):
    name = "local"

    def create_context(self, args: tuple[Any, ...]) -> LocalContext:
        request: Request = args[0]
        return LocalContext(
            runtime=args,
            request=parse_request(request),
            response=LocalResponse(),
        )

    def entrypoint(self, invoke: ComposedHandler) -> Invocable:
        async def endpoint(request: Request) -> Response:
            setattr(request.state, _BODY_STATE_KEY, await request.body())
            response: Response = await invoke(request)
            return response

        endpoint.invoke = invoke  # type: ignore[attr-defined]
        return endpoint


def add_function_route(
    app: FastAPI | APIRouter | Starlette,
    path: str,
    invocable: Invocable,
    *,
    methods: Sequence[str] = ("GET",),
    name: str | None = None,
) -> None:
    """Mount an invocable produced by a LocalProvider App on ``app``."""
    if isinstance(app, (FastAPI, APIRouter)):
        app.add_api_route(
            path,
            invocable,
            methods=list(methods),
            name=name,
            include_in_schema=False,
        )
    else:
        app.add_route(path, invocable, methods=list(methods), name=name)
