"""Tests for ExceptionHandler middleware."""

from __future__ import annotations

from typing import Any

from sls_multicloud.app import App
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import MethodNotAllowed, NotFound
from sls_multicloud.middleware import ExceptionHandler


class TestExceptionHandler:
    async def test_abort_becomes_response(self, app: App) -> None:
        async def handler(ctx: CloudContext) -> None:
            raise NotFound("No such item")

        payload = await app.use([ExceptionHandler()], handler)()
        assert payload.status == 404
        assert payload.body == {"error": "No such item"}

    async def test_unexpected_error_becomes_500(self, app: App) -> None:
        async def handler(ctx: CloudContext) -> None:
            raise RuntimeError("db down")

        payload = await app.use([ExceptionHandler()], handler)()
        assert payload.status == 500
        assert payload.body == {"error": "Internal server error"}

    async def test_expose_details(self, app: App) -> None:
        async def handler(ctx: CloudContext) -> None:
            raise RuntimeError("db down")

        payload = await app.use([ExceptionHandler(expose_details=True)], handler)()
        assert payload.body == {
            "error": "Internal server error",
            "detail": "db down",
            "type": "RuntimeError",
        }

    async def test_error_after_send_overrides_response(self, app: App) -> None:
        async def handler(ctx: CloudContext) -> None:
            ctx.send("partial", 200)
            raise RuntimeError("late failure")

        payload = await app.use([ExceptionHandler()], handler)()
        assert payload.status == 500

    async def test_errors_from_later_middleware_caught(self, app: App) -> None:
        async def failing(ctx: CloudContext, next: Any) -> None:
            raise MethodNotAllowed(allowed=("POST",))

        payload = await app.use([ExceptionHandler(), failing], lambda ctx: "ok")()
        assert payload.status == 405
        assert payload.headers["Allow"] == "POST"

    async def test_success_untouched(self, app: App) -> None:
        payload = await app.use([ExceptionHandler()], lambda ctx: {"ok": True})()
        assert payload.status == 200
        assert payload.body == {"ok": True}

    async def test_registered_as_default(self, app: App) -> None:
        app.register_middleware(ExceptionHandler())

        async def handler(ctx: CloudContext) -> None:
            raise ValueError("boom")

        payload = await app.use(handler)()
        assert payload.status == 500
