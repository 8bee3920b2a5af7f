"""Tests for wrap_handler() result unwrapping."""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Any

import pytest

from sls_multicloud.app import App
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import CompletionTimeout
from sls_multicloud.result import deferred, reply
from sls_multicloud.unwrap import wrap_handler


class TestReturnValues:
    async def test_sync_plain_value(self, make_context: Any) -> None:
        ctx = make_context()
        await wrap_handler(lambda ctx: {"foo": "bar"})(ctx)
        assert ctx.response.body == {"foo": "bar"}
        assert ctx.response.status == 200

    async def test_async_plain_value(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> dict[str, str]:
            return {"foo": "bar"}

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == {"foo": "bar"}
        assert ctx.response.status == 200

    async def test_sync_function_returning_awaitable(
        self, make_context: Any
    ) -> None:
        async def produce() -> str:
            return "later"

        ctx = make_context()
        await wrap_handler(lambda ctx: produce())(ctx)
        assert ctx.response.body == "later"

    async def test_response_shape(self, make_context: Any) -> None:
        ctx = make_context()
        await wrap_handler(lambda ctx: {"body": {"foo": "bar"}, "status": 200})(ctx)
        assert ctx.response.body == {"foo": "bar"}
        assert ctx.response.status == 200

    async def test_response_shape_with_status_and_headers(
        self, make_context: Any
    ) -> None:
        ctx = make_context()
        await wrap_handler(
            lambda ctx: {"body": "created", "status": 201, "headers": {"X-Id": "7"}}
        )(ctx)
        assert ctx.response.status == 201
        assert ctx.response.headers["x-id"] == "7"

    async def test_explicit_reply(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> Any:
            return reply({"body": "literal"}, status=202)

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == {"body": "literal"}
        assert ctx.response.status == 202

    async def test_zero_arg_handler(self, make_context: Any) -> None:
        ctx = make_context()
        await wrap_handler(lambda: "no args")(ctx)
        assert ctx.response.body == "no args"

    async def test_returns_raw_value(self, make_context: Any) -> None:
        assert await wrap_handler(lambda ctx: 5)(make_context()) == 5


class TestSelfCommitted:
    async def test_async_none_after_send(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> None:
            ctx.send("void", 200)

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == "void"

    async def test_async_none_with_direct_mutation(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> None:
            ctx.response.body = "mutated"
            ctx.response.status = 204

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == "mutated"
        assert ctx.completed is False

    async def test_sync_none_with_direct_mutation(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            ctx.response.set_body("mutated")
            ctx.response.set_status(201)

        ctx = make_context()
        await asyncio.wait_for(wrap_handler(handler)(ctx), timeout=1)
        assert ctx.response.body == "mutated"
        assert ctx.response.status == 201
        assert ctx.completed is False

    async def test_sync_none_with_attribute_assignment(
        self, make_context: Any
    ) -> None:
        def handler(ctx: CloudContext) -> None:
            ctx.response.body = {"id": 1}

        ctx = make_context()
        await asyncio.wait_for(wrap_handler(handler)(ctx), timeout=1)
        assert ctx.response.body == {"id": 1}

    async def test_sync_direct_mutation_through_app(self, app: App) -> None:
        def handler(ctx: CloudContext) -> None:
            ctx.response.set_body("mutated")
            ctx.response.set_status(201)

        payload = await asyncio.wait_for(app.use(handler)(), timeout=1)
        assert payload.status == 201
        assert payload.body == "mutated"

    async def test_upstream_writes_do_not_skip_wait(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            asyncio.get_running_loop().call_soon(ctx.send, "callback", 200)

        ctx = make_context()
        ctx.response.set_status(202)
        await wrap_handler(handler, completion_timeout=1)(ctx)
        assert ctx.completed is True
        assert ctx.response.body == "callback"

    async def test_rejection_propagates_without_commit(
        self, make_context: Any
    ) -> None:
        async def handler(ctx: CloudContext) -> None:
            raise ValueError("rejected")

        ctx = make_context()
        with pytest.raises(ValueError, match="rejected"):
            await wrap_handler(handler)(ctx)
        assert ctx.completed is False
        assert ctx.response.body is None


class TestCallbackStyle:
    async def test_nested_callbacks(self, make_context: Any) -> None:
        calls: list[str] = []

        def handler(ctx: CloudContext) -> None:
            loop = asyncio.get_running_loop()

            def inner() -> None:
                calls.append("inner")
                ctx.send("callback", 200)

            loop.call_soon(lambda: loop.call_soon(inner))

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert calls == ["inner"]
        assert ctx.response.body == "callback"
        assert ctx.response.status == 200

    async def test_done_with_result(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            asyncio.get_running_loop().call_soon(ctx.done, None, "via done")

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == "via done"

    async def test_done_with_error_raises(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            asyncio.get_running_loop().call_soon(ctx.done, RuntimeError("cb failed"))

        with pytest.raises(RuntimeError, match="cb failed"):
            await wrap_handler(handler)(make_context())

    async def test_sync_done_called_inline(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            ctx.done()

        ctx = make_context()
        await wrap_handler(handler, completion_timeout=0.05)(ctx)
        assert ctx.completed is True

    async def test_async_handler_done_error_raises(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> None:
            ctx.done(KeyError("missing"))

        with pytest.raises(KeyError):
            await wrap_handler(handler)(make_context())

    async def test_deferred_waits(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> Any:
            asyncio.get_running_loop().call_soon(ctx.send, "deferred", 202)
            return deferred()

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.status == 202

    async def test_send_from_worker_thread(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            threading.Timer(0.05, ctx.send, args=("from thread", 200)).start()

        ctx = make_context()
        start = time.perf_counter()
        await asyncio.wait_for(wrap_handler(handler)(ctx), timeout=5)
        assert time.perf_counter() - start < 1
        assert ctx.response.body == "from thread"

    async def test_done_error_from_worker_thread(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            error = RuntimeError("thread failed")
            threading.Timer(0.05, ctx.done, args=(error,)).start()

        with pytest.raises(RuntimeError, match="thread failed"):
            await asyncio.wait_for(wrap_handler(handler)(make_context()), timeout=5)

    async def test_never_completing_times_out(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> None:
            pass

        with pytest.raises(CompletionTimeout):
            await wrap_handler(handler, completion_timeout=0.01)(make_context())


class TestDualCompletion:
    async def test_explicit_send_wins_over_return(self, make_context: Any) -> None:
        async def handler(ctx: CloudContext) -> str:
            ctx.send("explicit", 201)
            return "returned"

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == "explicit"
        assert ctx.response.status == 201

    async def test_done_wins_over_return(self, make_context: Any) -> None:
        def handler(ctx: CloudContext) -> dict[str, Any]:
            ctx.done(None, "from done")
            return {"body": "from return", "status": 500}

        ctx = make_context()
        await wrap_handler(handler)(ctx)
        assert ctx.response.body == "from done"
        assert ctx.response.status == 200


class TestPassthroughArgs:
    async def test_args_forwarded_when_accepted(self, make_context: Any) -> None:
        received: list[Any] = []

        def handler(ctx: CloudContext, event: Any, context: Any) -> str:
            received.extend([event, context])
            return "ok"

        await wrap_handler(handler)(make_context(), "event", "lambda-ctx")
        assert received == ["event", "lambda-ctx"]

    async def test_extra_args_truncated(self, make_context: Any) -> None:
        received: list[Any] = []

        def handler(ctx: CloudContext, first: Any) -> str:
            received.append(first)
            return "ok"

        await wrap_handler(handler)(make_context(), "a", "b", "c")
        assert received == ["a"]

    async def test_varargs_receive_everything(self, make_context: Any) -> None:
        received: list[Any] = []

        def handler(ctx: CloudContext, *args: Any) -> str:
            received.extend(args)
            return "ok"

        await wrap_handler(handler)(make_context(), 1, 2, 3)
        assert received == [1, 2, 3]

    async def test_terminal_keeps_handler_name(self) -> None:
        def get_items(ctx: CloudContext) -> list[str]:
            return []

        assert wrap_handler(get_items).__name__ == "get_items"
