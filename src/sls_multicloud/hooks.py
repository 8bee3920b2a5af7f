"""InvocationHook base and convenience hook classes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from sls_multicloud.context import CloudContext


class InvocationHook:
    """Base abstraction for lifecycle hooks. All methods are no-op by default."""

    async def on_invocation_start(self, ctx: CloudContext) -> None:
        pass

    async def on_invocation_end(
        self, ctx: CloudContext, error: BaseException | None
    ) -> None:
        pass


class BeforeInvocation(InvocationHook):
    """Convenience hook that only fires before the chain runs."""

    def __init__(self, callback: Callable[[CloudContext], Awaitable[None]]) -> None:
        self._callback = callback

    async def on_invocation_start(self, ctx: CloudContext) -> None:
        await self._callback(ctx)


class AfterInvocation(InvocationHook):
    """Convenience hook that fires after the response has been flushed."""

    def __init__(
        self,
        callback: Callable[[CloudContext, BaseException | None], Awaitable[None]],
    ) -> None:
        self._callback = callback

    async def on_invocation_end(
        self, ctx: CloudContext, error: BaseException | None
    ) -> None:
        await self._callback(ctx, error)
