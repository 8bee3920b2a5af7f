"""App: dispatcher producing one host invocable per middleware + handler."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from sls_multicloud._types import ComposedHandler, Handler, Invocable, Middleware
from sls_multicloud.composer import compose
from sls_multicloud.config import Settings
from sls_multicloud.context import CloudContext
from sls_multicloud.hooks import InvocationHook
from sls_multicloud.providers.base import Provider, get_provider
from sls_multicloud.trace import InvocationTrace
from sls_multicloud.unwrap import wrap_handler

logger = logging.getLogger(__name__)


class App:
    """Builds invocables that run middleware and a handler per host call.

    Default middleware registered on the App runs ahead of the middleware
    given to ``use()`` for every invocation, including invocables created
    before the registration.
    """

    def __init__(
        self,
        provider: Provider | None = None,
        *,
        settings: Settings | None = None,
        hooks: Iterable[InvocationHook] = (),
    ) -> None:
        self.settings = settings if settings is not None else Settings.from_env()
        self.provider = (
            provider if provider is not None else get_provider(self.settings.provider)
        )
        self._middlewares: list[Middleware] = []
        self._hooks: list[InvocationHook] = list(hooks)

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return tuple(self._middlewares)

    def register_middleware(self, *middlewares: Middleware) -> App:
        self._middlewares.extend(middlewares)
        return self

    def add_hook(self, hook: InvocationHook) -> App:
        self._hooks.append(hook)
        return self

    def use(self, *args: Any) -> Invocable:
        """Create a host invocable.

        Accepts ``use(handler)`` or ``use([middleware, ...], handler)``.
        """
        middlewares, handler = _parse_use_args(args)
        terminal = wrap_handler(
            handler, completion_timeout=self.settings.completion_timeout
        )

        async def invoke(*runtime_args: Any) -> Any:
            return await self._dispatch(middlewares, terminal, runtime_args)

        return self.provider.entrypoint(invoke)

    def handler(
        self, middlewares: Sequence[Middleware] = ()
    ) -> Callable[[Handler], Invocable]:
        """Decorator form of ``use()``."""

        def decorator(func: Handler) -> Invocable:
            return self.use(list(middlewares), func)

        return decorator

    async def _dispatch(
        self,
        middlewares: Sequence[Middleware],
        terminal: ComposedHandler,
        runtime_args: tuple[Any, ...],
    ) -> Any:
        ctx = self.provider.create_context(runtime_args)
        trace = InvocationTrace() if self.settings.debug else None
        chain = compose([*self._middlewares, *middlewares], terminal, trace=trace)
        extra = _log_extra(ctx)

        logger.debug("Invocation started", extra=extra)
        start = time.perf_counter()
        error: BaseException | None = None
        try:
            for hook in self._hooks:
                await hook.on_invocation_start(ctx)
            await chain(ctx, *runtime_args)
        except BaseException as exc:
            error = exc
            if isinstance(exc, Exception):
                logger.error(
                    f"Unhandled error in invocation: {exc}",
                    extra={**extra, "error_type": type(exc).__name__},
                    exc_info=True,
                )
            raise
        finally:
            if trace is not None:
                trace.total_duration_ms = (time.perf_counter() - start) * 1000
                trace.outcome = "OK" if error is None else "ERROR"
                trace.error = error
                ctx.state["trace"] = trace
            try:
                output = ctx.flush()
            finally:
                for hook in self._hooks:
                    await hook.on_invocation_end(ctx, error)

        logger.debug(
            "Invocation completed",
            extra={
                **extra,
                "status_code": ctx.response.status,
                "duration_ms": (time.perf_counter() - start) * 1000,
            },
        )
        return output


def _parse_use_args(args: tuple[Any, ...]) -> tuple[list[Middleware], Handler]:
    if len(args) == 1 and callable(args[0]):
        return [], args[0]
    if len(args) == 2 and isinstance(args[0], (list, tuple)) and callable(args[1]):
        return list(args[0]), args[1]
    raise TypeError("use() expects (handler) or (middlewares, handler)")


def _log_extra(ctx: CloudContext) -> dict[str, Any]:
    return {"invocation_id": ctx.invocation_id, "provider": ctx.provider}
