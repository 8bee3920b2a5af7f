"""CloudException hierarchy for invocation aborts and engine errors."""

from __future__ import annotations


class CloudException(Exception):
    """Base for all framework exceptions."""


class InvocationAbort(CloudException):
    """Controlled abort carrying an HTTP status code and detail."""

    def __init__(self, detail: str, *, status_code: int = 400) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class BadRequest(InvocationAbort):
    """Request failed validation (400)."""

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(detail, status_code=400)


class Unauthorized(InvocationAbort):
    """Caller is not authenticated (401)."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail, status_code=401)


class Forbidden(InvocationAbort):
    """Caller is not allowed to perform the request (403)."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail, status_code=403)


class NotFound(InvocationAbort):
    """Requested resource does not exist (404)."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail, status_code=404)


class MethodNotAllowed(InvocationAbort):
    """HTTP method is not accepted by the handler (405)."""

    def __init__(
        self, detail: str = "Method not allowed", *, allowed: tuple[str, ...] = ()
    ) -> None:
        super().__init__(detail, status_code=405)
        self.allowed = allowed


class ContextError(CloudException):
    """Context or response used outside its valid lifecycle."""


class CompletionTimeout(CloudException):
    """Callback-style handler did not signal completion in time."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Handler did not complete within {timeout}s")
        self.timeout = timeout


class ProviderNotFound(CloudException):
    """No provider is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown provider: {name!r}")
        self.name = name
