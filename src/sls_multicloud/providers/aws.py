"""AWS Lambda provider.

Handles API Gateway REST (payload v1), HTTP API (payload v2) and Lambda
Function URL events. The Python Lambda runtime calls handlers
synchronously, so the entrypoint drives each invocation with
``asyncio.run`` and returns the proxy-integration response dict.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from typing import Any, Protocol

from sls_multicloud._types import ComposedHandler, Invocable
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import BadRequest
from sls_multicloud.headers import StringParams
from sls_multicloud.providers.base import Provider
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse, ResponsePayload

logger = logging.getLogger(__name__)


class LambdaContext(Protocol):
    """Subset of the Lambda context object used for request correlation."""

    aws_request_id: str
    function_name: str | None


class AwsResponse(CloudResponse):
    provider = "aws"

    def _commit(self, payload: ResponsePayload) -> dict[str, Any]:
        body = payload.serialized_body()
        response: dict[str, Any] = {
            "statusCode": payload.status,
            "headers": payload.headers,
            "body": "" if body is None else body,
            "isBase64Encoded": False,
        }
        if isinstance(body, bytes):
            response["body"] = base64.b64encode(body).decode("ascii")
            response["isBase64Encoded"] = True
        return response


class AwsContext(CloudContext):
    provider = "aws"

    @property
    def event(self) -> dict[str, Any]:
        return self.runtime[0] if self.runtime else {}

    @property
    def lambda_context(self) -> LambdaContext | None:
        return self.runtime[1] if len(self.runtime) > 1 else None


def parse_event(event: dict[str, Any]) -> CloudRequest:
    """Translate an API Gateway / Function URL event into a CloudRequest."""
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method") or event.get("httpMethod") or "GET"
    path = event.get("rawPath") or http.get("path") or event.get("path") or "/"

    # Header names are case-insensitive, event sources disagree on casing
    raw_headers = event.get("headers") or {}
    headers = StringParams({k.lower(): v for k, v in raw_headers.items()})
    # Payload v2 moves cookies out of the headers
    cookies = event.get("cookies")
    if cookies and "cookie" not in headers:
        headers["cookie"] = "; ".join(cookies)

    body = event.get("body")
    raw_body: bytes | None = None
    if body is not None:
        if event.get("isBase64Encoded", False):
            try:
                raw_body = base64.b64decode(body)
            except (binascii.Error, ValueError) as e:
                raise BadRequest(f"Invalid base64-encoded body: {e}") from e
            try:
                body = raw_body.decode("utf-8")
            except UnicodeDecodeError:
                body = raw_body
        else:
            raw_body = body.encode("utf-8") if isinstance(body, str) else None

    return CloudRequest(
        method=method.upper(),
        path=path,
        headers=headers,
        query=dict(event.get("queryStringParameters") or {}),
        params=dict(event.get("pathParameters") or {}),
        body=body,
        raw_body=raw_body,
    )


class AwsProvider(Provider):
    name = "aws"

    def create_context(self, args: tuple[Any, ...]) -> AwsContext:
        event = args[0] if args else {}
        lambda_context = args[1] if len(args) > 1 else None
        request_id = getattr(lambda_context, "aws_request_id", None)
        return AwsContext(
            runtime=args,
            request=parse_event(event or {}),
            response=AwsResponse(),
            invocation_id=request_id,
        )

    def entrypoint(self, invoke: ComposedHandler) -> Invocable:
        def lambda_handler(event: dict[str, Any], context: Any = None) -> Any:
            logger.debug(
                "Lambda invocation received",
                extra={
                    "request_id": getattr(context, "aws_request_id", None),
                    "function_name": getattr(context, "function_name", None),
                },
            )
            return asyncio.run(invoke(event, context))

        lambda_handler.invoke = invoke  # type: ignore[attr-defined]
        return lambda_handler
