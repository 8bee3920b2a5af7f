"""
AWS Lambda example for sls-multicloud.

Demonstrates:
- Building a Lambda handler with App.use()
- Default middleware registered on the App
- Reading the API Gateway event through ctx.request

Deploy with the handler set to ``01_aws_lambda.handler``.
"""

from sls_multicloud import (
    App,
    AwsProvider,
    ExceptionHandler,
    NotFound,
    Performance,
    configure_logging,
)

configure_logging(level="INFO")

app = App(AwsProvider()).register_middleware(ExceptionHandler(), Performance())

ITEMS = {"1": {"id": "1", "name": "widget"}}


async def get_item(ctx):
    """Return one item by path parameter."""
    item = ITEMS.get(ctx.request.params.get("id", ""))
    if item is None:
        raise NotFound("Item not found")
    return item


handler = app.use(get_item)


if __name__ == "__main__":
    event = {"httpMethod": "GET", "path": "/items/1", "pathParameters": {"id": "1"}}
    print(handler(event, None))
