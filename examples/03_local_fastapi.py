"""
Local development example for sls-multicloud.

Demonstrates:
- Serving the same handler behind FastAPI with the local provider
- Request validation middleware
- Invocation hooks for auditing

Run with: uvicorn 03_local_fastapi:api --reload
"""

from fastapi import FastAPI

from sls_multicloud import (
    AfterInvocation,
    App,
    ExceptionHandler,
    LocalProvider,
    Validation,
    add_function_route,
    reply,
)


async def audit(ctx, error):
    print(f"{ctx.request.method} {ctx.request.path} -> {ctx.response.status}")


app = App(LocalProvider(), hooks=[AfterInvocation(audit)])
app.register_middleware(ExceptionHandler())


@app.handler([Validation(lambda ctx: "name" in (ctx.request.json() or {}))])
async def create_item(ctx):
    """Create an item from the JSON body."""
    data = ctx.request.json()
    return reply({"id": "42", "name": data["name"]}, 201)


api = FastAPI(title="sls-multicloud local example")
add_function_route(api, "/items", create_item, methods=("POST",))
