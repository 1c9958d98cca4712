"""
Local HTTP server for the DynamoDB gateway

Serves the same routes as the Lambda proxy handler by turning each request
into an API Gateway (v1) proxy event. Meant for local development against
DynamoDB Local (ENV=local, DYNAMODB_ENDPOINT=http://localhost:8000).

    python -m dynamo_gateway.local_server
"""

from __future__ import annotations

import base64
import logging

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from dynamo_gateway import config
from dynamo_gateway.router import route_handler

logger = logging.getLogger(__name__)

app = FastAPI(title="DynamoDB Gateway", version="1.0.0")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


async def build_event(request: Request) -> dict:
    """Translate a Starlette request into an API Gateway REST proxy event."""
    body = await request.body()
    # Raw bytes travel base64-encoded, parse_json_body decodes and validates them
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "headers": dict(request.headers),
        "queryStringParameters": dict(request.query_params) or None,
        "pathParameters": None,
        "body": base64.b64encode(body).decode("ascii") if body else None,
        "isBase64Encoded": bool(body),
        "requestContext": {},
    }


@app.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
)
async def proxy(request: Request, full_path: str):
    event = await build_event(request)
    # Handlers block on boto3, keep them off the event loop
    result = await run_in_threadpool(route_handler, event, None)
    return Response(
        content=result.get("body") or b"",
        status_code=result["statusCode"],
        headers=result.get("headers"),
    )


def main():
    import uvicorn

    settings = config.get_settings()
    logging.basicConfig(level=settings.log_level)

    # Fail at startup, not on the first request, when credentials are missing
    config.get_store()

    logger.info(f"Server running at http://localhost:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
