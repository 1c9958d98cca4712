"""
Method/path routing for API Gateway proxy events

Lets a single Lambda function (or the local server) serve every endpoint.
Both REST API (payload v1) and HTTP API (payload v2) events are accepted.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from dynamo_gateway.handlers.record_handlers import (
    create_record_handler,
    delete_record_handler,
    get_record_handler,
    query_records_handler,
    scan_records_handler,
    update_record_handler,
)
from dynamo_gateway.handlers.table_handlers import (
    add_index_handler,
    create_table_handler,
    delete_table_handler,
    describe_table_handler,
)
from dynamo_gateway.utils.response import api_response, error_response

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

Handler = Callable[[dict, object], dict]


def health_handler(event, context):
    """Liveness probe. Never touches DynamoDB."""
    return api_response(200, {"status": "healthy"})


# (method, path template, handler); templates use API Gateway {param} syntax
ROUTES: list[tuple[str, str, Handler]] = [
    ("GET", "/health", health_handler),
    ("POST", "/tables", create_table_handler),
    ("POST", "/tables/addIndex", add_index_handler),
    ("GET", "/tables/{tableName}", describe_table_handler),
    ("DELETE", "/tables/{tableName}", delete_table_handler),
    ("POST", "/records", create_record_handler),
    ("PUT", "/records", update_record_handler),
    ("DELETE", "/records", delete_record_handler),
    ("POST", "/records/retrieveRecord", get_record_handler),
    ("POST", "/records/query", query_records_handler),
    ("GET", "/records/{tableName}", scan_records_handler),
]


def _compile(template: str) -> re.Pattern:
    pattern = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", template)
    return re.compile(f"^{pattern}/?$")


_COMPILED_ROUTES = [(method, _compile(template), handler) for method, template, handler in ROUTES]


def get_method_and_path(event: dict) -> tuple[str, str]:
    """
    Extract the HTTP method and request path from a proxy event.

    Args:
        event: API Gateway proxy event (v1 or v2)

    Returns:
        tuple: (upper-case method, path without the optional /api prefix)
    """
    http_context = event.get("requestContext", {}).get("http", {})
    method = event.get("httpMethod") or http_context.get("method") or ""
    path = event.get("path") or event.get("rawPath") or http_context.get("path") or "/"

    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        path = path[len(API_PREFIX):] or "/"

    return method.upper(), path


def match_route(method: str, path: str) -> tuple[Handler | None, dict[str, str], bool]:
    """
    Find the handler for a method and path.

    Returns:
        tuple: (handler or None, path parameters, whether the path exists under another method)
    """
    path_known = False
    for route_method, pattern, handler in _COMPILED_ROUTES:
        match = pattern.match(path)
        if not match:
            continue
        if route_method == method:
            return handler, match.groupdict(), True
        path_known = True
    return None, {}, path_known


def route_handler(event, context):
    """
    Lambda proxy handler that dispatches to the endpoint handler for the request.
    """
    method, path = get_method_and_path(event)
    logger.info(f"{method} {path}")

    handler, path_params, path_known = match_route(method, path)

    if handler is None:
        if path_known and method == "OPTIONS":
            return api_response(204, None)
        if path_known:
            return error_response(405, "Method Not Allowed")
        return error_response(404, "Not Found")

    routed_event = dict(event)
    routed_event["pathParameters"] = {**(event.get("pathParameters") or {}), **path_params}
    return handler(routed_event, context)
