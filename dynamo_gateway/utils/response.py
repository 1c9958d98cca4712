"""
Response building utilities for the DynamoDB gateway

Provides functions to create standardized API Gateway responses.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dynamo_gateway.store import Result

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}


def convert_decimal(value: Any) -> Any:
    """
    Convert Decimal types (from DynamoDB) to int or float for JSON serialization.

    Args:
        value: Value that might be a Decimal

    Returns:
        Converted value (int if whole number, float for fractions, otherwise original value)
    """
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    return value


def json_default(value: Any) -> Any:
    """json.dumps fallback for types boto3 hands back (Decimal, sets, binary, timestamps)."""
    if isinstance(value, Decimal):
        return convert_decimal(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    # boto3.dynamodb.types.Binary
    if hasattr(value, "value") and isinstance(value.value, (bytes, bytearray)):
        return value.value.decode("utf-8", errors="replace")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def api_response(status_code: int, body: Any) -> dict:
    """
    Helper to format API Gateway response with CORS headers.

    Args:
        status_code: HTTP status code
        body: Response body (will be JSON serialized, None leaves it empty)

    Returns:
        dict: API Gateway response with headers
    """
    return {
        "statusCode": status_code,
        "body": "" if body is None else json.dumps(body, default=json_default),
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
    }


def error_response(status_code: int, error: str) -> dict:
    """
    Helper to create a fixed-message error response.

    Args:
        status_code: HTTP status code
        error: Human-readable message

    Returns:
        dict: API Gateway error response with body {"error": error}
    """
    return api_response(status_code, {"error": error})


def result_response(result: "Result", success_status: int = 200) -> dict:
    """
    Turn a store Result into a response: success_status on success, 500 otherwise.

    Store error codes are not translated into HTTP statuses.
    """
    status_code = success_status if result.success else 500
    return api_response(status_code, result.to_dict())
