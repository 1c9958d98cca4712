"""
Request validation utilities for the DynamoDB gateway

Provides functions to validate and extract data from API Gateway events.
"""

from __future__ import annotations

import base64
import json
import logging
from decimal import Decimal
from typing import Any
from urllib.parse import unquote

from dynamo_gateway.utils.response import error_response

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields"


def get_path_param(event: dict, param: str) -> tuple[str | None, dict | None]:
    """
    Extract and URL-decode a path parameter from API Gateway event.

    Args:
        event: API Gateway event
        param: Parameter name to extract

    Returns:
        tuple: (decoded_value, error_response) - If successful, error_response is None
    """
    path_params = event.get("pathParameters") or {}
    if not path_params.get(param):
        logger.warning(f"Missing {param} in path parameters")
        return None, error_response(400, MISSING_FIELDS_MESSAGE)
    return unquote(path_params[param]), None


def parse_json_body(event: dict) -> tuple[dict, dict | None]:
    """
    Parse JSON body from API Gateway event.

    Numbers with a fractional part are parsed as Decimal, which is what
    boto3 expects for DynamoDB numbers.

    Args:
        event: API Gateway event

    Returns:
        tuple: (parsed_body, error_response) - If successful, error_response is None
               If error, parsed_body is empty dict (caller should check error first)
    """
    raw_body = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded"):
            raw_body = base64.b64decode(raw_body).decode("utf-8")
        body = json.loads(raw_body, parse_float=Decimal)
    except (ValueError, UnicodeDecodeError):
        logger.warning("Invalid JSON in request body")
        return {}, error_response(400, "Invalid JSON in request body")

    if not isinstance(body, dict):
        logger.warning("Request body is not a JSON object")
        return {}, error_response(400, "Invalid JSON in request body")

    return body, None


def require_fields(body: dict, *fields: str) -> dict | None:
    """
    Check that every named field is present and truthy.

    Args:
        body: Request body dictionary
        fields: Field names that must be set

    Returns:
        dict: 400 error response if any field is missing, None if valid
    """
    missing = [field for field in fields if not body.get(field)]
    if missing:
        logger.warning(f"Missing required fields: {missing}")
        return error_response(400, MISSING_FIELDS_MESSAGE)
    return None


def validate_key_descriptor(descriptor: Any, required: bool = True) -> dict | None:
    """
    Validate a {"AttributeName", "AttributeType"} key descriptor.

    Name and type must be present together.

    Args:
        descriptor: Value from the request body
        required: Whether an absent descriptor is an error

    Returns:
        dict: 400 error response if invalid, None if valid
    """
    if descriptor is None and not required:
        return None

    if (
        not isinstance(descriptor, dict)
        or not descriptor.get("AttributeName")
        or not descriptor.get("AttributeType")
    ):
        logger.warning(f"Invalid key descriptor: {descriptor!r}")
        return error_response(400, MISSING_FIELDS_MESSAGE)

    return None
