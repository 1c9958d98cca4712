"""
Lambda handlers for table operations (create, describe, delete, add index)

Each handler makes a single DynamoDB control-plane call. Table status
transitions (CREATING -> ACTIVE -> DELETING) are not tracked here; callers
poll describe_table_handler for readiness.
"""

from __future__ import annotations

import logging

from dynamo_gateway import config
from dynamo_gateway.utils.dynamodb import build_create_table_params
from dynamo_gateway.utils.response import error_response, result_response
from dynamo_gateway.utils.validation import (
    get_path_param,
    parse_json_body,
    require_fields,
    validate_key_descriptor,
)

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def create_table_handler(event, context):
    """
    Lambda handler to create a table.
    Accepts JSON body with tableName, attributeName (string partition key)
    and optional sortKeyName/sortKeyType.
    Returns 201 with the table description echo.
    """
    logger.info("create_table_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        params = build_create_table_params(
            body.get("tableName"),
            body.get("attributeName"),
            sort_key_name=body.get("sortKeyName"),
            sort_key_type=body.get("sortKeyType"),
        )

        result = config.get_store().create_table(params)
        return result_response(result, success_status=201)

    except Exception as e:
        logger.error(f"Error creating table: {str(e)}", exc_info=True)
        return error_response(500, "Failed to create table")


def describe_table_handler(event, context):
    """
    Lambda handler to describe a table.
    Expects table name in path parameter 'tableName'.
    """
    logger.info("describe_table_handler invoked")

    try:
        table_name, error = get_path_param(event, "tableName")
        if error:
            return error

        result = config.get_store().describe_table(table_name)
        return result_response(result)

    except Exception as e:
        logger.error(f"Error describing table: {str(e)}", exc_info=True)
        return error_response(500, "Failed to describe table")


def delete_table_handler(event, context):
    """
    Lambda handler to delete a table.
    Expects table name in path parameter 'tableName'.
    """
    logger.info("delete_table_handler invoked")

    try:
        table_name, error = get_path_param(event, "tableName")
        if error:
            return error

        logger.info(f"Deleting table: {table_name}")
        result = config.get_store().delete_table(table_name)
        return result_response(result)

    except Exception as e:
        logger.error(f"Error deleting table: {str(e)}", exc_info=True)
        return error_response(500, "Failed to delete table")


def add_index_handler(event, context):
    """
    Lambda handler to add a global secondary index to an existing table.
    Accepts JSON body with:
    - tableName, indexName: required
    - partitionKey: {AttributeName, AttributeType}, both required
    - sortKey: optional descriptor of the same shape
    - projectionType: ALL (default), KEYS_ONLY or INCLUDE
    - nonKeyAttributes: projected attribute names, only used with INCLUDE
    """
    logger.info("add_index_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        error = require_fields(body, "tableName", "indexName")
        if error:
            return error

        error = validate_key_descriptor(body.get("partitionKey"))
        if error:
            return error

        error = validate_key_descriptor(body.get("sortKey"), required=False)
        if error:
            return error

        projection_type = body.get("projectionType") or "ALL"
        if projection_type not in config.PROJECTION_TYPES:
            logger.warning(f"Unknown projection type {projection_type}, passing to DynamoDB")

        result = config.get_store().add_secondary_index(
            body["tableName"],
            body["indexName"],
            body["partitionKey"],
            sort_key=body.get("sortKey"),
            projection_type=projection_type,
            non_key_attributes=body.get("nonKeyAttributes"),
        )
        return result_response(result)

    except Exception as e:
        logger.error(f"Error adding secondary index: {str(e)}", exc_info=True)
        return error_response(500, "Failed to add secondary index")
