"""
Lambda handlers for record operations (create, get, update, delete, query, scan)

Item bodies arrive as plain JSON; boto3's Table resource does the
attribute marshalling.
"""

from __future__ import annotations

import logging

from dynamo_gateway import config
from dynamo_gateway.utils.response import error_response, result_response
from dynamo_gateway.utils.validation import (
    MISSING_FIELDS_MESSAGE,
    get_path_param,
    parse_json_body,
    require_fields,
)

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def create_record_handler(event, context):
    """
    Lambda handler to put an item.
    Accepts JSON body with tableName and data (the full item).
    """
    logger.info("create_record_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        result = config.get_store().put_item(body.get("tableName"), body.get("data"))
        return result_response(result, success_status=201)

    except Exception as e:
        logger.error(f"Error creating record: {str(e)}", exc_info=True)
        return error_response(500, "Failed to create record")


def get_record_handler(event, context):
    """
    Lambda handler to fetch one item by key.
    Accepts JSON body with tableName and key. A missing item is a
    success with null data.
    """
    logger.info("get_record_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        result = config.get_store().get_item(body.get("tableName"), body.get("key"))
        return result_response(result)

    except Exception as e:
        logger.error(f"Error getting record: {str(e)}", exc_info=True)
        return error_response(500, "Failed to get record")


def update_record_handler(event, context):
    """
    Lambda handler to update attributes of one item.
    Accepts JSON body with tableName, key and data (attribute -> new value).
    List values are appended to the stored list; everything else overwrites.
    Returns the full item after the update.
    """
    logger.info("update_record_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        fields = body.get("data")
        if not isinstance(fields, dict) or not fields:
            logger.warning("Update request has no attributes to set")
            return error_response(400, MISSING_FIELDS_MESSAGE)

        logger.info(f"Updating record in {body.get('tableName')} with fields: {list(fields.keys())}")
        result = config.get_store().update_item(body.get("tableName"), body.get("key"), fields)
        return result_response(result)

    except Exception as e:
        logger.error(f"Error updating record: {str(e)}", exc_info=True)
        return error_response(500, "Failed to update record")


def delete_record_handler(event, context):
    """
    Lambda handler to delete one item by key.
    Accepts JSON body with tableName and key. Returns the item as it was
    before deletion, or null data if it did not exist.
    """
    logger.info("delete_record_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        result = config.get_store().delete_item(body.get("tableName"), body.get("key"))
        return result_response(result)

    except Exception as e:
        logger.error(f"Error deleting record: {str(e)}", exc_info=True)
        return error_response(500, "Failed to delete record")


def query_records_handler(event, context):
    """
    Lambda handler to query items by key condition.
    Accepts JSON body with:
    - tableName, keyConditionExpression, expressionAttributeValues: required
    - indexName, filterExpression, expressionAttributeNames: optional
    """
    logger.info("query_records_handler invoked")

    try:
        body, error = parse_json_body(event)
        if error:
            return error

        error = require_fields(
            body, "tableName", "keyConditionExpression", "expressionAttributeValues"
        )
        if error:
            return error

        result = config.get_store().query_items(
            body["tableName"],
            body["keyConditionExpression"],
            body["expressionAttributeValues"],
            index_name=body.get("indexName"),
            filter_expression=body.get("filterExpression"),
            expression_attribute_names=body.get("expressionAttributeNames"),
        )
        return result_response(result)

    except Exception as e:
        logger.error(f"Error querying records: {str(e)}", exc_info=True)
        return error_response(500, "Failed to query records")


def scan_records_handler(event, context):
    """
    Lambda handler to return every item of a single scan page.
    Expects table name in path parameter 'tableName'.
    """
    logger.info("scan_records_handler invoked")

    try:
        table_name, error = get_path_param(event, "tableName")
        if error:
            return error

        result = config.get_store().scan_items(table_name)
        return result_response(result)

    except Exception as e:
        logger.error(f"Error scanning records: {str(e)}", exc_info=True)
        return error_response(500, "Failed to scan records")
