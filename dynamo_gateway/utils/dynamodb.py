"""
DynamoDB utilities for the gateway

Provides functions for building DynamoDB update expressions, table/index
definitions and query parameters.
"""

from __future__ import annotations

from typing import Any, Dict

from dynamo_gateway.config import (
    DEFAULT_KEY_TYPE,
    INDEX_READ_CAPACITY,
    INDEX_WRITE_CAPACITY,
    TABLE_READ_CAPACITY,
    TABLE_WRITE_CAPACITY,
)

EMPTY_LIST_PLACEHOLDER = ":empty_list"


def build_update_expression(
    fields: dict[str, Any],
) -> tuple[str, dict[str, str], dict[str, Any]]:
    """
    Build DynamoDB SET expression from a dictionary of fields.

    List values are appended to whatever list already sits at the attribute
    (starting from an empty list when the attribute is absent). Every other
    value, maps included, overwrites the attribute as a whole.

    Args:
        fields: Ordered mapping of attribute names to new values

    Returns:
        tuple: (update_expression, expression_attribute_names, expression_attribute_values)

    Example:
        fields = {"name": "Ada", "tags": ["b"]}
        expr, names, values = build_update_expression(fields)
        # expr = "SET #field0 = :value0, "
        #        "#field1 = list_append(if_not_exists(#field1, :empty_list), :value1)"
        # names = {"#field0": "name", "#field1": "tags"}
        # values = {":value0": "Ada", ":value1": ["b"], ":empty_list": []}
    """
    clauses = []
    expr_attr_names: dict[str, str] = {}
    expr_attr_values: dict[str, Any] = {}

    for index, (field, value) in enumerate(fields.items()):
        # Positional placeholders sidestep reserved words and odd characters
        name_placeholder = f"#field{index}"
        value_placeholder = f":value{index}"

        if isinstance(value, list):
            clauses.append(
                f"{name_placeholder} = list_append("
                f"if_not_exists({name_placeholder}, {EMPTY_LIST_PLACEHOLDER}), {value_placeholder})"
            )
            expr_attr_values[EMPTY_LIST_PLACEHOLDER] = []
        else:
            clauses.append(f"{name_placeholder} = {value_placeholder}")

        expr_attr_names[name_placeholder] = field
        expr_attr_values[value_placeholder] = value

    update_expression = "SET " + ", ".join(clauses)

    return update_expression, expr_attr_names, expr_attr_values


def build_update_params(
    key: Dict[str, Any],
    fields: Dict[str, Any],
    return_values: str = "ALL_NEW",
) -> Dict[str, Any]:
    """
    Build complete DynamoDB update_item parameters.

    Args:
        key: Primary key for the item to update
        fields: Dictionary of field names to values
        return_values: Return values option (default: ALL_NEW)

    Returns:
        dict: Complete parameters for table.update_item()

    Example:
        params = build_update_params(key={"userId": "u1"}, fields={"tags": ["b"]})
        response = table.update_item(**params)
    """
    update_expression, expr_names, expr_values = build_update_expression(fields)

    return {
        "Key": key,
        "UpdateExpression": update_expression,
        "ExpressionAttributeNames": expr_names,
        "ExpressionAttributeValues": expr_values,
        "ReturnValues": return_values,
    }


def build_create_table_params(
    table_name: str,
    attribute_name: str,
    sort_key_name: str | None = None,
    sort_key_type: str | None = None,
) -> Dict[str, Any]:
    """
    Build create_table parameters for a string partition key and optional sort key.

    Args:
        table_name: Name of the table to create
        attribute_name: Partition key attribute (always type S)
        sort_key_name: Optional sort key attribute
        sort_key_type: Sort key type, defaults to S

    Returns:
        dict: Parameters for client.create_table()
    """
    key_schema = [{"AttributeName": attribute_name, "KeyType": "HASH"}]
    attribute_definitions = [
        {"AttributeName": attribute_name, "AttributeType": DEFAULT_KEY_TYPE}
    ]

    if sort_key_name:
        key_schema.append({"AttributeName": sort_key_name, "KeyType": "RANGE"})
        attribute_definitions.append(
            {
                "AttributeName": sort_key_name,
                "AttributeType": sort_key_type or DEFAULT_KEY_TYPE,
            }
        )

    return {
        "TableName": table_name,
        "KeySchema": key_schema,
        "AttributeDefinitions": attribute_definitions,
        "ProvisionedThroughput": {
            "ReadCapacityUnits": TABLE_READ_CAPACITY,
            "WriteCapacityUnits": TABLE_WRITE_CAPACITY,
        },
    }


def build_secondary_index_params(
    table_name: str,
    index_name: str,
    partition_key: dict[str, str],
    sort_key: dict[str, str] | None = None,
    projection_type: str = "ALL",
    non_key_attributes: list[str] | None = None,
) -> Dict[str, Any]:
    """
    Build update_table parameters that create one global secondary index.

    Args:
        table_name: Table receiving the index
        index_name: Name of the new index
        partition_key: {"AttributeName": ..., "AttributeType": ...}
        sort_key: Optional key descriptor of the same shape
        projection_type: ALL, KEYS_ONLY or INCLUDE
        non_key_attributes: Projected attributes, only used with INCLUDE

    Returns:
        dict: Parameters for client.update_table()
    """
    attribute_definitions = [
        {
            "AttributeName": partition_key["AttributeName"],
            "AttributeType": partition_key["AttributeType"],
        }
    ]
    key_schema = [{"AttributeName": partition_key["AttributeName"], "KeyType": "HASH"}]

    if sort_key:
        attribute_definitions.append(
            {
                "AttributeName": sort_key["AttributeName"],
                "AttributeType": sort_key["AttributeType"],
            }
        )
        key_schema.append({"AttributeName": sort_key["AttributeName"], "KeyType": "RANGE"})

    projection: dict[str, Any] = {"ProjectionType": projection_type}
    if projection_type == "INCLUDE" and non_key_attributes:
        projection["NonKeyAttributes"] = non_key_attributes

    return {
        "TableName": table_name,
        "AttributeDefinitions": attribute_definitions,
        "GlobalSecondaryIndexUpdates": [
            {
                "Create": {
                    "IndexName": index_name,
                    "KeySchema": key_schema,
                    "Projection": projection,
                    "ProvisionedThroughput": {
                        "ReadCapacityUnits": INDEX_READ_CAPACITY,
                        "WriteCapacityUnits": INDEX_WRITE_CAPACITY,
                    },
                }
            }
        ],
    }


def build_query_params(
    key_condition_expression: str,
    expression_attribute_values: dict[str, Any],
    index_name: str | None = None,
    filter_expression: str | None = None,
    expression_attribute_names: dict[str, str] | None = None,
) -> Dict[str, Any]:
    """Build table.query() parameters, leaving out optional parts that were not given."""
    params: dict[str, Any] = {
        "KeyConditionExpression": key_condition_expression,
        "ExpressionAttributeValues": expression_attribute_values,
    }

    if index_name:
        params["IndexName"] = index_name

    if filter_expression:
        params["FilterExpression"] = filter_expression

    if expression_attribute_names:
        params["ExpressionAttributeNames"] = expression_attribute_names

    return params
