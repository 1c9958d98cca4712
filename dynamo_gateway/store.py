"""
DynamoDB operation facade

Each method issues exactly one DynamoDB call and folds the outcome into a
Result envelope. Store failures never propagate as exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import DecimalException
from typing import TYPE_CHECKING, Any, Callable

from botocore.exceptions import BotoCoreError, ClientError

from dynamo_gateway.utils.dynamodb import (
    build_query_params,
    build_secondary_index_params,
    build_update_params,
)

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

logger = logging.getLogger(__name__)

# TypeError/ValueError come from boto3's TypeSerializer on malformed items
# and from resource identifiers (e.g. a missing table name). DecimalException
# is raised for numbers beyond DynamoDB's 38 digits of precision.
STORE_ERRORS = (ClientError, BotoCoreError, TypeError, ValueError, DecimalException)


@dataclass
class Result:
    """Uniform success/data/error envelope returned by every store operation."""

    success: bool
    data: Any = None
    error: dict[str, Any] | None = None

    @classmethod
    def ok(cls, data: Any) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, exc: Exception, kind: str) -> "Result":
        return cls(success=False, error=error_details(exc, kind))

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}


def error_details(exc: Exception, kind: str) -> dict[str, Any]:
    """
    Describe a failed store call.

    Args:
        exc: Exception raised by boto3/botocore
        kind: Operation-specific label, e.g. "create_table error"

    Returns:
        dict: {"message", "kind"} plus "code" for DynamoDB service errors
    """
    details: dict[str, Any] = {"message": str(exc), "kind": kind}
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        details["code"] = error.get("Code")
        if error.get("Message"):
            details["message"] = error["Message"]
    return details


class DynamoDBStore:
    """Table and item operations over one DynamoDB service resource."""

    def __init__(self, resource: "DynamoDBServiceResource") -> None:
        self.resource = resource
        self.client = resource.meta.client

    def _call(
        self,
        kind: str,
        operation: Callable[[], dict[str, Any]],
        result_key: str | None = None,
        default: Any = None,
    ) -> Result:
        """
        Run one store call and wrap its response.

        Args:
            kind: Error label used when the call fails
            operation: Zero-argument callable issuing the SDK request
            result_key: Response key holding the payload; whole response when None
            default: Payload when result_key is absent from the response

        Returns:
            Result: Envelope with the payload or the error details
        """
        try:
            response = operation()
        except STORE_ERRORS as e:
            logger.error(f"{kind}: {str(e)}")
            return Result.failure(e, kind)

        if result_key is None:
            response.pop("ResponseMetadata", None)
            return Result.ok(response)
        return Result.ok(response.get(result_key, default))

    # Tables

    def create_table(self, params: dict[str, Any]) -> Result:
        logger.info(f"Creating table {params.get('TableName')}")
        return self._call(
            "create_table error",
            lambda: self.client.create_table(**params),
            result_key="TableDescription",
        )

    def describe_table(self, table_name: str) -> Result:
        return self._call(
            "describe_table error",
            lambda: self.client.describe_table(TableName=table_name),
            result_key="Table",
        )

    def delete_table(self, table_name: str) -> Result:
        logger.info(f"Deleting table {table_name}")
        return self._call(
            "delete_table error",
            lambda: self.client.delete_table(TableName=table_name),
            result_key="TableDescription",
        )

    def add_secondary_index(
        self,
        table_name: str,
        index_name: str,
        partition_key: dict[str, str],
        sort_key: dict[str, str] | None = None,
        projection_type: str = "ALL",
        non_key_attributes: list[str] | None = None,
    ) -> Result:
        params = build_secondary_index_params(
            table_name,
            index_name,
            partition_key,
            sort_key=sort_key,
            projection_type=projection_type,
            non_key_attributes=non_key_attributes,
        )
        logger.info(f"Adding index {index_name} to table {table_name}")
        return self._call(
            "add_secondary_index error",
            lambda: self.client.update_table(**params),
            result_key="TableDescription",
        )

    # Items

    def put_item(self, table_name: str, item: dict[str, Any]) -> Result:
        return self._call(
            "put_item error",
            lambda: self.resource.Table(table_name).put_item(Item=item),
        )

    def get_item(self, table_name: str, key: dict[str, Any]) -> Result:
        # A missing item is a normal outcome: success with None
        return self._call(
            "get_item error",
            lambda: self.resource.Table(table_name).get_item(Key=key),
            result_key="Item",
        )

    def update_item(
        self, table_name: str, key: dict[str, Any], fields: dict[str, Any]
    ) -> Result:
        params = build_update_params(key, fields, return_values="ALL_NEW")
        return self._call(
            "update_item error",
            lambda: self.resource.Table(table_name).update_item(**params),
            result_key="Attributes",
        )

    def delete_item(self, table_name: str, key: dict[str, Any]) -> Result:
        return self._call(
            "delete_item error",
            lambda: self.resource.Table(table_name).delete_item(
                Key=key, ReturnValues="ALL_OLD"
            ),
            result_key="Attributes",
        )

    def query_items(
        self,
        table_name: str,
        key_condition_expression: str,
        expression_attribute_values: dict[str, Any],
        index_name: str | None = None,
        filter_expression: str | None = None,
        expression_attribute_names: dict[str, str] | None = None,
    ) -> Result:
        params = build_query_params(
            key_condition_expression,
            expression_attribute_values,
            index_name=index_name,
            filter_expression=filter_expression,
            expression_attribute_names=expression_attribute_names,
        )
        return self._call(
            "query_items error",
            lambda: self.resource.Table(table_name).query(**params),
            result_key="Items",
            default=[],
        )

    def scan_items(self, table_name: str) -> Result:
        # Single page only; no cursor is exposed
        return self._call(
            "scan_items error",
            lambda: self.resource.Table(table_name).scan(),
            result_key="Items",
            default=[],
        )
