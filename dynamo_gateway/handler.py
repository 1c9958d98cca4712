"""
Lambda handlers for the DynamoDB gateway

This module serves as the entry point for all Lambda functions.
It re-exports handlers from their respective modules for Lambda function configuration.

Architecture:
- API Gateway -> Lambda -> DynamoDB (one call per request)
- Either one function per route (the *_handler names below) or a single
  proxy function (handler) that routes by method and path

Handlers:
1. create_table_handler: POST /tables
2. describe_table_handler: GET /tables/{tableName}
3. delete_table_handler: DELETE /tables/{tableName}
4. add_index_handler: POST /tables/addIndex
5. create_record_handler: POST /records
6. get_record_handler: POST /records/retrieveRecord
7. update_record_handler: PUT /records
8. delete_record_handler: DELETE /records
9. query_records_handler: POST /records/query
10. scan_records_handler: GET /records/{tableName}
11. health_handler: GET /health
"""

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
from dynamo_gateway.router import health_handler, route_handler

# Single proxy integration entry point
handler = route_handler

# Make handlers available at module level for Lambda
__all__ = [
    "handler",
    "create_table_handler",
    "describe_table_handler",
    "delete_table_handler",
    "add_index_handler",
    "create_record_handler",
    "get_record_handler",
    "update_record_handler",
    "delete_record_handler",
    "query_records_handler",
    "scan_records_handler",
    "health_handler",
]
