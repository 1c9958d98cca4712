"""HTTP gateway over DynamoDB table and item operations."""
