"""
Configuration and AWS client initialization for the DynamoDB gateway

This module provides:
- Settings read once from environment variables
- DynamoDB service resource construction (with local endpoint override)
- The process-wide store handed to Lambda handlers
- Constants used across handlers
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config

if TYPE_CHECKING:
    from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

    from dynamo_gateway.store import DynamoDBStore

# Constants
DEFAULT_REGION = "us-east-1"
DEFAULT_PORT = 3000
TABLE_READ_CAPACITY = 10
TABLE_WRITE_CAPACITY = 10
INDEX_READ_CAPACITY = 5  # GSIs get their own throughput
INDEX_WRITE_CAPACITY = 5
DEFAULT_KEY_TYPE = "S"
PROJECTION_TYPES = ("ALL", "KEYS_ONLY", "INCLUDE")


class ConfigurationError(Exception):
    """Raised at startup when the environment cannot produce a usable store client."""


@dataclass(frozen=True)
class Settings:
    env: str
    region: str
    access_key_id: str | None
    secret_access_key: str | None
    endpoint_url: str | None
    port: int
    log_level: str

    @property
    def is_local(self) -> bool:
        return self.env == "local"


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """
    Read gateway settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings: Immutable settings snapshot

    Raises:
        ConfigurationError: If PORT is not an integer
    """
    env = os.environ if environ is None else environ

    port_value = env.get("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_value)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {port_value!r}") from None

    return Settings(
        env=env.get("ENV", ""),
        region=env.get("AWS_REGION") or DEFAULT_REGION,
        access_key_id=env.get("AWS_ACCESS_KEY_ID") or None,
        secret_access_key=env.get("AWS_SECRET_ACCESS_KEY") or None,
        endpoint_url=env.get("DYNAMODB_ENDPOINT") or None,
        port=port,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def create_dynamodb_resource(settings: Settings) -> "DynamoDBServiceResource":
    """
    Build the DynamoDB service resource described by settings.

    Local mode requires explicit credentials and honours the endpoint
    override. Any other mode uses the boto3 default credential chain,
    which must resolve to something.

    Args:
        settings: Gateway settings

    Returns:
        DynamoDBServiceResource: boto3 resource (its .meta.client serves table calls)

    Raises:
        ConfigurationError: If credentials are missing
    """
    # Single attempt per call, failures surface immediately
    client_config = Config(retries={"max_attempts": 1, "mode": "standard"})

    if settings.is_local:
        if not settings.access_key_id or not settings.secret_access_key:
            raise ConfigurationError(
                "Required AWS credentials are missing. Please check your environment "
                "variables: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY"
            )
        session = boto3.Session(
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            region_name=settings.region,
        )
        return session.resource(
            "dynamodb", endpoint_url=settings.endpoint_url, config=client_config
        )

    session = boto3.Session(region_name=settings.region)
    if session.get_credentials() is None:
        raise ConfigurationError("No AWS credentials found in the default credential chain")
    return session.resource(
        "dynamodb", endpoint_url=settings.endpoint_url, config=client_config
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_store() -> "DynamoDBStore":
    """Build the process-wide store once (first call happens at cold start)."""
    from dynamo_gateway.store import DynamoDBStore

    return DynamoDBStore(create_dynamodb_resource(get_settings()))
