"""
Shared pytest fixtures
"""

import boto3
import pytest
from moto import mock_aws

from dynamo_gateway import config
from dynamo_gateway.store import DynamoDBStore


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Settings and store are built once per process; start each test clean"""
    config.get_settings.cache_clear()
    config.get_store.cache_clear()
    yield
    config.get_settings.cache_clear()
    config.get_store.cache_clear()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("DYNAMODB_ENDPOINT", raising=False)


@pytest.fixture
def moto_store(aws_credentials):
    """DynamoDBStore backed by moto's in-process DynamoDB"""
    with mock_aws():
        resource = boto3.resource("dynamodb", region_name="us-east-1")
        yield DynamoDBStore(resource)
