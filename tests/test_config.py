"""
Unit tests for configuration loading and client construction
"""

from unittest.mock import Mock, patch

import pytest

from dynamo_gateway import config
from dynamo_gateway.config import ConfigurationError, create_dynamodb_resource, load_settings


def test_load_settings_defaults():
    """Test defaults when nothing is set"""

    settings = load_settings({})

    assert settings.env == ""
    assert settings.is_local is False
    assert settings.region == "us-east-1"
    assert settings.access_key_id is None
    assert settings.endpoint_url is None
    assert settings.port == 3000
    assert settings.log_level == "INFO"


def test_load_settings_from_environment():
    """Test every variable is picked up"""

    settings = load_settings(
        {
            "ENV": "local",
            "AWS_REGION": "eu-west-1",
            "AWS_ACCESS_KEY_ID": "key",
            "AWS_SECRET_ACCESS_KEY": "secret",
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
            "PORT": "8080",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.is_local is True
    assert settings.region == "eu-west-1"
    assert settings.access_key_id == "key"
    assert settings.secret_access_key == "secret"
    assert settings.endpoint_url == "http://localhost:8000"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_load_settings_invalid_port():
    """Test a non-numeric PORT fails at startup"""

    with pytest.raises(ConfigurationError):
        load_settings({"PORT": "http"})


def test_create_resource_local_requires_credentials():
    """Test local mode without credentials is fatal"""

    settings = load_settings({"ENV": "local", "DYNAMODB_ENDPOINT": "http://localhost:8000"})

    with pytest.raises(ConfigurationError, match="AWS_ACCESS_KEY_ID"):
        create_dynamodb_resource(settings)


def test_create_resource_local_uses_endpoint():
    """Test local mode points the client at the endpoint override"""

    settings = load_settings(
        {
            "ENV": "local",
            "AWS_REGION": "us-west-2",
            "AWS_ACCESS_KEY_ID": "key",
            "AWS_SECRET_ACCESS_KEY": "secret",
            "DYNAMODB_ENDPOINT": "http://localhost:8000",
        }
    )

    resource = create_dynamodb_resource(settings)

    assert resource.meta.client.meta.endpoint_url == "http://localhost:8000"
    assert resource.meta.client.meta.region_name == "us-west-2"


def test_create_resource_default_chain_without_credentials():
    """Test non-local mode fails when the default chain finds nothing"""

    session = Mock()
    session.get_credentials.return_value = None

    with patch.object(config.boto3, "Session", return_value=session):
        with pytest.raises(ConfigurationError):
            create_dynamodb_resource(load_settings({}))

    session.resource.assert_not_called()


def test_create_resource_default_chain(aws_credentials):
    """Test non-local mode uses the default credential chain and region"""

    resource = create_dynamodb_resource(load_settings({"AWS_REGION": "eu-central-1"}))

    assert resource.meta.client.meta.region_name == "eu-central-1"


def test_get_store_is_built_once(aws_credentials, monkeypatch):
    """Test get_store caches the store for the process"""

    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    first = config.get_store()
    second = config.get_store()

    assert first is second
    assert first.client is first.resource.meta.client
