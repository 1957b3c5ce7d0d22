"""Pytest configuration for template registry SDK tests."""

from unittest.mock import MagicMock

import pytest

from template_registry import RegistryConfig, TemplateRegistryClient


@pytest.fixture(autouse=True)
def configure_structlog():
    """Configure structlog for testing."""
    import structlog

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@pytest.fixture
def config():
    """Create a test configuration."""
    return RegistryConfig(
        base_url="https://registry.test/v4/",
        token="test-token",
        timeout=5.0,
    )


@pytest.fixture
def client(config):
    """Create a test client."""
    return TemplateRegistryClient(config)


@pytest.fixture
def make_response():
    """Build a fake httpx response."""

    def _make(status_code, body=None, text="", reason_phrase=""):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.reason_phrase = reason_phrase
        if body is None:
            response.json.side_effect = ValueError("No JSON body")
        else:
            response.json.return_value = body
        return response

    return _make


@pytest.fixture
def template_document():
    """A job template as it appears in sd-template.yaml."""
    return {
        "name": "template/test",
        "version": "1.0.0",
        "description": "Publishes the template yaml from sd-template.yaml",
        "maintainer": "foo@example.com",
        "config": {
            "image": "node:18",
            "steps": [{"publish": "node ./publish.js"}],
        },
    }
