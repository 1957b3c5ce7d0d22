"""Tests for SDK models."""

import json

import pytest

from template_registry import OperationResult, TagReference, TemplateConfig, display_name


@pytest.mark.parametrize(
    "namespace,expected",
    [("mynamespace", "mynamespace/test"), ("default", "test"), (None, "test"), ("", "test")],
)
def test_display_name(namespace, expected):
    assert display_name("test", namespace) == expected


def test_tag_reference_full_name():
    ref = TagReference(namespace="mynamespace", name="test", tag="stable")
    assert ref.full_name == "mynamespace/test"
    assert ref.version is None


def test_template_config_keeps_unknown_fields():
    """Test fields the SDK does not model are forwarded unchanged."""
    document = {
        "name": "test",
        "description": "desc",
        "config": {"steps": [{"a": "b"}]},
    }
    config = TemplateConfig(**document)
    assert config.to_document() == document


def test_template_config_version_from_number():
    assert TemplateConfig(name="test", version=2).version == "2"


def test_operation_result_json_omits_missing_fields():
    result = OperationResult(name="template/test", tag="stable", version="1.0.0")
    assert json.loads(result.to_json()) == {
        "name": "template/test",
        "tag": "stable",
        "version": "1.0.0",
    }
