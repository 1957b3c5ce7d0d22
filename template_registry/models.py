"""Data models for the template registry SDK."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_NAMESPACE = "default"


# =============================================================================
# Enums
# =============================================================================


class TemplateKind(str, Enum):
    """Template families served by the registry."""

    job = "job"
    pipeline = "pipeline"


# =============================================================================
# Helpers
# =============================================================================


def display_name(name: str, namespace: str | None = None) -> str:
    """Return ``namespace/name`` unless the namespace is absent or "default"."""
    if namespace and namespace != DEFAULT_NAMESPACE:
        return f"{namespace}/{name}"
    return name


# =============================================================================
# Template Models
# =============================================================================


class TemplateConfig(BaseModel):
    """A template document as loaded from YAML.

    Only the identifying fields are typed; every other key is kept as-is and
    forwarded to the registry, which owns schema validation.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    namespace: str | None = None
    version: str | None = None

    @field_validator("name", "namespace", "version", mode="before")
    @classmethod
    def scalar_as_string(cls, v: Any) -> Any:
        # YAML reads unquoted scalars such as 1.0, 2024 or 2024-01-01 as non-strings
        if v is None or isinstance(v, (str, list, dict)):
            return v
        return str(v)

    def to_document(self) -> dict[str, Any]:
        """Return the original document without fields that were never set."""
        document = self.model_dump(mode="json")
        for field in type(self).model_fields:
            if field not in self.model_fields_set:
                document.pop(field, None)
        return document


class TemplateReference(BaseModel):
    """Identifies a template by name and optional namespace."""

    name: str
    namespace: str | None = None

    @property
    def full_name(self) -> str:
        return display_name(self.name, self.namespace)


class TagReference(TemplateReference):
    """Identifies a tag, optionally pinned to a version."""

    tag: str
    version: str | None = None


# =============================================================================
# Result Models
# =============================================================================


class OperationResult(BaseModel):
    """Normalized success payload shared by every registry operation."""

    name: str
    namespace: str | None = None
    version: str | None = None
    tag: str | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class ValidationResult(BaseModel):
    """Result of a successful validation."""

    valid: bool = True

    def to_json(self) -> str:
        return self.model_dump_json()
