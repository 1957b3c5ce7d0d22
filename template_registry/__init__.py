"""Template Registry Python SDK

Async client for publishing and managing templates in a template registry.

Example:
    ```python
    from template_registry import (
        RegistryConfig,
        TagReference,
        TemplateKind,
        TemplateReference,
        TemplateRegistryClient,
    )

    config = RegistryConfig(token="your-token")
    async with TemplateRegistryClient(config) as client:
        template = client.load_config("./sd-template.yaml")
        await client.validate(template)
        result = await client.publish_and_tag(template, tag="stable")

        # Pipeline templates use the same calls
        await client.remove_version(
            TemplateReference(namespace="ci", name="build"),
            "1.0.0",
            kind=TemplateKind.pipeline,
        )
    ```
"""

__version__ = "0.1.0"

from .client import TemplateRegistryClient
from .config import RegistryConfig
from .exceptions import (
    PublishError,
    RegistryError,
    RemoveError,
    TagError,
    TemplateLoadError,
    TemplateLookupError,
    TemplateParseError,
    TemplateValidationError,
    TransportError,
)
from .loader import load_config
from .models import (
    OperationResult,
    TagReference,
    TemplateConfig,
    TemplateKind,
    TemplateReference,
    ValidationResult,
    display_name,
)
from .paths import TemplatePaths, paths_for

__all__ = [
    # Version
    "__version__",
    # Client
    "TemplateRegistryClient",
    "load_config",
    # Configuration
    "RegistryConfig",
    # Exceptions
    "RegistryError",
    "TemplateLoadError",
    "TemplateParseError",
    "TransportError",
    "TemplateValidationError",
    "PublishError",
    "TagError",
    "RemoveError",
    "TemplateLookupError",
    # Enums
    "TemplateKind",
    # Models
    "TemplateConfig",
    "TemplateReference",
    "TagReference",
    "OperationResult",
    "ValidationResult",
    "display_name",
    # Paths
    "TemplatePaths",
    "paths_for",
]
