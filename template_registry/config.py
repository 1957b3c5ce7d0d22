"""Configuration for the template registry SDK."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.screwdriver.cd/v4/"
DEFAULT_TEMPLATE_PATH = "./sd-template.yaml"


@dataclass
class RegistryConfig:
    """
    Configuration for the template registry client.

    Attributes:
        base_url: Base URL of the registry API, including the version prefix
            (default: https://api.screwdriver.cd/v4/)
        token: Bearer token sent with every request
        timeout: Request timeout in seconds (default: 10.0)
        verify_ssl: Whether to verify SSL certificates (default: True)
        template_path: Template file used by the CLI (default: ./sd-template.yaml)

    Example:
        ```python
        config = RegistryConfig(
            base_url="https://registry.example.com/v4/",
            token="your-token",
        )
        ```
    """

    base_url: str = DEFAULT_API_URL
    token: str | None = None
    timeout: float = 10.0
    verify_ssl: bool = True
    template_path: str = DEFAULT_TEMPLATE_PATH

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # Paths are relative to the version prefix, so keep exactly one trailing slash
        self.base_url = self.base_url.rstrip("/") + "/"

        if self.timeout <= 0:
            raise ValueError("timeout must be greater than 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RegistryConfig":
        """
        Build configuration from environment variables.

        Reads ``SD_API_URL``, ``SD_TOKEN`` and ``SD_TEMPLATE_PATH``; unset
        variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("SD_API_URL") or DEFAULT_API_URL,
            token=env.get("SD_TOKEN") or None,
            template_path=env.get("SD_TEMPLATE_PATH") or DEFAULT_TEMPLATE_PATH,
        )
