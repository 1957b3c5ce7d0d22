"""Template registry client.

Async client for the template registry REST API. Every operation is a single
request/response exchange, except ``tag`` without an explicit version, which
first resolves the latest version and then tags it. The two calls are not
atomic: a publish in between can make the tagged version no longer the latest.
"""

import json
from pathlib import Path
from typing import Any

import httpx
import structlog

from .config import RegistryConfig
from .exceptions import (
    PublishError,
    RemoveError,
    TagError,
    TemplateLookupError,
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
from .paths import paths_for

logger = structlog.get_logger()

INVALID_TEMPLATE_MESSAGE = "Template is not valid for the following reasons:"


class TemplateRegistryClient:
    """
    Async client for the template registry.

    Job and pipeline templates share every operation; the ``kind`` argument
    only changes which URLs are used.

    Example:
        ```python
        from template_registry import RegistryConfig, TemplateRegistryClient, TagReference

        config = RegistryConfig.from_env()
        async with TemplateRegistryClient(config) as client:
            template = client.load_config("./sd-template.yaml")
            await client.validate(template)
            published = await client.publish(template)
            await client.tag(TagReference(name=published.name, tag="stable"))
        ```
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        """
        Initialize the registry client.

        Args:
            config: Client configuration. If None, uses default config.
        """
        self.config = config or RegistryConfig()
        self._client: httpx.AsyncClient | None = None
        logger.info("TemplateRegistryClient initialized", base_url=self.config.base_url)

    async def __aenter__(self) -> "TemplateRegistryClient":
        """Async context manager entry."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        return self._client

    def _get_headers(self) -> dict[str, str]:
        """Get request headers."""
        headers = {"Content-Type": "application/json"}

        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        return headers

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("TemplateRegistryClient closed")

    # =========================================================================
    # Request helpers
    # =========================================================================

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> httpx.Response:
        """
        Send a single request to the registry.

        Raises:
            TransportError: If no HTTP response was received
        """
        kwargs: dict[str, Any] = {"headers": self._get_headers()}
        if payload is not None:
            kwargs["json"] = payload

        try:
            return await self._get_client().request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("Registry request failed", method=method, path=path, error=str(e))
            raise TransportError(f"Error sending request to template registry: {e}") from e

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        """Decode a JSON response body, or return None when there is none."""
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _describe(response: httpx.Response, body: Any) -> tuple[str, str | None]:
        """Return ``"{status} ({error}): {message}"`` and the server error name."""
        error = message = None
        if isinstance(body, dict):
            error = body.get("error")
            message = body.get("message")
        if error is None:
            error = response.reason_phrase
        if message is None:
            message = response.text
        return f"{response.status_code} ({error}): {message}", error

    def _fail(
        self, exc_type: type, prefix: str, response: httpx.Response, body: Any
    ) -> Exception:
        detail, error = self._describe(response, body)
        return exc_type(
            f"{prefix}. {detail}", status_code=response.status_code, error=error
        )

    @staticmethod
    def _document(config: TemplateConfig | dict[str, Any]) -> dict[str, Any]:
        if isinstance(config, TemplateConfig):
            return config.to_document()
        return dict(config)

    @classmethod
    def _payload(cls, config: TemplateConfig | dict[str, Any]) -> dict[str, str]:
        # Plain dicts straight from yaml.safe_load may hold dates
        return {"yaml": json.dumps(cls._document(config), default=str)}

    @staticmethod
    def _reference(
        template: TemplateReference | str, namespace: str | None = None
    ) -> TemplateReference:
        if isinstance(template, TemplateReference):
            return template
        return TemplateReference(name=template, namespace=namespace)

    # =========================================================================
    # Template documents
    # =========================================================================

    @staticmethod
    def load_config(path: str | Path) -> TemplateConfig:
        """Read and parse a YAML template file. See :func:`loader.load_config`."""
        return load_config(path)

    async def validate(
        self,
        config: TemplateConfig | dict[str, Any],
        kind: TemplateKind = TemplateKind.job,
    ) -> ValidationResult:
        """
        Ask the registry to validate a template.

        Args:
            config: Template document
            kind: Template family

        Returns:
            ValidationResult with ``valid=True``

        Raises:
            TemplateValidationError: If the registry reports errors
            TransportError: If the registry is unreachable
        """
        payload = self._payload(config)
        response = await self._request("POST", paths_for(kind).validate, payload)
        body = self._body(response)

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            message = INVALID_TEMPLATE_MESSAGE
            for err in errors:
                message += f"\n{json.dumps(err, indent=4)},"
            raise TemplateValidationError(
                message, errors=errors, status_code=response.status_code
            )

        if response.status_code != 200:
            detail, error = self._describe(response, body)
            raise TemplateValidationError(
                f"Error validating template. {detail}",
                status_code=response.status_code,
                error=error,
            )

        logger.info("Template validated", kind=TemplateKind(kind).value)
        return ValidationResult(valid=True)

    async def _publish(
        self, config: TemplateConfig | dict[str, Any], kind: TemplateKind
    ) -> dict[str, Any]:
        payload = self._payload(config)
        response = await self._request("POST", paths_for(kind).publish, payload)
        body = self._body(response)

        if response.status_code != 201:
            raise self._fail(PublishError, "Error publishing template", response, body)

        return body

    async def publish(
        self,
        config: TemplateConfig | dict[str, Any],
        kind: TemplateKind = TemplateKind.job,
    ) -> OperationResult:
        """
        Publish a new template version.

        The returned name is ``namespace/name`` unless the registry placed the
        template in the default namespace.

        Raises:
            PublishError: If the registry does not answer 201
            TransportError: If the registry is unreachable
        """
        body = await self._publish(config, kind)
        result = OperationResult(
            name=display_name(body["name"], body.get("namespace")),
            namespace=body.get("namespace"),
            version=body.get("version"),
        )
        logger.info("Template published", name=result.name, version=result.version)
        return result

    async def publish_and_tag(
        self,
        config: TemplateConfig | dict[str, Any],
        tag: str = "latest",
        kind: TemplateKind = TemplateKind.job,
    ) -> OperationResult:
        """Publish a template and point ``tag`` at the new version."""
        body = await self._publish(config, kind)
        logger.info("Template published", name=body.get("name"), version=body.get("version"))
        return await self.tag(
            TagReference(
                name=body["name"],
                namespace=body.get("namespace"),
                tag=tag,
                version=body.get("version"),
            ),
            kind=kind,
        )

    # =========================================================================
    # Version lookups
    # =========================================================================

    async def get_latest_version(
        self,
        template: TemplateReference | str,
        kind: TemplateKind = TemplateKind.job,
    ) -> str:
        """
        Return the newest version of a template.

        Raises:
            TemplateLookupError: If the registry does not answer 200 or lists no versions
        """
        ref = self._reference(template)
        response = await self._request("GET", paths_for(kind).versions(ref))
        body = self._body(response)

        if response.status_code != 200:
            raise self._fail(
                TemplateLookupError, "Error getting latest template version", response, body
            )
        latest = body[0] if isinstance(body, list) and body else None
        version = latest.get("version") if isinstance(latest, dict) else None
        if not version:
            raise TemplateLookupError(
                "Error getting latest template version. "
                f"No versions found for template {ref.full_name}",
                status_code=response.status_code,
            )

        return version

    async def get_version_from_tag(
        self, ref: TagReference, kind: TemplateKind = TemplateKind.job
    ) -> str:
        """
        Return the version a tag points to.

        Raises:
            TemplateLookupError: If the registry does not answer 200
        """
        response = await self._request("GET", paths_for(kind).tag_lookup(ref, ref.tag))
        body = self._body(response)

        if response.status_code != 200:
            raise self._fail(
                TemplateLookupError, "Error getting version from tag", response, body
            )

        return body["version"]

    # =========================================================================
    # Tags
    # =========================================================================

    async def tag(
        self, ref: TagReference, kind: TemplateKind = TemplateKind.job
    ) -> OperationResult:
        """
        Point a tag at a template version.

        Without ``ref.version`` the latest version is looked up first. Both
        200 (tag moved) and 201 (tag created) count as success.

        Raises:
            TemplateLookupError: If the latest version cannot be resolved
            TagError: If the registry rejects the tag
        """
        version = ref.version
        if not version:
            version = await self.get_latest_version(ref, kind=kind)

        response = await self._request(
            "PUT", paths_for(kind).tag(ref, ref.tag), {"version": version}
        )
        body = self._body(response)

        if response.status_code not in (200, 201):
            raise self._fail(TagError, "Error tagging template", response, body)

        logger.info("Template tagged", name=ref.full_name, tag=ref.tag, version=version)
        return OperationResult(
            name=ref.full_name, namespace=ref.namespace, tag=ref.tag, version=version
        )

    async def remove_tag(
        self, ref: TagReference, kind: TemplateKind = TemplateKind.job
    ) -> OperationResult:
        """
        Delete a tag.

        Raises:
            RemoveError: If the registry does not answer 204
        """
        response = await self._request("DELETE", paths_for(kind).tag(ref, ref.tag))

        if response.status_code != 204:
            raise self._fail(
                RemoveError, "Error removing template tag", response, self._body(response)
            )

        logger.info("Template tag removed", name=ref.full_name, tag=ref.tag)
        return OperationResult(name=ref.full_name, namespace=ref.namespace, tag=ref.tag)

    # =========================================================================
    # Removal
    # =========================================================================

    async def remove_template(
        self,
        template: TemplateReference | str,
        kind: TemplateKind = TemplateKind.job,
    ) -> OperationResult:
        """
        Delete a template with all of its versions and tags.

        Raises:
            RemoveError: If the registry does not answer 204
        """
        ref = self._reference(template)
        response = await self._request("DELETE", paths_for(kind).template(ref))

        if response.status_code != 204:
            raise self._fail(
                RemoveError,
                f"Error removing template {ref.full_name}",
                response,
                self._body(response),
            )

        logger.info("Template removed", name=ref.full_name)
        return OperationResult(name=ref.full_name, namespace=ref.namespace)

    async def remove_version(
        self,
        template: TemplateReference | str,
        version: str,
        kind: TemplateKind = TemplateKind.job,
    ) -> OperationResult:
        """
        Delete one version of a template.

        Raises:
            RemoveError: If the registry does not answer 204
        """
        ref = self._reference(template)
        response = await self._request("DELETE", paths_for(kind).version(ref, version))

        if response.status_code != 204:
            raise self._fail(
                RemoveError,
                f"Error removing version {version} of template {ref.full_name}",
                response,
                self._body(response),
            )

        logger.info("Template version removed", name=ref.full_name, version=version)
        return OperationResult(name=ref.full_name, namespace=ref.namespace, version=version)
