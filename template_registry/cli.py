"""Command-line interface for the template registry."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import click
import structlog
from rich.console import Console
from rich.text import Text

from . import __version__
from .client import TemplateRegistryClient
from .config import RegistryConfig
from .exceptions import RegistryError
from .models import TagReference, TemplateKind, TemplateReference, display_name

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


class StderrHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging(verbose: bool = False) -> None:
    """Send structlog output through stdlib logging on stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    if not any(isinstance(h, StderrHandler) for h in root.handlers):
        handler = StderrHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def run_operation(
    config: RegistryConfig,
    operation: Callable[[TemplateRegistryClient], Awaitable[Any]],
) -> Any:
    """Run one client operation, exiting with status 1 on a registry error."""

    async def main() -> Any:
        async with TemplateRegistryClient(config) as client:
            return await operation(client)

    try:
        return asyncio.run(main())
    except RegistryError as e:
        err_console.print(Text(str(e), style="red"))
        sys.exit(1)


def emit(result: Any, as_json: bool, message: str) -> None:
    if as_json:
        click.echo(result.to_json())
    else:
        console.print(message)


# Shared options

kind_option = click.option(
    "--kind",
    "-k",
    type=click.Choice([k.value for k in TemplateKind]),
    default=TemplateKind.job.value,
    show_default=True,
    help="Template family",
)
json_option = click.option("--json", "-j", "as_json", is_flag=True, help="Output result as json")
file_option = click.option(
    "--file", "-f", "path", default=None, help="Template file (default: $SD_TEMPLATE_PATH)"
)
name_option = click.option("--name", "-n", required=True, help="Template name")
namespace_option = click.option("--namespace", "-s", default=None, help="Template namespace")


@click.group()
@click.version_option(version=__version__, prog_name="template-registry")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """
    Template Registry - publish and manage templates

    The API URL and token are read from SD_API_URL and SD_TOKEN.
    """
    configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = RegistryConfig.from_env()


@cli.command()
@file_option
@kind_option
@json_option
@click.pass_obj
def validate(config: RegistryConfig, path: Optional[str], kind: str, as_json: bool):
    """Validate a template"""
    template_path = path or config.template_path

    async def op(client: TemplateRegistryClient):
        template = client.load_config(template_path)
        return await client.validate(template, kind=TemplateKind(kind))

    result = run_operation(config, op)
    emit(result, as_json, "Template is valid")


@cli.command()
@file_option
@click.option("--tag", "-t", default="latest", show_default=True, help="Add template tag")
@kind_option
@json_option
@click.pass_obj
def publish(config: RegistryConfig, path: Optional[str], tag: str, kind: str, as_json: bool):
    """Publish a template and tag the new version"""
    template_path = path or config.template_path

    async def op(client: TemplateRegistryClient):
        template = client.load_config(template_path)
        return await client.publish_and_tag(template, tag=tag, kind=TemplateKind(kind))

    result = run_operation(config, op)
    emit(
        result,
        as_json,
        f"Template {result.name}@{result.version} was successfully published "
        f"and tagged as {result.tag}",
    )


@cli.command()
@name_option
@namespace_option
@click.option("--tag", "-t", required=True, help="Tag name")
@click.option("--version", "-v", default=None, help="Tag version (default: latest)")
@click.option("--delete", "-d", is_flag=True, help="Deletes a template tag")
@kind_option
@json_option
@click.pass_obj
def tag(
    config: RegistryConfig,
    name: str,
    namespace: Optional[str],
    tag: str,
    version: Optional[str],
    delete: bool,
    kind: str,
    as_json: bool,
):
    """Add a tag to a template version"""
    ref = TagReference(name=name, namespace=namespace, tag=tag, version=version)

    if delete:
        result = run_operation(
            config, lambda client: client.remove_tag(ref, kind=TemplateKind(kind))
        )
        emit(result, as_json, f"Tag {tag} was successfully removed from {ref.full_name}")
        return

    result = run_operation(config, lambda client: client.tag(ref, kind=TemplateKind(kind)))
    emit(
        result,
        as_json,
        f"Template {result.name}@{result.version} was successfully tagged as {result.tag}",
    )


@cli.command("remove-tag")
@name_option
@namespace_option
@click.option("--tag", "-t", required=True, help="Tag name")
@kind_option
@json_option
@click.pass_obj
def remove_tag(
    config: RegistryConfig,
    name: str,
    namespace: Optional[str],
    tag: str,
    kind: str,
    as_json: bool,
):
    """Remove a tag from a template"""
    ref = TagReference(name=name, namespace=namespace, tag=tag)
    result = run_operation(
        config, lambda client: client.remove_tag(ref, kind=TemplateKind(kind))
    )
    emit(result, as_json, f"Tag {tag} was successfully removed from {ref.full_name}")


@cli.command("remove-template")
@name_option
@namespace_option
@kind_option
@json_option
@click.pass_obj
def remove_template(
    config: RegistryConfig, name: str, namespace: Optional[str], kind: str, as_json: bool
):
    """Remove a template and all of its versions"""
    ref = TemplateReference(name=name, namespace=namespace)
    result = run_operation(
        config, lambda client: client.remove_template(ref, kind=TemplateKind(kind))
    )
    emit(result, as_json, f"Template {result.name} was successfully removed")


@cli.command("remove-version")
@name_option
@namespace_option
@click.option("--version", "-v", required=True, help="Template version")
@kind_option
@json_option
@click.pass_obj
def remove_version(
    config: RegistryConfig,
    name: str,
    namespace: Optional[str],
    version: str,
    kind: str,
    as_json: bool,
):
    """Remove one version of a template"""
    ref = TemplateReference(name=name, namespace=namespace)
    result = run_operation(
        config,
        lambda client: client.remove_version(ref, version, kind=TemplateKind(kind)),
    )
    emit(
        result,
        as_json,
        f"Version {version} of template {display_name(name, namespace)} "
        "was successfully removed",
    )


@cli.command("get-version-from-tag")
@name_option
@namespace_option
@click.option("--tag", "-t", required=True, help="Tag name")
@kind_option
@click.pass_obj
def get_version_from_tag(
    config: RegistryConfig, name: str, namespace: Optional[str], tag: str, kind: str
):
    """Print the version a tag points to"""
    ref = TagReference(name=name, namespace=namespace, tag=tag)
    version = run_operation(
        config, lambda client: client.get_version_from_tag(ref, kind=TemplateKind(kind))
    )
    click.echo(version)


if __name__ == "__main__":
    cli()
