"""Loading template documents from disk."""

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from .exceptions import TemplateLoadError, TemplateParseError
from .models import TemplateConfig

logger = structlog.get_logger()


def load_config(path: str | Path) -> TemplateConfig:
    """
    Read and parse a YAML template file.

    Args:
        path: Path to the template file

    Returns:
        The parsed template

    Raises:
        TemplateLoadError: If the file cannot be read
        TemplateParseError: If the file is not a YAML mapping
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateLoadError(f"Error reading template file {path}: {e}") from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TemplateParseError(f"Error parsing template file {path}: {e}") from e

    if not isinstance(document, dict):
        raise TemplateParseError(
            f"Error parsing template file {path}: expected a mapping, "
            f"got {type(document).__name__}"
        )

    try:
        config = TemplateConfig.model_validate(document)
    except ValidationError as e:
        raise TemplateParseError(f"Error parsing template file {path}: {e}") from e

    logger.debug("Template loaded", path=str(path), name=config.name)
    return config
