"""Description graph reader.

Reads a serialized description graph (YAML or JSON) into the typed
models. The file holds the graph produced by the parsing collaborator,
not raw RAML/OpenAPI source.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from api_expect.description.base import Description
from api_expect.errors import DescriptionError

logger = logging.getLogger(__name__)


def read_description(file_path: Path) -> Description:
    """Read a graph file into a Description."""
    file_path = Path(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptionError(f"Cannot read description {file_path}: {e}") from e

    # JSON is a YAML subset, one loader covers both
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptionError(f"Description {file_path} is not valid YAML/JSON: {e}") from e

    if not isinstance(data, dict):
        raise DescriptionError(f"Description {file_path} must contain a mapping at the top level")

    try:
        description = Description.model_validate(data)
    except ValidationError as e:
        raise DescriptionError(f"Description {file_path} is malformed: {e}") from e

    logger.debug("Read description %s with %d resources", file_path, len(description.resources))
    return description
