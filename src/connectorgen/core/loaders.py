"""File loaders for connector templates and connector inputs.

Both file kinds are YAML (or JSON, which YAML accepts) using the platform's
camelCase field names. ${VAR_NAME} placeholders are resolved from the
environment; the `specification` configured property is never touched so
that its text stays byte-identical.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .env_vars import check_required_vars, substitute_env_vars
from .errors import ConfigurationError
from .logging import get_logger
from .models import Connector, ConnectorTemplate

logger = get_logger(__name__)

SPECIFICATION_PROPERTY = "specification"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML as dictionary

    Raises:
        ConfigurationError: If file cannot be read or YAML is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid YAML in {path}: expected dictionary, got {type(data).__name__}"
        )
    return data


def load_connector_template(path: Path) -> ConnectorTemplate:
    """Load a connector template file.

    Raises:
        ConfigurationError: If the file is missing, invalid, or references
            unset environment variables

    Example:
        >>> template = load_connector_template(Path("swagger-template.yaml"))
        >>> template.camel_connector_gav
        'io.syndesis:rest-swagger-connector:1.0'
    """
    logger.debug(f"Loading connector template from {path}")

    raw_data = load_yaml(path)
    check_required_vars(raw_data)

    try:
        return ConnectorTemplate(**substitute_env_vars(raw_data))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid connector template in {path}: {e}") from e


def load_connector(path: Path | None = None, specification_path: Path | None = None) -> Connector:
    """Load a connector input, optionally taking the specification from a file.

    Args:
        path: Connector input file. If None, an empty connector is used.
        specification_path: Swagger document whose text becomes the
            `specification` configured property, overriding the file's one.

    Returns:
        Validated Connector model

    Raises:
        ConfigurationError: If a file is missing or invalid
    """
    raw_data = load_yaml(path) if path else {}

    configured = dict(raw_data.get("configuredProperties") or {})
    specification = configured.pop(SPECIFICATION_PROPERTY, None)
    raw_data = {**raw_data, "configuredProperties": configured}

    check_required_vars(raw_data)
    resolved_data = substitute_env_vars(raw_data)

    if specification_path is not None:
        logger.debug(f"Loading specification from {specification_path}")
        try:
            specification = specification_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read specification {specification_path}: {e}"
            ) from e

    if specification is not None:
        resolved_data["configuredProperties"][SPECIFICATION_PROPERTY] = specification

    try:
        return Connector(**resolved_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid connector in {path}: {e}") from e
