"""Environment variable substitution for connector files.

Connector template and connector input files may reference ${VAR_NAME}
placeholders (hosts, credentials, GAV coordinates), resolved from the
environment or a .env file.
"""

import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)

# Pattern for ${VAR_NAME} placeholders
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


def load_env_file(env_file: Path | None = None) -> None:
    """Load environment variables from a .env file.

    Args:
        env_file: Path to .env file. If None, looks for .env in current directory.

    Note:
        Variables already set in the environment take precedence.
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    if env_file.exists():
        logger.debug(f"Loading environment variables from {env_file}")
        load_dotenv(env_file, override=False)
    else:
        logger.debug(f"No .env file found at {env_file}")


def substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in a value.

    Args:
        value: Value to process (str, dict, list, or primitive)

    Returns:
        Value with placeholders substituted

    Raises:
        ConfigurationError: If a referenced variable is not set

    Examples:
        >>> os.environ['PETSTORE_GAV'] = 'io.example:petstore:1.0'
        >>> substitute_env_vars({'camelConnectorGAV': '${PETSTORE_GAV}'})
        {'camelConnectorGAV': 'io.example:petstore:1.0'}
    """
    if isinstance(value, str):
        return _substitute_string(value)
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    else:
        return value


def _substitute_string(text: str) -> str:
    def replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)

        if value is None:
            raise ConfigurationError(
                f"Environment variable '{var_name}' not set. "
                f"Set it in your environment or .env file."
            )

        return value

    return ENV_VAR_PATTERN.sub(replace_match, text)


def find_env_vars(value: Any, *, required_vars: set[str] | None = None) -> set[str]:
    """Extract all ${VAR_NAME} placeholders from a value.

    Example:
        >>> find_env_vars({'icon': '${ICON_URL}', 'tags': ['${TAG}']})
        {'ICON_URL', 'TAG'}
    """
    if required_vars is None:
        required_vars = set()

    if isinstance(value, str):
        for match in ENV_VAR_PATTERN.finditer(value):
            required_vars.add(match.group(1))
    elif isinstance(value, dict):
        for v in value.values():
            find_env_vars(v, required_vars=required_vars)
    elif isinstance(value, list):
        for item in value:
            find_env_vars(item, required_vars=required_vars)

    return required_vars


def check_required_vars(value: Any) -> None:
    """Check that all ${VAR_NAME} placeholders can be resolved.

    Raises:
        ConfigurationError: If any referenced variable is not set
    """
    required = find_env_vars(value)
    missing = {var for var in required if var not in os.environ}

    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(sorted(missing))}. "
            f"Set them in your environment or .env file."
        )
