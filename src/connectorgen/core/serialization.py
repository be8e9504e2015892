"""JSON serialization utilities for connectorgen.

Schema fragments and whole specification documents are written strictly:
anything JSON cannot represent raises SerializationError instead of being
coerced. Generated connectors go through `to_json`, which understands the
Pydantic models.

Thread-Safety:
    All functions in this module are pure; no global state is mutated.
"""

import json
from typing import Any

from .errors import SerializationError


def dump_json(data: Any, what: str = "value") -> str:
    """Serialize plain data (dicts, lists, primitives) to compact JSON text.

    Key order is preserved so re-serialized documents keep their
    declaration order.

    Args:
        data: Data to serialize
        what: Short description used in the error message

    Returns:
        JSON string

    Raises:
        SerializationError: If data contains values JSON cannot represent
            (dates, NaN, arbitrary objects)
    """
    try:
        return json.dumps(data, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Unable to serialize {what}: {e}") from e


def to_serializable(obj: Any) -> Any:
    """Convert an object to a JSON-serializable format.

    Recursively converts:
    - Objects with to_dict() method (all connectorgen models) -> dict
    - Lists, tuples -> list
    - Dicts -> dict (with serialized values)
    - Primitives (str, int, float, bool, None) -> as-is

    Raises:
        SerializationError: For any other type
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return to_serializable(obj.to_dict())

    if isinstance(obj, dict):
        return {key: to_serializable(value) for key, value in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [to_serializable(item) for item in obj]

    raise SerializationError(f"Object of type {type(obj).__name__} is not serializable")


def to_json(obj: Any, pretty: bool = True) -> str:
    """Convert a model (or plain data) to a JSON string.

    Args:
        obj: Connector, Action or any nested structure of them
        pretty: Whether to pretty-print with indentation (default: True)

    Returns:
        JSON string representation

    Example:
        >>> print(to_json(connector))
        {
          "id": "petstore",
          "configuredProperties": {...},
          ...
        }
    """
    data = to_serializable(obj)

    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)
