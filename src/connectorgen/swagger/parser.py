"""Swagger 2.0 specification parser.

Loads specification text (JSON or YAML) into a `SwaggerDocument`: a thin
view over the parsed tree that keeps declaration order for paths and
methods and classifies parameters and schemas into variant types.

The document wraps the parsed dicts without copying them, so setting an
operation id through an `Operation` changes the tree that is later
re-serialized.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Union

import yaml

from ..core.errors import SchemaReferenceError, SpecificationParseError
from ..core.logging import get_logger

logger = get_logger(__name__)

# Path item keys that are operations, everything else (parameters, $ref, x-*) is skipped
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

SERIALIZABLE_LOCATIONS = frozenset({"query", "header", "path", "formData"})
SERIALIZABLE_TYPES = frozenset({"string", "number", "integer", "boolean", "array", "file"})
PRIMITIVE_TYPES = frozenset({"string", "number", "integer", "boolean", "file"})

DEFINITIONS_PREFIX = "#/definitions/"


# ============================================================================
# Parameter Variants
# ============================================================================


@dataclass(frozen=True)
class RefParameter:
    """A parameter given only as a `$ref`."""

    ref: str


@dataclass(frozen=True)
class BodyParameter:
    """A parameter with `in: body`; its schema describes the request payload."""

    name: Optional[str]
    schema: Optional["Schema"]


@dataclass(frozen=True)
class SerializableParameter:
    """A query/header/path/formData parameter with a primitive declared type."""

    name: str
    location: str
    type: str
    format: Optional[str] = None
    enum: Optional[list[Any]] = None
    required: bool = False
    description: Optional[str] = None
    items: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class UnsupportedParameter:
    """Anything else: mapping it is an error."""

    raw: Any


Parameter = Union[RefParameter, BodyParameter, SerializableParameter, UnsupportedParameter]


def classify_parameter(raw: Any) -> Parameter:
    """Classify a raw parameter object into its variant."""
    if not isinstance(raw, dict):
        return UnsupportedParameter(raw)

    if "$ref" in raw:
        return RefParameter(ref=raw["$ref"])

    location = raw.get("in")
    if location == "body":
        schema = raw.get("schema")
        return BodyParameter(
            name=raw.get("name"),
            schema=classify_schema(schema) if schema is not None else None,
        )

    name = raw.get("name")
    param_type = raw.get("type")
    if (
        isinstance(location, str)
        and location in SERIALIZABLE_LOCATIONS
        and isinstance(name, str)
        and isinstance(param_type, str)
        and param_type in SERIALIZABLE_TYPES
    ):
        enum = raw.get("enum")
        return SerializableParameter(
            name=name,
            location=location,
            type=param_type,
            format=raw.get("format"),
            enum=list(enum) if isinstance(enum, list) else None,
            required=bool(raw.get("required", False)),
            description=_as_text(raw.get("description")),
            items=raw.get("items") if isinstance(raw.get("items"), dict) else None,
        )

    return UnsupportedParameter(raw)


def _as_text(value: Any) -> Optional[str]:
    """Scalar as text; YAML reads `operationId: 42` or `summary: 2017` as numbers."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ============================================================================
# Schema Variants
# ============================================================================


@dataclass(frozen=True)
class RefSchema:
    """A named reference (`$ref`) to a definition."""

    ref: str
    title: Optional[str]
    raw: dict[str, Any]


@dataclass(frozen=True)
class ArraySchema:
    """`type: array`; items is None when the array declares no item schema."""

    items: Optional["Schema"]
    raw: dict[str, Any]


@dataclass(frozen=True)
class MapSchema:
    """An object described only by `additionalProperties`."""

    raw: dict[str, Any]


@dataclass(frozen=True)
class PrimitiveSchema:
    type: str
    raw: dict[str, Any]


@dataclass(frozen=True)
class InlineSchema:
    """An inline model without a reference."""

    raw: dict[str, Any]


@dataclass(frozen=True)
class InvalidSchema:
    """A schema value that is not a mapping at all."""

    raw: Any


Schema = Union[RefSchema, ArraySchema, MapSchema, PrimitiveSchema, InlineSchema, InvalidSchema]


def classify_schema(raw: Any) -> Schema:
    """Classify a raw schema object into its variant."""
    if not isinstance(raw, dict):
        return InvalidSchema(raw)

    if "$ref" in raw:
        return RefSchema(ref=raw["$ref"], title=raw.get("title"), raw=raw)

    schema_type = raw.get("type")
    if schema_type == "array":
        items = raw.get("items")
        return ArraySchema(items=classify_schema(items) if items is not None else None, raw=raw)

    additional = raw.get("additionalProperties")
    if (
        schema_type in (None, "object")
        and "properties" not in raw
        and (isinstance(additional, dict) or additional is True)
    ):
        return MapSchema(raw)

    if isinstance(schema_type, str) and schema_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(type=schema_type, raw=raw)

    return InlineSchema(raw)


# ============================================================================
# Document Tree
# ============================================================================


class Operation:
    """One HTTP method bound to one path, backed by the raw document tree."""

    def __init__(self, raw: dict[str, Any]):
        self.raw = raw

    @property
    def operation_id(self) -> Optional[str]:
        return _as_text(self.raw.get("operationId"))

    @operation_id.setter
    def operation_id(self, value: str) -> None:
        self.raw["operationId"] = value

    @property
    def summary(self) -> Optional[str]:
        return _as_text(self.raw.get("summary"))

    @property
    def description(self) -> Optional[str]:
        return _as_text(self.raw.get("description"))

    @property
    def tags(self) -> Optional[list[str]]:
        tags = self.raw.get("tags")
        return [_as_text(tag) for tag in tags if tag is not None] if isinstance(tags, list) else None

    @property
    def parameters(self) -> list[Parameter]:
        """Operation parameters in declaration order."""
        return [classify_parameter(raw) for raw in self.raw.get("parameters") or []]

    @property
    def responses(self) -> list[tuple[str, dict[str, Any]]]:
        """(status code, response object) pairs in declaration order."""
        responses = self.raw.get("responses") or {}
        return [(str(code), response) for code, response in responses.items()]


class SwaggerDocument:
    """Parsed Swagger 2.0 document.

    Example:
        doc = parse(specification_text)

        for path, method, operation in doc.operations():
            print(method.upper(), path, operation.operation_id)
    """

    def __init__(self, spec_dict: dict[str, Any]):
        """Initialize from a parsed specification dictionary.

        Raises:
            SpecificationParseError: If the tree is not a Swagger 2.0 document
        """
        if not isinstance(spec_dict, dict):
            raise SpecificationParseError(
                f"Specification must be a mapping, got {type(spec_dict).__name__}"
            )

        version = str(spec_dict.get("swagger", ""))
        if not version.startswith("2."):
            raise SpecificationParseError(
                f"Unsupported specification version: {version or 'missing'}. "
                "Only Swagger 2.0 is supported."
            )

        paths = spec_dict.get("paths")
        if paths is not None and not isinstance(paths, dict):
            raise SpecificationParseError("`paths` must be a mapping")

        self.raw = spec_dict
        self.version = version

    @property
    def title(self) -> Optional[str]:
        info = self.raw.get("info")
        return info.get("title") if isinstance(info, dict) else None

    @property
    def parameters(self) -> dict[str, Parameter]:
        """Document-level parameters (name -> parameter)."""
        parameters = self.raw.get("parameters") or {}
        return {name: classify_parameter(raw) for name, raw in parameters.items()}

    @property
    def definitions(self) -> dict[str, Any]:
        return self.raw.get("definitions") or {}

    def paths(self) -> Iterator[tuple[str, dict[str, Operation]]]:
        """Yield (path, method -> operation) in declaration order."""
        for path, path_item in (self.raw.get("paths") or {}).items():
            if not isinstance(path_item, dict):
                continue
            yield path, {
                method: Operation(operation)
                for method, operation in path_item.items()
                if isinstance(method, str)
                and method.lower() in HTTP_METHODS
                and isinstance(operation, dict)
            }

    def operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield every (path, method, operation) triple in declaration order."""
        for path, operations in self.paths():
            for method, operation in operations.items():
                yield path, method, operation

    def resolve(self, reference: str) -> Any:
        """Resolve a local reference against this document.

        Raises:
            SchemaReferenceError: If the reference is remote or dangling
        """
        pointer = normalize_reference(reference)

        tokens = pointer[2:].split("/") if pointer != "#" else []

        node: Any = self.raw
        for token in tokens:
            token = token.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                raise SchemaReferenceError(f"Unable to resolve reference {reference}")
        return node


def normalize_reference(reference: str) -> str:
    """Turn a reference into a local JSON pointer (`#/...`).

    The Swagger shorthand `Pet` means `#/definitions/Pet`.

    Raises:
        SchemaReferenceError: For remote (cross-document) references
    """
    if not isinstance(reference, str) or not reference:
        raise SchemaReferenceError(f"Invalid reference: {reference!r}")
    if reference == "#" or reference.startswith("#/"):
        return reference
    if "#" not in reference and "/" not in reference and "." not in reference:
        return DEFINITIONS_PREFIX + reference
    raise SchemaReferenceError(f"Remote references are not supported: {reference}")


def parse(text: str) -> SwaggerDocument:
    """Parse specification text into a SwaggerDocument.

    JSON text is read with the json module, anything else as YAML; both keep
    mapping declaration order.

    Raises:
        SpecificationParseError: If the text is not valid JSON/YAML or not a
            Swagger 2.0 document
    """
    if not text or not text.strip():
        raise SpecificationParseError("Specification is empty")

    try:
        if text.lstrip().startswith("{"):
            spec_dict = json.loads(text)
        else:
            spec_dict = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecificationParseError(f"Invalid specification syntax: {e}") from e

    document = SwaggerDocument(spec_dict)
    logger.debug(f"Parsed Swagger {document.version} specification")
    return document
