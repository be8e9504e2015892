"""Schema resolution: turns body and response schemas into data shapes.

Body schemas are models:
- arrays resolve through their item schema as a property,
- named references become a standalone JSON schema,
- any other model (inline object, map, primitive) is serialized as-is.

Response schemas and array items are properties:
- maps (`additionalProperties` only) are serialized as-is,
- bare primitives have no shape,
- named references become a standalone JSON schema,
- arrays recurse into their items,
- anything else raises SchemaReferenceError.

Any `json-schema` text produced here parses on its own: local references
it contains are normalized to `#/definitions/...` pointers and the
definitions they reach (transitively) are embedded.
"""

from typing import Any, Iterator

from ..core.errors import SchemaReferenceError
from ..core.logging import get_logger
from ..core.models import DATA_SHAPE_NONE, DataShape, json_schema_shape
from ..core.serialization import dump_json
from .parser import (
    DEFINITIONS_PREFIX,
    ArraySchema,
    InlineSchema,
    MapSchema,
    PrimitiveSchema,
    RefSchema,
    Schema,
    SwaggerDocument,
    normalize_reference,
)

logger = get_logger(__name__)

JSON_SCHEMA_DRAFT = "http://json-schema.org/schema#"


def resolve_request_shape(document: SwaggerDocument, schema: Schema) -> DataShape:
    """Data shape of a body parameter schema.

    Raises:
        SchemaReferenceError: If the schema cannot be resolved
        SerializationError: If the resolved schema cannot be written as JSON
    """
    return _model_shape(document, schema)


def resolve_response_shape(document: SwaggerDocument, schema: Schema) -> DataShape:
    """Data shape of a response schema.

    Raises:
        SchemaReferenceError: If the schema cannot be resolved
        SerializationError: If the resolved schema cannot be written as JSON
    """
    return _property_shape(document, schema)


def _model_shape(document: SwaggerDocument, schema: Schema) -> DataShape:
    if isinstance(schema, ArraySchema):
        if schema.items is None:
            raise SchemaReferenceError("Only references to schemas are supported")
        return _property_shape(document, schema.items)

    if isinstance(schema, RefSchema):
        return _reference_shape(document, schema)

    if isinstance(schema, (MapSchema, PrimitiveSchema, InlineSchema)):
        return json_schema_shape(_inline_schema(document, schema.raw))

    raise SchemaReferenceError("Only references to schemas are supported")


def _property_shape(document: SwaggerDocument, schema: Schema) -> DataShape:
    if isinstance(schema, MapSchema):
        return json_schema_shape(_inline_schema(document, schema.raw))

    if isinstance(schema, PrimitiveSchema):
        return DATA_SHAPE_NONE

    if isinstance(schema, RefSchema):
        return _reference_shape(document, schema)

    if isinstance(schema, ArraySchema) and schema.items is not None:
        return _property_shape(document, schema.items)

    raise SchemaReferenceError("Only references to schemas are supported")


def _reference_shape(document: SwaggerDocument, schema: RefSchema) -> DataShape:
    return json_schema_shape(resolve_schema_for_reference(document, schema.title, schema.ref))


def resolve_schema_for_reference(
    document: SwaggerDocument, title: str | None, reference: str
) -> str:
    """Build a standalone JSON schema for a referenced definition.

    The title is the explicit one (on the reference, then on the target
    definition), else the last segment of the reference.

    Example:
        >>> resolve_schema_for_reference(doc, None, "#/definitions/Pet")
        '{"$schema": "http://json-schema.org/schema#", "title": "Pet", "type": "object", ...}'
    """
    target = document.resolve(reference)
    if not isinstance(target, dict):
        raise SchemaReferenceError(f"Reference {reference} does not point to a schema")

    title = title or target.get("title") or reference.rsplit("/", 1)[-1]

    schema: dict[str, Any] = {"$schema": JSON_SCHEMA_DRAFT, "title": title}
    schema.update(
        (key, _normalize_references(value))
        for key, value in target.items()
        if key not in ("title", "definitions")
    )

    definitions = collect_definitions(document, target)
    if definitions:
        schema["definitions"] = definitions

    logger.debug(f"Resolved {reference} with {len(definitions)} definition(s)")
    return dump_json(schema, what=f"schema for {reference}")


def collect_definitions(document: SwaggerDocument, fragment: Any) -> dict[str, Any]:
    """Definitions transitively reachable from the fragment's references.

    Raises:
        SchemaReferenceError: For references outside `#/definitions/` or
            dangling ones
    """
    definitions: dict[str, Any] = {}
    pending = list(_references(fragment))

    while pending:
        pointer = normalize_reference(pending.pop(0))
        if not pointer.startswith(DEFINITIONS_PREFIX):
            raise SchemaReferenceError(f"Only references to definitions are supported: {pointer}")

        name = pointer[len(DEFINITIONS_PREFIX):].replace("~1", "/").replace("~0", "~")
        if name in definitions:
            continue

        definition = document.resolve(pointer)
        definitions[name] = _normalize_references(definition)
        pending.extend(_references(definition))

    return definitions


def _inline_schema(document: SwaggerDocument, fragment: dict[str, Any]) -> str:
    schema = _normalize_references(fragment)

    definitions = collect_definitions(document, fragment)
    if definitions:
        schema = {**schema, "definitions": {**schema.get("definitions", {}), **definitions}}

    return dump_json(schema, what="inline schema")


def _references(node: Any) -> Iterator[str]:
    """Yield every `$ref` value in a schema fragment, depth first."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield ref
        for key, value in node.items():
            if key != "$ref":
                yield from _references(value)
    elif isinstance(node, list):
        for item in node:
            yield from _references(item)


def _normalize_references(node: Any) -> Any:
    """Deep copy of a fragment with `$ref` values turned into local pointers."""
    if isinstance(node, dict):
        return {
            key: normalize_reference(value)
            if key == "$ref" and isinstance(value, str)
            else _normalize_references(value)
            for key, value in node.items()
        }
    if isinstance(node, list):
        return [_normalize_references(item) for item in node]
    return node
