"""Maps Swagger parameters to configuration properties.

The same mapping is applied to operation parameters and to document-level
parameters: body and `$ref` parameters map to nothing, typed
query/header/path/formData parameters map to a property, anything else is
an UnsupportedParameterError.
"""

import json
from typing import Any, Optional

from ..core.errors import UnsupportedParameterError
from ..core.models import ConfigurationProperty, PropertyValue
from .parser import (
    BodyParameter,
    Parameter,
    RefParameter,
    SerializableParameter,
)

PROPERTY_KIND = "property"
PRODUCER_GROUP = "producer"

STRING_JAVA_TYPE = "java.lang.String"


def map_parameter(parameter: Parameter) -> Optional[ConfigurationProperty]:
    """Configuration property for a parameter, or None when it has no inline shape.

    Args:
        parameter: Classified parameter variant

    Returns:
        ConfigurationProperty, or None for body and reference parameters

    Raises:
        UnsupportedParameterError: If the parameter is not body, reference
            or serializable, or its type/format has no native type
    """
    if isinstance(parameter, (RefParameter, BodyParameter)):
        # body parameters become the input data shape, references are skipped
        return None

    if not isinstance(parameter, SerializableParameter):
        raise UnsupportedParameterError(
            "Unexpected parameter type received, neither ref, body nor serializable: "
            f"{getattr(parameter, 'raw', parameter)}"
        )

    return ConfigurationProperty(
        kind=PROPERTY_KIND,
        display_name=parameter.name,
        description=parameter.description,
        group=PRODUCER_GROUP,
        required=parameter.required,
        type=parameter.type,
        java_type=java_type_for(parameter),
        enum=create_enums(parameter.enum or []),
        secret=False,
        deprecated=False,
        component_property=False,
    )


def java_type_for(parameter: SerializableParameter) -> str:
    """Native type hint for a parameter; arrays use their element type plus `[]`."""
    if parameter.type == "array":
        items = parameter.items or {}
        return _java_type(items.get("type"), items.get("format")) + "[]"

    return _java_type(parameter.type, parameter.format)


def _java_type(param_type: Optional[str], param_format: Optional[str]) -> str:
    if param_type == "string":
        return STRING_JAVA_TYPE
    if param_type == "number":
        return "java.lang.Float" if param_format == "float" else "java.lang.Double"
    if param_type == "integer":
        return "java.lang.Integer" if param_format == "int32" else "java.lang.Long"
    if param_type == "boolean":
        return "java.lang.Boolean"
    if param_type == "file":
        return "java.io.File"

    raise UnsupportedParameterError(
        f"Given parameter is of unknown type/format: {param_type}/{param_format}"
    )


def create_enums(values: list[Any]) -> list[PropertyValue]:
    """One PropertyValue per enum entry, label == value, in declaration order."""
    return [create_property_value(_enum_text(value)) for value in values]


def create_property_value(value: str) -> PropertyValue:
    return PropertyValue(label=value, value=value)


def _enum_text(value: Any) -> str:
    # non-string enum entries keep their JSON spelling (true, 42)
    return value if isinstance(value, str) else json.dumps(value)
