"""Data models for generated connectors.

All models are immutable Pydantic models. Python code uses snake_case
field names; JSON output uses the camelCase names the integration
platform reads (`configuredProperties`, `inputDataShape`, ...).

Updates never mutate a model in place: use `model_copy(update=...)` or the
`with_*` helpers, which return a new instance.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# ============================================================================
# Base
# ============================================================================


class FrozenModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using the platform field names."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# Data Shapes
# ============================================================================


class DataShapeKind(str, Enum):
    """Persisted data shape kinds."""

    NONE = "none"
    JSON_SCHEMA = "json-schema"


class DataShape(FrozenModel):
    """Normalized payload schema of an action input or output."""

    kind: DataShapeKind
    specification: str | None = None

    @model_validator(mode="after")
    def validate_specification(self) -> "DataShape":
        """A json-schema shape carries text, a none shape carries nothing."""
        if self.kind == DataShapeKind.JSON_SCHEMA and not self.specification:
            raise ValueError("json-schema data shape requires specification text")
        if self.kind == DataShapeKind.NONE and self.specification is not None:
            raise ValueError("none data shape cannot carry specification text")
        return self


DATA_SHAPE_NONE = DataShape(kind=DataShapeKind.NONE)


def json_schema_shape(specification: str) -> DataShape:
    """Create a json-schema data shape for the given schema text."""
    return DataShape(kind=DataShapeKind.JSON_SCHEMA, specification=specification)


# ============================================================================
# Configuration Properties
# ============================================================================


class PropertyValue(FrozenModel):
    """One enum option of a configuration property."""

    label: str
    value: str


class ConfigurationProperty(FrozenModel):
    """One user-configurable input of an action or connector."""

    kind: str = "property"
    display_name: str | None = None
    description: str | None = None
    group: str | None = None
    required: bool = False
    type: str | None = None
    java_type: str | None = None
    enum: list[PropertyValue] = Field(default_factory=list)
    default_value: str | None = None
    secret: bool = False
    deprecated: bool = False
    component_property: bool = False


# ============================================================================
# Actions
# ============================================================================


class ActionDefinitionStep(FrozenModel):
    """A named group of configuration properties (displayName -> property)."""

    name: str
    description: str | None = None
    properties: dict[str, ConfigurationProperty] = Field(default_factory=dict)


class ActionDefinition(FrozenModel):
    """Typed contract of an action."""

    input_data_shape: DataShape = DATA_SHAPE_NONE
    output_data_shape: DataShape = DATA_SHAPE_NONE
    property_definition_steps: list[ActionDefinitionStep] = Field(default_factory=list)


class Action(FrozenModel):
    """One API operation exposed by a connector."""

    id: str
    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    camel_connector_gav: str | None = Field(default=None, alias="camelConnectorGAV")
    camel_connector_prefix: str | None = None
    connector_id: str | None = None
    definition: ActionDefinition = Field(default_factory=ActionDefinition)

    @model_validator(mode="after")
    def validate_id(self) -> "Action":
        """Ensure the action id is not empty."""
        if not self.id:
            raise ValueError("Action id cannot be empty")
        return self


# ============================================================================
# Connectors
# ============================================================================


class ConnectorTemplate(FrozenModel):
    """Externally supplied seed describing the connector before generation."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    camel_connector_gav: str | None = Field(default=None, alias="camelConnectorGAV")
    camel_connector_prefix: str | None = None
    connector_properties: dict[str, ConfigurationProperty] = Field(default_factory=dict)


class Connector(FrozenModel):
    """A connector: configured properties, connector-level properties and actions."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    camel_connector_gav: str | None = Field(default=None, alias="camelConnectorGAV")
    camel_connector_prefix: str | None = None
    properties: dict[str, ConfigurationProperty] = Field(default_factory=dict)
    configured_properties: dict[str, str] = Field(default_factory=dict)
    actions: list[Action] = Field(default_factory=list)

    def with_configured_property(self, key: str, value: str) -> "Connector":
        """Return a copy with one configured property set."""
        return self.model_copy(
            update={"configured_properties": {**self.configured_properties, key: value}}
        )

    def with_properties(self, properties: dict[str, ConfigurationProperty]) -> "Connector":
        """Return a copy with the given properties overlaid on the existing ones."""
        return self.model_copy(update={"properties": {**self.properties, **properties}})

    def with_actions(self, actions: list[Action]) -> "Connector":
        """Return a copy with the given actions appended."""
        return self.model_copy(update={"actions": [*self.actions, *actions]})
