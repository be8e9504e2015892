"""connectorgen - Swagger 2.0 to integration connector generator.

Turns an OpenAPI/Swagger 2.0 document into a connector descriptor: one
action per API operation, each with normalized input/output data shapes
and configuration properties derived from the operation's parameters.

Basic Usage:
    >>> from connectorgen import Connector, ConnectorTemplate, generate
    >>>
    >>> template = ConnectorTemplate(
    ...     id="swagger-connector-template",
    ...     camel_connector_gav="io.syndesis:rest-swagger-connector:1.0",
    ...     camel_connector_prefix="swagger-operation",
    ... )
    >>> connector_input = Connector(
    ...     id="petstore",
    ...     configured_properties={"specification": open("petstore.yaml").read()},
    ... )
    >>> connector = generate(template, connector_input)

Public API:
    Generation:
        - generate: Build a connector from a template and a specification

    Models:
        - Connector, ConnectorTemplate, Action, ActionDefinition,
          ActionDefinitionStep, ConfigurationProperty, PropertyValue, DataShape

    Errors:
        - ConnectorGenError and its subclasses
"""

from .core.errors import (
    ConfigurationError,
    ConnectorGenError,
    SchemaReferenceError,
    SerializationError,
    SpecificationParseError,
    UnsupportedParameterError,
)
from .core.models import (
    DATA_SHAPE_NONE,
    Action,
    ActionDefinition,
    ActionDefinitionStep,
    ConfigurationProperty,
    Connector,
    ConnectorTemplate,
    DataShape,
    DataShapeKind,
    PropertyValue,
)
from .swagger import generate
from .version import __version__

__all__ = [
    # Version
    "__version__",
    # Generation
    "generate",
    # Models
    "Connector",
    "ConnectorTemplate",
    "Action",
    "ActionDefinition",
    "ActionDefinitionStep",
    "ConfigurationProperty",
    "PropertyValue",
    "DataShape",
    "DataShapeKind",
    "DATA_SHAPE_NONE",
    # Errors
    "ConnectorGenError",
    "ConfigurationError",
    "SpecificationParseError",
    "SchemaReferenceError",
    "UnsupportedParameterError",
    "SerializationError",
]
