"""Swagger connector generator.

Turns a Swagger 2.0 document into a connector: one action per operation,
document-level parameters as connector properties.

Example:
    from connectorgen import generate

    connector = generate(template, connector_input)
    for action in connector.actions:
        print(action.id, action.name)
"""

from uuid import uuid4

from ..core.errors import ConfigurationError
from ..core.logging import get_logger
from ..core.models import ConfigurationProperty, Connector, ConnectorTemplate
from ..core.serialization import dump_json
from .actions import build_action
from .identity import assign_operation_ids
from .parameters import map_parameter
from .parser import SwaggerDocument, parse

logger = get_logger(__name__)

SPECIFICATION_PROPERTY = "specification"


def generate(connector_template: ConnectorTemplate, connector_input: Connector) -> Connector:
    """Generate a connector from a template and a connector carrying a specification.

    Neither argument is modified; a new Connector is returned.

    Args:
        connector_template: Template supplying GAV, scheme prefix and base properties
        connector_input: Connector whose configured properties include
            `specification` (Swagger 2.0 text, JSON or YAML)

    Returns:
        Connector with actions and document-level properties. Its
        `specification` configured property is the input text unless
        operation ids were synthesized, in which case it is the updated
        document serialized as JSON.

    Raises:
        ConfigurationError: If `specification` is missing or the template has
            no GAV
        SpecificationParseError: If the specification cannot be parsed
        SchemaReferenceError: If a body or response schema cannot be resolved
        UnsupportedParameterError: If a parameter cannot be mapped
        SerializationError: If a schema or the document cannot be serialized
    """
    specification = connector_input.configured_properties.get(SPECIFICATION_PROPERTY)

    if specification is None:
        raise ConfigurationError(
            "Configured properties of the given connector do not include "
            f"`{SPECIFICATION_PROPERTY}` property"
        )

    if not connector_template.camel_connector_gav:
        raise ConfigurationError(
            "Connector template does not define `camelConnectorGAV`, action ids cannot be built"
        )

    connector = base_connector_from(connector_template, connector_input)
    connector = connector.with_configured_property(SPECIFICATION_PROPERTY, specification)

    return configure_connector(connector_template, connector, specification)


def base_connector_from(connector_template: ConnectorTemplate, connector_input: Connector) -> Connector:
    """Base connector: input identity falling back to the template's, template GAV/prefix."""
    return Connector(
        id=connector_input.id or connector_template.id or uuid4().hex,
        name=connector_input.name or connector_template.name,
        description=connector_input.description or connector_template.description,
        icon=connector_input.icon or connector_template.icon,
        camel_connector_gav=connector_template.camel_connector_gav,
        camel_connector_prefix=connector_template.camel_connector_prefix,
        properties={**connector_template.connector_properties, **connector_input.properties},
        configured_properties=dict(connector_input.configured_properties),
    )


def configure_connector(
    connector_template: ConnectorTemplate, connector: Connector, specification: str
) -> Connector:
    """Parse the specification and add its properties and actions to the connector."""
    document = parse(specification)

    connector = connector.with_properties(global_properties(document))

    operations = list(document.operations())
    mutated = assign_operation_ids(operations)

    actions = [
        build_action(
            document,
            operation,
            path,
            method,
            connector.id,
            connector_template.camel_connector_gav,
            connector_template.camel_connector_prefix,
        )
        for path, method, operation in operations
    ]
    connector = connector.with_actions(actions)

    if mutated:
        # the document gained operationIds, store the updated one
        connector = connector.with_configured_property(
            SPECIFICATION_PROPERTY, serialize(document)
        )

    logger.info(
        f"Generated connector {connector.id} with {len(actions)} action(s)"
        + (" (operation ids synthesized)" if mutated else "")
    )
    return connector


def global_properties(document: SwaggerDocument) -> dict[str, ConfigurationProperty]:
    """Connector properties for document-level parameters; unmappable ones are dropped."""
    properties: dict[str, ConfigurationProperty] = {}
    for name, parameter in document.parameters.items():
        prop = map_parameter(parameter)
        if prop is not None:
            properties[str(name)] = prop
    return properties


def serialize(document: SwaggerDocument) -> str:
    """Serialize the (updated) document as JSON.

    Raises:
        SerializationError: If the document holds values JSON cannot represent
    """
    return dump_json(document.raw, what="Swagger specification")
