"""Builds one connector action per Swagger operation."""

from typing import Any, Optional

from ..core.models import (
    DATA_SHAPE_NONE,
    Action,
    ActionDefinition,
    ActionDefinitionStep,
    ConfigurationProperty,
    DataShape,
)
from .parameters import PRODUCER_GROUP, PROPERTY_KIND, STRING_JAVA_TYPE, map_parameter
from .parser import BodyParameter, Operation, SwaggerDocument, classify_schema
from .schemas import resolve_request_shape, resolve_response_shape

QUERY_PARAMETERS_STEP = "Query parameters"
QUERY_PARAMETERS_DESCRIPTION = "Specify query parameters"

OPERATION_ID_PROPERTY = "operationId"


def build_action(
    document: SwaggerDocument,
    operation: Operation,
    path: str,
    method: str,
    connector_id: str,
    connector_gav: str,
    connector_prefix: Optional[str],
) -> Action:
    """Assemble the action for one operation.

    The operation must already have an id (see `assign_operation_ids`).

    Raises:
        SchemaReferenceError: If a body or response schema cannot be resolved
        UnsupportedParameterError: If a parameter cannot be mapped
        SerializationError: If a schema cannot be written as JSON
    """
    return Action(
        id=create_action_id(connector_id, connector_gav, operation),
        name=f"{method.upper()} {path}" if operation.summary is None else operation.summary,
        description="" if operation.description is None else operation.description,
        tags=list(operation.tags or []),
        camel_connector_gav=connector_gav,
        camel_connector_prefix=connector_prefix,
        connector_id=connector_id,
        definition=create_action_definition(document, operation),
    )


def create_action_id(connector_id: str, connector_gav: str, operation: Operation) -> str:
    return f"{connector_gav}:{connector_id}:{operation.operation_id}"


def create_action_definition(document: SwaggerDocument, operation: Operation) -> ActionDefinition:
    parameters = operation.parameters

    properties: dict[str, ConfigurationProperty] = {}
    for parameter in parameters:
        prop = map_parameter(parameter)
        if prop is not None:
            properties[prop.display_name] = prop

    properties[OPERATION_ID_PROPERTY] = ConfigurationProperty(
        kind=PROPERTY_KIND,
        display_name=OPERATION_ID_PROPERTY,
        group=PRODUCER_GROUP,
        required=True,
        type="hidden",
        java_type=STRING_JAVA_TYPE,
        deprecated=False,
        secret=False,
        component_property=False,
        default_value=operation.operation_id,
    )

    step = ActionDefinitionStep(
        name=QUERY_PARAMETERS_STEP,
        description=QUERY_PARAMETERS_DESCRIPTION,
        properties=properties,
    )

    return ActionDefinition(
        input_data_shape=_input_shape(document, parameters),
        output_data_shape=_output_shape(document, operation),
        property_definition_steps=[step],
    )


def _input_shape(document: SwaggerDocument, parameters: list) -> DataShape:
    for parameter in parameters:
        if isinstance(parameter, BodyParameter) and parameter.schema is not None:
            return resolve_request_shape(document, parameter.schema)
    return DATA_SHAPE_NONE


def _output_shape(document: SwaggerDocument, operation: Operation) -> DataShape:
    for _, response in operation.responses:
        schema = _response_schema(document, response)
        if schema is not None:
            return resolve_response_shape(document, classify_schema(schema))
    return DATA_SHAPE_NONE


def _response_schema(document: SwaggerDocument, response: Any) -> Any:
    if isinstance(response, dict) and "$ref" in response:
        response = document.resolve(response["$ref"])
    if not isinstance(response, dict):
        return None
    return response.get("schema")
