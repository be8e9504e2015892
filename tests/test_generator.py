"""End-to-end tests for connector generation."""

import json

import pytest
import yaml

from connectorgen import (
    DATA_SHAPE_NONE,
    ConfigurationError,
    ConfigurationProperty,
    Connector,
    ConnectorTemplate,
    DataShapeKind,
    PropertyValue,
    SchemaReferenceError,
    SerializationError,
    SpecificationParseError,
    UnsupportedParameterError,
    generate,
)

GAV = "io.syndesis:rest-swagger-connector:1.0"

TEMPLATE = ConnectorTemplate(
    id="swagger-connector-template",
    name="Swagger API Client",
    icon="fa-globe",
    camel_connector_gav=GAV,
    camel_connector_prefix="swagger-operation",
    connector_properties={
        "host": ConfigurationProperty(display_name="Host", type="string", group="common"),
    },
)

PETSTORE_SPEC = {
    "swagger": "2.0",
    "info": {"title": "Swagger Petstore", "version": "1.0.0"},
    "host": "petstore.swagger.io",
    "basePath": "/v1",
    "parameters": {
        "apiVersion": {
            "name": "apiVersion",
            "in": "header",
            "type": "string",
            "enum": ["a", "b"],
        },
        "petBody": {"name": "body", "in": "body", "schema": {"$ref": "#/definitions/Pet"}},
        "sharedRef": {"$ref": "#/parameters/apiVersion"},
    },
    "paths": {
        "/pets": {
            "get": {
                "summary": "List all pets",
                "operationId": "listPets",
                "tags": ["pets"],
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"}
                ],
                "responses": {
                    "200": {
                        "description": "A paged array of pets",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    }
                },
            },
            "post": {
                "summary": "Create a pet",
                "operationId": "createPets",
                "parameters": [
                    {"name": "pet", "in": "body", "schema": {"$ref": "#/definitions/Pet"}}
                ],
                "responses": {"201": {"description": "Null response"}},
            },
        },
        "/pets/{petId}/names": {
            "get": {
                "operationId": "listPetNames",
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "type": "string"}
                ],
                "responses": {
                    "200": {
                        "description": "names",
                        "schema": {"type": "array", "items": {"type": "string"}},
                    }
                },
            }
        },
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "required": ["id", "name"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
            },
        }
    },
}

MISSING_IDS_SPEC = {
    "swagger": "2.0",
    "paths": {
        "/users": {"get": {"summary": "List users", "responses": {"200": {"description": "ok"}}}},
        "/groups": {
            "get": {"operationId": "listGroups", "responses": {"200": {"description": "ok"}}},
            "post": {"responses": {"201": {"description": "created"}}},
        },
    },
}


def _connector(specification, **kwargs):
    return Connector(id="petstore", configured_properties={"specification": specification}, **kwargs)


class TestGenerate:
    """Test the generated connector."""

    def test_actions_in_traversal_order(self):
        """One action per operation, in declaration order."""
        connector = generate(TEMPLATE, _connector(json.dumps(PETSTORE_SPEC)))

        assert [action.id for action in connector.actions] == [
            f"{GAV}:petstore:listPets",
            f"{GAV}:petstore:createPets",
            f"{GAV}:petstore:listPetNames",
        ]

    def test_specification_unchanged_when_ids_present(self):
        """Text is byte-identical when nothing was synthesized."""
        specification = yaml.safe_dump(PETSTORE_SPEC, sort_keys=False)

        connector = generate(TEMPLATE, _connector(specification))

        assert connector.configured_properties["specification"] == specification

    def test_shapes(self):
        """Body references, response arrays and string arrays resolve as expected."""
        connector = generate(TEMPLATE, _connector(json.dumps(PETSTORE_SPEC)))
        list_pets, create_pets, list_names = connector.actions

        output = json.loads(list_pets.definition.output_data_shape.specification)
        assert output["title"] == "Pet"
        assert list_pets.definition.input_data_shape == DATA_SHAPE_NONE

        assert create_pets.definition.input_data_shape.kind == DataShapeKind.JSON_SCHEMA
        assert json.loads(create_pets.definition.input_data_shape.specification)["title"] == "Pet"
        assert create_pets.definition.output_data_shape == DATA_SHAPE_NONE

        assert list_names.definition.output_data_shape == DATA_SHAPE_NONE

    def test_global_parameters_become_properties(self):
        """Document-level parameters surface as connector properties."""
        connector = generate(TEMPLATE, _connector(json.dumps(PETSTORE_SPEC)))

        api_version = connector.properties["apiVersion"]
        assert api_version.enum == [
            PropertyValue(label="a", value="a"),
            PropertyValue(label="b", value="b"),
        ]
        assert api_version.group == "producer"
        assert "petBody" not in connector.properties
        assert "sharedRef" not in connector.properties

    def test_base_connector(self):
        """Identity comes from the input, falling back to the template."""
        connector = generate(TEMPLATE, _connector(json.dumps(PETSTORE_SPEC), name="Petstore"))

        assert connector.id == "petstore"
        assert connector.name == "Petstore"
        assert connector.icon == "fa-globe"
        assert connector.camel_connector_gav == GAV
        assert connector.camel_connector_prefix == "swagger-operation"
        assert connector.properties["host"].display_name == "Host"
        assert list(connector.properties) == ["host", "apiVersion"]

    def test_generated_id_when_none_given(self):
        """Without any id a random key is used and flows into action ids."""
        template = TEMPLATE.model_copy(update={"id": None})

        connector = generate(
            template, Connector(configured_properties={"specification": json.dumps(PETSTORE_SPEC)})
        )

        assert connector.id
        assert connector.actions[0].id == f"{GAV}:{connector.id}:listPets"

    def test_other_configured_properties_kept(self):
        """Configured properties besides the specification are carried over."""
        connector = generate(
            TEMPLATE,
            Connector(
                id="petstore",
                configured_properties={
                    "specification": json.dumps(PETSTORE_SPEC),
                    "host": "https://petstore.example.com",
                },
            ),
        )

        assert connector.configured_properties["host"] == "https://petstore.example.com"

    def test_inputs_not_mutated(self):
        """Template and input connector are left as they were."""
        connector_input = _connector(json.dumps(MISSING_IDS_SPEC))
        before_input = connector_input.model_dump()
        before_template = TEMPLATE.model_dump()

        generate(TEMPLATE, connector_input)

        assert connector_input.model_dump() == before_input
        assert TEMPLATE.model_dump() == before_template

    def test_yaml_scalars_as_text(self):
        """Unquoted YAML numbers and booleans are read as text."""
        specification = """\
swagger: "2.0"
paths:
  /reports:
    get:
      operationId: 42
      summary: 2017
      description: true
      tags: [2017, reports]
      responses: {}
"""

        connector = generate(TEMPLATE, _connector(specification))

        action = connector.actions[0]
        assert action.id == f"{GAV}:petstore:42"
        assert action.name == "2017"
        assert action.description == "true"
        assert action.tags == ["2017", "reports"]


class TestSyntheticOperationIds:
    """Test id synthesis and re-serialization."""

    def test_ids_numbered_across_paths(self):
        """Missing ids become operation-0, operation-1 in traversal order."""
        connector = generate(TEMPLATE, _connector(json.dumps(MISSING_IDS_SPEC)))

        assert [action.id.rsplit(":", 1)[-1] for action in connector.actions] == [
            "operation-0",
            "listGroups",
            "operation-1",
        ]

    def test_specification_reserialized(self):
        """The stored document gains the synthesized ids and nothing else."""
        specification = yaml.safe_dump(MISSING_IDS_SPEC, sort_keys=False)

        connector = generate(TEMPLATE, _connector(specification))

        stored = json.loads(connector.configured_properties["specification"])
        assert stored["paths"]["/users"]["get"]["operationId"] == "operation-0"
        assert stored["paths"]["/groups"]["post"]["operationId"] == "operation-1"

        del stored["paths"]["/users"]["get"]["operationId"]
        del stored["paths"]["/groups"]["post"]["operationId"]
        assert stored == MISSING_IDS_SPEC

    def test_idempotent_after_one_pass(self):
        """Generating from the generated connector changes nothing further."""
        first = generate(TEMPLATE, _connector(json.dumps(MISSING_IDS_SPEC)))
        second = generate(TEMPLATE, first)

        assert second.configured_properties["specification"] == (
            first.configured_properties["specification"]
        )
        assert [a.id for a in second.actions] == [a.id for a in first.actions]

    def test_operation_id_property_default(self):
        """The hidden operationId property defaults to the synthesized id."""
        connector = generate(TEMPLATE, _connector(json.dumps(MISSING_IDS_SPEC)))

        step = connector.actions[2].definition.property_definition_steps[0]
        assert step.properties["operationId"].default_value == "operation-1"

    def test_unserializable_document(self):
        """A mutated YAML document holding dates cannot be re-serialized."""
        specification = (
            "swagger: '2.0'\n"
            "info: {title: Dated, version: 2020-01-01}\n"
            "paths:\n"
            "  /a:\n"
            "    get:\n"
            "      responses: {}\n"
        )

        with pytest.raises(SerializationError):
            generate(TEMPLATE, _connector(specification))


class TestErrors:
    """Test fatal failures."""

    def test_missing_specification(self):
        """A connector without specification is a configuration error."""
        with pytest.raises(ConfigurationError, match="specification"):
            generate(TEMPLATE, Connector(id="petstore"))

    def test_invalid_specification(self):
        """Unparseable text fails before any action is built."""
        with pytest.raises(SpecificationParseError):
            generate(TEMPLATE, _connector("{not json"))

    def test_malformed_operation_parameter(self):
        """A parameter with no primitive type aborts generation."""
        spec = {
            "swagger": "2.0",
            "paths": {
                "/search": {
                    "get": {
                        "operationId": "search",
                        "parameters": [{"name": "filter", "in": "query"}],
                        "responses": {},
                    }
                }
            },
        }

        with pytest.raises(UnsupportedParameterError):
            generate(TEMPLATE, _connector(json.dumps(spec)))

    def test_malformed_global_parameter(self):
        """Unsupported document-level parameters abort too, they are not skipped."""
        spec = {
            "swagger": "2.0",
            "parameters": {"filter": {"name": "filter", "in": "query"}},
            "paths": {},
        }

        with pytest.raises(UnsupportedParameterError):
            generate(TEMPLATE, _connector(json.dumps(spec)))

    def test_template_without_gav(self):
        """Action ids need the template GAV."""
        template = TEMPLATE.model_copy(update={"camel_connector_gav": None})

        with pytest.raises(ConfigurationError, match="camelConnectorGAV"):
            generate(template, _connector(json.dumps(PETSTORE_SPEC)))

    def test_inline_response_object(self):
        """Response schemas must reference a definition."""
        spec = {
            "swagger": "2.0",
            "paths": {
                "/status": {
                    "get": {
                        "operationId": "status",
                        "responses": {
                            "200": {
                                "description": "ok",
                                "schema": {
                                    "type": "object",
                                    "properties": {"n": {"type": "string"}},
                                },
                            }
                        },
                    }
                }
            },
        }

        with pytest.raises(SchemaReferenceError, match="Only references to schemas"):
            generate(TEMPLATE, _connector(json.dumps(spec)))


class TestEndToEnd:
    """The single-operation example from the connector documentation."""

    SPEC = """\
swagger: "2.0"
info:
  title: Pets
  version: "1.0"
paths:
  /pets/{id}:
    get:
      summary: Get pet
      parameters:
        - name: id
          in: path
          type: string
          required: true
      responses:
        200:
          description: The pet
          schema:
            $ref: "#/definitions/Pet"
definitions:
  Pet:
    type: object
    properties:
      name:
        type: string
"""

    def test_get_pet(self):
        """One action named after the summary with a synthesized id."""
        connector = generate(TEMPLATE, _connector(self.SPEC))

        assert len(connector.actions) == 1
        action = connector.actions[0]
        assert action.name == "Get pet"
        assert action.id.endswith("operation-0")

        step = action.definition.property_definition_steps[0]
        assert step.name == "Query parameters"
        assert list(step.properties) == ["id", "operationId"]
        assert step.properties["id"].type == "string"
        assert step.properties["id"].required is True
        assert step.properties["operationId"].default_value == "operation-0"

        output = action.definition.output_data_shape
        assert output.kind == DataShapeKind.JSON_SCHEMA
        assert json.loads(output.specification)["title"] == "Pet"
