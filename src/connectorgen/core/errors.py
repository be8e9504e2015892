"""Exception hierarchy for connectorgen.

Every failure aborts the whole generation pass; nothing is recovered
locally. Callers (REST layers, the CLI) decide how to surface each type.

All custom exceptions inherit from ConnectorGenError, making it easy to
catch every generator failure in a single except clause.
"""


class ConnectorGenError(Exception):
    """Base exception for all connectorgen errors.

    Example:
        try:
            connector = generate(template, connector_input)
        except ConnectorGenError as e:
            print(f"Generation failed: {e}")
    """

    pass


class ConfigurationError(ConnectorGenError):
    """Connector input or configuration file errors.

    Raised when:
    - The connector input has no `specification` configured property
    - A connector template/input file is missing or malformed
    - An environment variable referenced as ${VAR_NAME} is not set

    Examples:
        - "Configured properties of the given connector do not include `specification` property"
        - "Environment variable PETSTORE_HOST not set"
    """

    pass


class SpecificationParseError(ConnectorGenError):
    """The specification text is not a Swagger 2.0 document.

    Examples:
        - "Invalid specification syntax: mapping values are not allowed here"
        - "Unsupported specification version: 3.0.0. Only Swagger 2.0 is supported."
    """

    pass


class SchemaReferenceError(ConnectorGenError):
    """A schema cannot be turned into a data shape.

    Raised when a schema is neither a named reference nor an array of one
    where a reference is required, or when a reference cannot be resolved
    within the document.

    Examples:
        - "Only references to schemas are supported"
        - "Unable to resolve reference #/definitions/Missing"
    """

    pass


class UnsupportedParameterError(ConnectorGenError):
    """A parameter is neither body, reference nor a typed serializable one.

    Examples:
        - "Unexpected parameter type received, neither ref, body nor serializable: {...}"
        - "Given parameter is of unknown type/format: object/None"
    """

    pass


class SerializationError(ConnectorGenError):
    """A schema fragment or the whole document cannot be written as JSON."""

    pass
