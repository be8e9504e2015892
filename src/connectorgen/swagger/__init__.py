"""Swagger 2.0 connector generation.

This package parses Swagger documents, resolves their schemas into data
shapes and assembles connector actions from their operations.
"""

from .actions import build_action
from .generator import configure_connector, generate
from .identity import assign_operation_ids
from .parameters import map_parameter
from .parser import SwaggerDocument, parse
from .schemas import resolve_request_shape, resolve_response_shape

__all__ = [
    "generate",
    "configure_connector",
    "parse",
    "SwaggerDocument",
    "assign_operation_ids",
    "map_parameter",
    "build_action",
    "resolve_request_shape",
    "resolve_response_shape",
]
