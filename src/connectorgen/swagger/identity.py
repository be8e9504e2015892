"""Synthetic operation identifiers.

Operations without an `operationId` get `operation-<n>`, numbered from 0
in traversal order across the whole document. The counter lives only in
one call.
"""

from typing import Iterable

from ..core.logging import get_logger
from .parser import Operation

logger = get_logger(__name__)

OPERATION_ID_PREFIX = "operation-"


def assign_operation_ids(operations: Iterable[tuple[str, str, Operation]]) -> bool:
    """Give every operation lacking an id a synthetic one, in place.

    Args:
        operations: (path, method, operation) triples in declaration order

    Returns:
        True if at least one id was assigned (the document changed)
    """
    counter = 0
    for path, method, operation in operations:
        if operation.operation_id is None:
            operation.operation_id = f"{OPERATION_ID_PREFIX}{counter}"
            logger.debug(f"Assigned {operation.operation_id} to {method.upper()} {path}")
            counter += 1

    return counter > 0
