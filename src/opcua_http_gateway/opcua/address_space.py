"""
OPC UA Address Space Discovery
==============================

Walks the node hierarchy from a root node and collects every variable.

This module contains ONLY the traversal - it does not:
- Read or write values
- Resolve data types
- Know about HTTP

Traversal rules:
- Object nodes are containers: browsed recursively
- Variable nodes are leaves: collected
- Every other node class (methods, types, views...) is skipped

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

import logging
from typing import List, Set, Tuple

from asyncua import ua

from ..errors import DiscoveryFailure

logger = logging.getLogger(__name__)

# RootFolder
ROOT_NODE_ID = "i=84"

CONTAINER_CLASS = ua.NodeClass.Object
VARIABLE_CLASS = ua.NodeClass.Variable


async def discover_variables(session, root_id: str = ROOT_NODE_ID) -> Tuple[str, ...]:
    """
    Recursively browse from ``root_id`` and return all variable node ids.

    Ids are returned in depth-first discovery order, each exactly once even
    when reachable through several containers. Each container is browsed at
    most once, so cyclic hierarchies terminate.

    Args:
        session: Object exposing ``async browse(node_id)``
        root_id: Node id to start from

    Returns:
        Tuple of variable node ids

    Raises:
        DiscoveryFailure: If any browse call fails (no partial result)
    """
    variables: List[str] = []
    seen_variables: Set[str] = set()
    visited: Set[str] = {root_id}

    await _walk(session, root_id, variables, seen_variables, visited)

    logger.info(f"found {len(variables)} OPC UA variables")
    return tuple(variables)


async def _walk(session, node_id, variables, seen_variables, visited):
    try:
        children = await session.browse(node_id)
    except Exception as e:
        raise DiscoveryFailure(
            f"Browse of {node_id} failed: {type(e).__name__}: {e}"
        ) from e

    for child_id, node_class in children:
        if node_class == CONTAINER_CLASS:
            if child_id in visited:
                continue
            visited.add(child_id)
            await _walk(session, child_id, variables, seen_variables, visited)

        elif node_class == VARIABLE_CLASS:
            if child_id not in seen_variables:
                seen_variables.add(child_id)
                variables.append(child_id)
