"""
OPC UA Interface Package
========================

OPC UA client side of the gateway.

This package provides:
- A single client session (connect, browse, read, write, close)
- Address space discovery (all variables under a root node)
- Data type resolution (canonical type name + write coercion)

It does NOT:
- Subscribe to value changes
- Handle security policies or certificates
- Know about HTTP

Components:
- session.py: asyncua client session wrapper
- address_space.py: recursive variable discovery
- datatypes.py: built-in type -> canonical name and coercion

Dependencies:
- asyncua: Python OPC UA library
  Install: pip install asyncua

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

from .session import OpcUaSession, SessionConfig, DEFAULT_ENDPOINT_URL

from .address_space import discover_variables, ROOT_NODE_ID

from .datatypes import (
    TypeDescriptor,
    ValueCoercer,
    descriptor_for,
    resolve_type,
    resolve_types,
)

__all__ = [
    # Session
    "OpcUaSession",
    "SessionConfig",
    "DEFAULT_ENDPOINT_URL",
    # Discovery
    "discover_variables",
    "ROOT_NODE_ID",
    # Data types
    "TypeDescriptor",
    "ValueCoercer",
    "descriptor_for",
    "resolve_type",
    "resolve_types",
]
