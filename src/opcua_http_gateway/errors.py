"""
Gateway Errors
==============

Exception types raised by the gateway.

Startup-phase errors (connection, discovery, resolution) are fatal: the HTTP
listener is never started. Request-phase errors are mapped to HTTP status codes
by the request handlers and never escape them.

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""


class GatewayError(Exception):
    """Base class for all gateway errors."""


class ConnectionFailure(GatewayError):
    """Could not connect to the OPC UA server or create a session."""


class DiscoveryFailure(GatewayError):
    """A browse call failed while walking the address space."""


class ResolutionFailure(GatewayError):
    """A data type query failed while building the type index."""


class UnknownVariable(GatewayError, KeyError):
    """Requested node id is not in the variable index (HTTP 404)."""


class ReadFailure(GatewayError):
    """Reading a variable value failed at request time (HTTP 500)."""


class WriteRejected(GatewayError):
    """The server answered a write with a non-good status (HTTP 400)."""

    def __init__(self, node_id: str, status):
        self.node_id = node_id
        self.status = status
        super().__init__(f"Write to {node_id} rejected: {status.name}")

    @property
    def description(self) -> str:
        return self.status.name
