"""
OPC UA HTTP Gateway
===================

Exposes the variables of an OPC UA server over plain HTTP GET/PUT.

Packages:
- opcua: client session, address space discovery, data type resolution
- gateway: HTTP handlers and server lifecycle

Architecture:

┌─────────────────┐
│  HTTP clients   │  curl, dashboards, scripts
└────────┬────────┘
         │ HTTP (JSON)
┌────────▼────────┐
│    Gateway      │  Variable + type indexes (this package)
└────────┬────────┘
         │ OPC UA (opc.tcp)
┌────────▼────────┐
│  OPC UA server  │  PLC / device address space
└─────────────────┘

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Guilherme F. G. Santos"

from .errors import (
    GatewayError,
    ConnectionFailure,
    DiscoveryFailure,
    ResolutionFailure,
    UnknownVariable,
    ReadFailure,
    WriteRejected,
)

from .opcua import OpcUaSession, SessionConfig, discover_variables, resolve_types

from .gateway import Gateway, GatewayServer, GatewayServerConfig, GatewayState

__all__ = [
    # Errors
    "GatewayError",
    "ConnectionFailure",
    "DiscoveryFailure",
    "ResolutionFailure",
    "UnknownVariable",
    "ReadFailure",
    "WriteRejected",
    # OPC UA
    "OpcUaSession",
    "SessionConfig",
    "discover_variables",
    "resolve_types",
    # HTTP
    "Gateway",
    "GatewayServer",
    "GatewayServerConfig",
    "GatewayState",
]
