"""
HTTP Gateway Package
====================

HTTP side of the gateway.

Components:
- gateway.py: variable/type indexes and the GET/PUT handlers
- server.py: startup sequencing and HTTP listener lifecycle

Dependencies:
- aiohttp: async HTTP server
  Install: pip install aiohttp

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

from .gateway import Gateway

from .server import GatewayServer, GatewayServerConfig, GatewayState

__all__ = [
    "Gateway",
    "GatewayServer",
    "GatewayServerConfig",
    "GatewayState",
]
