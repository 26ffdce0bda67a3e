"""
Gateway HTTP Server
===================

Startup and shutdown sequencing for the gateway.

Lifecycle:
    INITIALIZING -> connect, discover variables, resolve types
    SERVING      -> indexes frozen, HTTP listener accepting requests
    STOPPED      -> listener closed, OPC UA session closed

The HTTP listener is only started once the indexes are complete, and every
exit path releases the listener first, then the OPC UA session.

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from aiohttp import web

from ..opcua.address_space import ROOT_NODE_ID
from ..opcua.session import OpcUaSession, SessionConfig
from .gateway import Gateway

logger = logging.getLogger(__name__)


class GatewayState(Enum):
    INITIALIZING = "initializing"
    SERVING = "serving"
    STOPPED = "stopped"


@dataclass
class GatewayServerConfig:
    """Configuration for the HTTP side of the gateway."""

    host: str = "0.0.0.0"
    port: int = 3001

    # Address space root for discovery (RootFolder)
    root_node_id: str = ROOT_NODE_ID

    # Static files (None disables)
    static_dir: Optional[str] = "files"
    static_prefix: str = "/static"


class GatewayServer:
    """
    Runs one gateway: one OPC UA session, one HTTP listener.
    """

    def __init__(
        self,
        session_config: Optional[SessionConfig] = None,
        config: Optional[GatewayServerConfig] = None,
        session: Optional[OpcUaSession] = None,
    ):
        self.config = config or GatewayServerConfig()
        self.session = session or OpcUaSession(session_config)
        self.state = GatewayState.INITIALIZING
        self.gateway: Optional[Gateway] = None

        self._runner: Optional[web.AppRunner] = None
        self._stop_event = asyncio.Event()

    def request_stop(self):
        """Ask a running server to shut down (safe from signal handlers)."""
        self._stop_event.set()

    async def run(self):
        """
        Serve until ``request_stop()`` is called.

        Raises:
            ConnectionFailure, DiscoveryFailure, ResolutionFailure: Startup
                failed; no HTTP listener was started
        """
        try:
            async with self.session:
                self.gateway = await Gateway.build(self.session, self.config.root_node_id)
                try:
                    await self._start_http()
                    await self._stop_event.wait()
                finally:
                    await self._stop_http()
        finally:
            self.state = GatewayState.STOPPED
            logger.info("Gateway stopped")

    async def _start_http(self):
        app = self.gateway.create_app(
            static_dir=self.config.static_dir,
            static_prefix=self.config.static_prefix,
        )
        self._runner = web.AppRunner(app)
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await site.start()

        self.state = GatewayState.SERVING
        logger.info(f"waiting for HTTP requests on port {self.config.port}...")

    async def _stop_http(self):
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("HTTP listener closed")

    @property
    def is_serving(self) -> bool:
        return self.state == GatewayState.SERVING
