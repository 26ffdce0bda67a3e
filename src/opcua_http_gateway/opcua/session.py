"""
OPC UA Client Session
=====================

Thin async wrapper around an asyncua client exposing only the operations the
gateway needs: browse, data type query, value read and typed value write.

The session is an async context manager: connecting on enter, closing the
session and releasing the connection on exit, in that order.

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from asyncua import Client, ua

from ..errors import ConnectionFailure

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_URL = "opc.tcp://opcuademo.sterfive.com:26543"


@dataclass
class SessionConfig:
    """Configuration for the OPC UA client session."""

    endpoint_url: str = DEFAULT_ENDPOINT_URL
    application_name: str = "MyClient"

    # Connection strategy (initial connect only)
    max_retry: int = 1
    initial_delay: float = 1.0

    # Per-request timeout [seconds]
    timeout: float = 4.0


class OpcUaSession:
    """
    Single OPC UA session shared by every request handler.

    No locking is done here: asyncua pairs requests and responses on the
    secure channel, so concurrent awaits on one session are safe.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        client_factory: Callable[..., Any] = Client,
    ):
        self.config = config or SessionConfig()
        self._client_factory = client_factory
        self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def __aenter__(self) -> "OpcUaSession":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def connect(self):
        """
        Connect and create a session (security mode None).

        Retries up to ``max_retry`` extra times, waiting ``initial_delay``
        seconds between attempts.

        Raises:
            ConnectionFailure: If every attempt failed
        """
        attempts = 1 + max(0, self.config.max_retry)
        last_error: Optional[BaseException] = None

        for attempt in range(1, attempts + 1):
            client = self._client_factory(
                url=self.config.endpoint_url, timeout=self.config.timeout
            )
            client.name = self.config.application_name

            try:
                await client.connect()
            except (OSError, asyncio.TimeoutError, ua.UaError) as e:
                last_error = e
                logger.warning(
                    f"Connection attempt {attempt}/{attempts} to "
                    f"{self.config.endpoint_url} failed: {type(e).__name__}: {e}"
                )
                if attempt < attempts:
                    await asyncio.sleep(self.config.initial_delay)
                continue

            self._client = client
            logger.info(f"connected to OPC UA server at {self.config.endpoint_url}")
            return

        raise ConnectionFailure(
            f"Could not connect to {self.config.endpoint_url} "
            f"after {attempts} attempt(s)"
        ) from last_error

    async def close(self):
        """Close the session, then release the connection."""
        if self._client is None:
            return

        client, self._client = self._client, None
        # asyncua closes the session before tearing down the secure channel
        try:
            await client.disconnect()
        except (OSError, asyncio.TimeoutError, ua.UaError) as e:
            logger.warning(f"OPC UA session close failed: {type(e).__name__}: {e}")
            return
        logger.info("OPC UA session closed")

    def _node(self, node_id: str):
        if self._client is None:
            raise RuntimeError("OPC UA session is not connected")
        return self._client.get_node(node_id)

    async def browse(self, node_id: str) -> List[Tuple[str, ua.NodeClass]]:
        """Return (child id, child node class) for each hierarchical child."""
        refs = await self._node(node_id).get_children_descriptions()
        return [(ref.NodeId.to_string(), ref.NodeClass) for ref in refs]

    async def get_builtin_data_type(self, node_id: str) -> ua.VariantType:
        """Return the built-in data type of a variable's value."""
        return await self._node(node_id).read_data_type_as_variant_type()

    async def read_variable_value(self, node_id: str) -> Any:
        return await self._node(node_id).read_value()

    async def write(self, node_id: str, data_type: str, value: Any) -> ua.StatusCode:
        """
        Write a typed value to the Value attribute.

        Args:
            node_id: Variable node id
            data_type: Canonical type name (a ``ua.VariantType`` member name)
            value: Already coerced value

        Returns:
            The status code reported by the server (not checked here)
        """
        variant_type = ua.VariantType[data_type]
        if variant_type == ua.VariantType.LocalizedText and not isinstance(
            value, ua.LocalizedText
        ):
            value = ua.LocalizedText(Text=value)

        attr = ua.WriteValue()
        attr.NodeId = ua.NodeId.from_string(node_id)
        attr.AttributeId = ua.AttributeIds.Value
        attr.Value = ua.DataValue(ua.Variant(value, variant_type))

        params = ua.WriteParameters()
        params.NodesToWrite = [attr]

        if self._client is None:
            raise RuntimeError("OPC UA session is not connected")
        results = await self._client.uaclient.write(params)
        return results[0]
