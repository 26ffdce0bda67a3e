"""
HTTP Gateway
============

Exposes every discovered OPC UA variable over HTTP:

    GET /        -> 200, JSON array of variable node ids
    GET /{id}    -> 200, JSON value | 404 | 500 + error detail
    PUT /{id}    -> 204 | 404 | 400 + status name | 500 + error detail

The variable index and the type index are built once before the gateway is
created and never change afterwards.

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

import base64
import dataclasses
import functools
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple

from aiohttp import web
from asyncua import ua

from ..errors import ReadFailure, UnknownVariable, WriteRejected
from ..opcua.address_space import ROOT_NODE_ID, discover_variables
from ..opcua.datatypes import TypeDescriptor, resolve_types

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    """Render OPC UA values that json cannot serialize natively."""
    if isinstance(value, ua.LocalizedText):
        return value.Text
    if isinstance(value, (ua.NodeId, ua.QualifiedName)):
        return value.to_string()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return str(value)


dumps = functools.partial(json.dumps, separators=(",", ":"), default=_json_default)


def _error_body(e: BaseException) -> dict:
    cause = e.__cause__ or e
    # asyncua timeouts carry no message
    detail = str(cause) or f"{type(cause).__name__} from OPC UA server"
    return {"error": type(cause).__name__, "detail": detail}


class Gateway:
    """
    Read/write access to a fixed set of OPC UA variables.

    Owns the variable index (discovery order) and the type index for the life
    of the process. Both are read-only, so handlers read them without locking.
    """

    def __init__(
        self,
        session,
        variables: Sequence[str],
        types: Mapping[str, TypeDescriptor],
    ):
        missing = [node_id for node_id in variables if node_id not in types]
        if missing or len(types) != len(variables):
            raise ValueError("Type index must cover the variable index exactly")

        self.session = session
        self._variables: Tuple[str, ...] = tuple(variables)
        self._types = types

    @classmethod
    async def build(cls, session, root_id: str = ROOT_NODE_ID) -> "Gateway":
        """Discover variables under ``root_id``, resolve their types, freeze both."""
        variables = await discover_variables(session, root_id)
        types = await resolve_types(session, variables)
        return cls(session, variables, types)

    @property
    def variables(self) -> Tuple[str, ...]:
        return self._variables

    @property
    def types(self) -> Mapping[str, TypeDescriptor]:
        return self._types

    def type_of(self, node_id: str) -> TypeDescriptor:
        try:
            return self._types[node_id]
        except KeyError:
            raise UnknownVariable(node_id) from None

    async def read_variable(self, node_id: str) -> Any:
        """
        Read the current value of an indexed variable.

        Raises:
            UnknownVariable: If ``node_id`` is not indexed
            ReadFailure: If the session read fails
        """
        self.type_of(node_id)
        try:
            return await self.session.read_variable_value(node_id)
        except Exception as e:
            raise ReadFailure(f"Read of {node_id} failed: {e}") from e

    async def write_variable(self, node_id: str, raw: Any):
        """
        Coerce ``raw`` with the variable's descriptor and write it.

        Raises:
            UnknownVariable: If ``node_id`` is not indexed
            WriteRejected: If the server answers with a non-good status
        """
        descriptor = self.type_of(node_id)
        value = descriptor.coerce(raw)

        status = await self.session.write(node_id, descriptor.name, value)
        if not status.is_good():
            raise WriteRejected(node_id, status)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def create_app(
        self,
        static_dir: Optional[str] = None,
        static_prefix: str = "/static",
    ) -> web.Application:
        """Create the aiohttp application serving this gateway."""
        app = web.Application()

        if static_dir is not None:
            if Path(static_dir).is_dir():
                app.router.add_static(static_prefix, static_dir)
                logger.info(f"Serving static files from {static_dir} under {static_prefix}")
            else:
                logger.warning(f"Static directory {static_dir} not found, not serving it")

        app.router.add_get("/", self.handle_list)
        app.router.add_get("/{node_id:.+}", self.handle_read)
        app.router.add_put("/{node_id:.+}", self.handle_write)
        return app

    async def handle_list(self, request: web.Request) -> web.Response:
        logger.info(">> GET /")

        response = web.json_response(list(self._variables), dumps=dumps)

        logger.info(f"<< [{', '.join(self._variables[:2])}, ...]")
        return response

    async def handle_read(self, request: web.Request) -> web.Response:
        node_id = request.match_info["node_id"]
        logger.info(f">> GET /{node_id}")

        try:
            value = await self.read_variable(node_id)
        except UnknownVariable:
            logger.info("<< Not Found")
            return web.Response(status=404)
        except ReadFailure as e:
            logger.warning(f"<< Internal Server Error [{e.__cause__!r}]")
            return web.json_response(_error_body(e), status=500, dumps=dumps)

        logger.info(f"<< OK [{value}]")
        return web.json_response(value, dumps=dumps)

    async def handle_write(self, request: web.Request) -> web.Response:
        node_id = request.match_info["node_id"]
        raw = await self._read_body(request)
        logger.info(f">> PUT /{node_id} [{raw}]")

        try:
            await self.write_variable(node_id, raw)
        except UnknownVariable:
            logger.info("<< Not Found")
            return web.Response(status=404)
        except WriteRejected as e:
            logger.info(f"<< Bad Request [{e.description}]")
            return web.Response(status=400, text=e.description)
        except Exception as e:
            logger.warning(f"<< Internal Server Error [{e!r}]")
            return web.json_response(_error_body(e), status=500, dumps=dumps)

        logger.info("<< No Content")
        return web.Response(status=204)

    @staticmethod
    async def _read_body(request: web.Request) -> Any:
        """Any JSON value; invalid JSON is taken as text, empty body as None."""
        text = await request.text()
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
