"""
Test configuration and fixtures for the OPC UA HTTP gateway tests.
"""
from typing import Any, Dict, List, Tuple

import pytest
from asyncua import ua

from opcua_http_gateway.gateway import Gateway
from opcua_http_gateway.opcua.datatypes import descriptor_for

ROOT = "i=84"


class FakeSession:
    """In-memory address space mirroring the OpcUaSession operations."""

    def __init__(
        self,
        children: Dict[str, List[Tuple[str, ua.NodeClass]]],
        data_types: Dict[str, ua.VariantType] = None,
        values: Dict[str, Any] = None,
    ):
        self.children = children
        self.data_types = data_types or {}
        self.values = values or {}
        self.write_status = ua.StatusCode(ua.StatusCodes.Good)
        self.read_error = None
        self.browse_errors = {}

        self.browsed: List[str] = []
        self.type_queries: List[str] = []
        self.writes: List[Tuple[str, str, Any]] = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True

    async def browse(self, node_id):
        self.browsed.append(node_id)
        if node_id in self.browse_errors:
            raise self.browse_errors[node_id]
        return list(self.children.get(node_id, []))

    async def get_builtin_data_type(self, node_id):
        self.type_queries.append(node_id)
        return self.data_types[node_id]

    async def read_variable_value(self, node_id):
        if self.read_error is not None:
            raise self.read_error
        return self.values[node_id]

    async def write(self, node_id, data_type, value):
        self.writes.append((node_id, data_type, value))
        return self.write_status


OBJ = ua.NodeClass.Object
VAR = ua.NodeClass.Variable


@pytest.fixture
def plant_session() -> FakeSession:
    """
    Address space with a diamond (ns=1;i=10 reachable twice), a method and a
    type definition that must be skipped.

        Root
        ├── Objects (ns=0;i=85)
        │   ├── Line1 (ns=1;s=Line1)
        │   │   ├── Speed    ns=1;i=1  Int32
        │   │   ├── Running  ns=1;i=2  Boolean
        │   │   └── Shared   ns=1;s=Shared (object)
        │   ├── Line2 (ns=1;s=Line2)
        │   │   ├── Label    ns=1;i=3  String
        │   │   ├── Reset    ns=1;i=50 Method
        │   │   └── Shared   ns=1;s=Shared (object)
        └── Types (ns=0;i=86) ObjectType
                 Shared:
                   └── Level ns=1;i=10 Double
    """
    children = {
        ROOT: [("i=85", OBJ), ("i=86", ua.NodeClass.ObjectType)],
        "i=85": [("ns=1;s=Line1", OBJ), ("ns=1;s=Line2", OBJ)],
        "ns=1;s=Line1": [
            ("ns=1;i=1", VAR),
            ("ns=1;i=2", VAR),
            ("ns=1;s=Shared", OBJ),
        ],
        "ns=1;s=Line2": [
            ("ns=1;i=3", VAR),
            ("ns=1;i=50", ua.NodeClass.Method),
            ("ns=1;s=Shared", OBJ),
        ],
        "ns=1;s=Shared": [("ns=1;i=10", VAR)],
        "i=86": [("ns=1;i=99", VAR)],
    }
    data_types = {
        "ns=1;i=1": ua.VariantType.Int32,
        "ns=1;i=2": ua.VariantType.Boolean,
        "ns=1;i=3": ua.VariantType.String,
        "ns=1;i=10": ua.VariantType.Double,
    }
    values = {
        "ns=1;i=1": 1200,
        "ns=1;i=2": True,
        "ns=1;i=3": "Filling",
        "ns=1;i=10": 3.5,
    }
    return FakeSession(children, data_types, values)


@pytest.fixture
def simple_session() -> FakeSession:
    """Two integer variables directly under the root."""
    children = {ROOT: [("ns=1;i=1", VAR), ("ns=1;i=2", VAR)]}
    data_types = {
        "ns=1;i=1": ua.VariantType.Int32,
        "ns=1;i=2": ua.VariantType.Int32,
    }
    values = {"ns=1;i=1": 42, "ns=1;i=2": -7}
    return FakeSession(children, data_types, values)


@pytest.fixture
def gateway(simple_session) -> Gateway:
    types = {
        node_id: descriptor_for(simple_session.data_types[node_id])
        for node_id in ("ns=1;i=1", "ns=1;i=2")
    }
    return Gateway(simple_session, ("ns=1;i=1", "ns=1;i=2"), types)


@pytest.fixture
async def client(aiohttp_client, gateway):
    return await aiohttp_client(gateway.create_app())
