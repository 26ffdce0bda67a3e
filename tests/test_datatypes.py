"""
Unit tests for data type resolution and write coercion.
"""
import math

import pytest
from asyncua import ua

from opcua_http_gateway.errors import ResolutionFailure
from opcua_http_gateway.opcua.address_space import discover_variables
from opcua_http_gateway.opcua.datatypes import (
    DEFAULT_TYPE_NAME,
    ValueCoercer,
    descriptor_for,
    resolve_type,
    resolve_types,
)

from conftest import ROOT


@pytest.mark.parametrize(
    "data_type, name",
    [
        (ua.VariantType.Boolean, "Boolean"),
        (ua.VariantType.Byte, "Byte"),
        (ua.VariantType.SByte, "SByte"),
        (ua.VariantType.Int16, "Int16"),
        (ua.VariantType.UInt16, "UInt16"),
        (ua.VariantType.Int32, "Int32"),
        (ua.VariantType.UInt32, "UInt32"),
        (ua.VariantType.Float, "Float"),
        (ua.VariantType.Double, "Double"),
        (ua.VariantType.String, "String"),
        (ua.VariantType.LocalizedText, "LocalizedText"),
    ],
)
def test_canonical_names(data_type, name):
    assert descriptor_for(data_type).name == name


@pytest.mark.parametrize(
    "data_type",
    [ua.VariantType.DateTime, ua.VariantType.Int64, ua.VariantType.ByteString],
)
def test_unmapped_types_default_to_string_passthrough(data_type):
    descriptor = descriptor_for(data_type)
    assert descriptor.name == DEFAULT_TYPE_NAME
    marker = object()
    assert descriptor.coerce(marker) is marker


def test_boolean_coercion():
    coerce = descriptor_for(ua.VariantType.Boolean).coerce
    assert coerce("true") is True
    assert coerce(1) is True
    assert coerce(0) is False
    assert coerce("") is False
    assert coerce(None) is False


def test_integer_coercion():
    coerce = descriptor_for(ua.VariantType.Int32).coerce
    assert coerce("42") == 42
    assert isinstance(coerce("42"), int)
    assert coerce(123) == 123
    assert coerce(" -8 ") == -8
    assert coerce("12.9") == 12
    assert coerce(True) == 1
    assert coerce(None) == 0
    assert coerce("not a number") == 0


def test_float_coercion():
    coerce = descriptor_for(ua.VariantType.Double).coerce
    assert coerce("2.5") == 2.5
    assert coerce(3) == 3.0
    assert isinstance(coerce(3), float)
    assert math.isnan(coerce("abc"))


def test_text_coercion():
    assert descriptor_for(ua.VariantType.String).coerce(7) == "7"
    assert descriptor_for(ua.VariantType.LocalizedText).coerce(2.5) == "2.5"


@pytest.mark.parametrize("raw", [True, False, 0, -3, 1.5, "", "x", "1e3", None])
def test_coercers_never_raise_for_primitives(raw):
    for coerce in (
        ValueCoercer.to_boolean,
        ValueCoercer.to_integer,
        ValueCoercer.to_float,
        ValueCoercer.to_text,
        ValueCoercer.passthrough,
    ):
        coerce(raw)


def test_number_parses_exponent_strings():
    assert ValueCoercer.to_number("1e3") == 1000.0
    assert ValueCoercer.to_integer("1e3") == 1000


async def test_resolve_type_queries_session(plant_session):
    descriptor = await resolve_type(plant_session, "ns=1;i=2")
    assert descriptor.name == "Boolean"
    assert plant_session.type_queries == ["ns=1;i=2"]


async def test_type_index_covers_variable_index(plant_session):
    variables = await discover_variables(plant_session, ROOT)
    types = await resolve_types(plant_session, variables)

    assert set(types) == set(variables)
    assert plant_session.type_queries == list(variables)
    assert types["ns=1;i=1"].name == "Int32"
    assert types["ns=1;i=10"].name == "Double"


async def test_type_index_is_read_only(plant_session):
    types = await resolve_types(plant_session, ["ns=1;i=1"])
    with pytest.raises(TypeError):
        types["ns=1;i=2"] = descriptor_for(ua.VariantType.Boolean)


async def test_resolution_failure_aborts(plant_session):
    with pytest.raises(ResolutionFailure):
        await resolve_types(plant_session, ["ns=1;i=1", "ns=1;i=404"])


def test_text_coercion_spells_json_literals():
    coerce = descriptor_for(ua.VariantType.String).coerce
    assert coerce(True) == "true"
    assert coerce(False) == "false"
    assert coerce(None) == "null"
    assert coerce(1.0) == "1"
    assert coerce(1.5) == "1.5"
