"""
OPC UA Data Type Resolution
===========================

Maps the built-in data type of each variable to a canonical type name and a
coercion rule applied to inbound HTTP write values.

This module handles ONLY data type mapping:
- OPC UA built-in types -> canonical type names
- JSON-ish inbound values -> Python values of the right kind

Coercion is best-effort conversion, not validation: the server is the one
rejecting a value it cannot accept.

Author: Guilherme F. G. Santos
Date: February 2026
License: MIT
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Union

from asyncua import ua

from ..errors import ResolutionFailure

logger = logging.getLogger(__name__)

# Canonical name used for any type missing from the table below
DEFAULT_TYPE_NAME = "String"

Number = Union[int, float]


class ValueCoercer:
    """
    Best-effort converters from inbound values to typed Python values.

    None of these raise for bool, int, float, str or None inputs.
    """

    @staticmethod
    def to_boolean(value: Any) -> bool:
        """Truthiness: ``"true"`` and ``"false"`` are both non-empty, hence True."""
        return bool(value)

    @staticmethod
    def to_number(value: Any) -> Number:
        """
        Convert to int or float.

        Numeric strings are parsed (``"42"`` -> 42, ``"2.5"`` -> 2.5), empty
        strings and None give 0, anything unparseable gives NaN.
        """
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        if value is None:
            return 0
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return 0
            try:
                return int(text)
            except ValueError:
                pass
            try:
                return float(text)
            except ValueError:
                return math.nan
        return math.nan

    @staticmethod
    def to_integer(value: Any) -> int:
        """Numeric coercion truncated toward zero; NaN and infinities give 0."""
        number = ValueCoercer.to_number(value)
        if isinstance(number, float):
            if not math.isfinite(number):
                return 0
            return int(number)
        return number

    @staticmethod
    def to_float(value: Any) -> float:
        return float(ValueCoercer.to_number(value))

    @staticmethod
    def to_text(value: Any) -> str:
        """Spell booleans, null and integral floats the way JSON does."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    @staticmethod
    def passthrough(value: Any) -> Any:
        return value


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Resolved type of a single variable.

    Attributes:
        name: Canonical type name, also the ``ua.VariantType`` used on write
        coerce: Converts a raw inbound value for this variable
    """

    name: str
    coerce: Callable[[Any], Any]


# One entry per native type tag
TYPE_TABLE: Dict[ua.VariantType, TypeDescriptor] = {
    ua.VariantType.Boolean: TypeDescriptor("Boolean", ValueCoercer.to_boolean),
    ua.VariantType.Byte: TypeDescriptor("Byte", ValueCoercer.to_integer),
    ua.VariantType.SByte: TypeDescriptor("SByte", ValueCoercer.to_integer),
    ua.VariantType.Int16: TypeDescriptor("Int16", ValueCoercer.to_integer),
    ua.VariantType.UInt16: TypeDescriptor("UInt16", ValueCoercer.to_integer),
    ua.VariantType.Int32: TypeDescriptor("Int32", ValueCoercer.to_integer),
    ua.VariantType.UInt32: TypeDescriptor("UInt32", ValueCoercer.to_integer),
    ua.VariantType.Float: TypeDescriptor("Float", ValueCoercer.to_float),
    ua.VariantType.Double: TypeDescriptor("Double", ValueCoercer.to_float),
    ua.VariantType.String: TypeDescriptor("String", ValueCoercer.to_text),
    ua.VariantType.LocalizedText: TypeDescriptor("LocalizedText", ValueCoercer.to_text),
}

FALLBACK_DESCRIPTOR = TypeDescriptor(DEFAULT_TYPE_NAME, ValueCoercer.passthrough)


def descriptor_for(data_type: ua.VariantType) -> TypeDescriptor:
    """Total mapping: unmapped types fall back to String with passthrough."""
    return TYPE_TABLE.get(data_type, FALLBACK_DESCRIPTOR)


async def resolve_type(session, node_id: str) -> TypeDescriptor:
    """
    Query the built-in data type of one variable and return its descriptor.

    Raises:
        ResolutionFailure: If the data type query fails
    """
    try:
        data_type = await session.get_builtin_data_type(node_id)
    except Exception as e:
        raise ResolutionFailure(
            f"Data type query for {node_id} failed: {type(e).__name__}: {e}"
        ) from e

    descriptor = descriptor_for(data_type)
    if descriptor is FALLBACK_DESCRIPTOR:
        logger.debug(f"{node_id}: unmapped data type {data_type!r}, using {DEFAULT_TYPE_NAME}")
    return descriptor


async def resolve_types(session, variables: Iterable[str]) -> Mapping[str, TypeDescriptor]:
    """
    Build the read-only type index, one sequential query per variable.

    Raises:
        ResolutionFailure: On the first failed query (no partial index)
    """
    types: Dict[str, TypeDescriptor] = {}
    for node_id in variables:
        types[node_id] = await resolve_type(session, node_id)

    logger.info("built type index for all variables")
    return MappingProxyType(types)
