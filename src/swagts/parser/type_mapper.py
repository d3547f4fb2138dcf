"""Map Swagger 2.0 schema fragments to IR type nodes.

Schema objects are dispatched on *shape* -- which keys are present -- rather
than on an explicit tag. :func:`classify_schema` turns that implicit dispatch
into an explicit :class:`SchemaShape` before any mapping runs, and
:func:`map_schema` then builds exactly one :data:`~swagts.models.TypeNode`
per shape:

=============  ==================================================
Shape          Result
=============  ==================================================
``REF``        :class:`~swagts.models.ReferenceType` (never expanded)
``ALL_OF``     merged :class:`~swagts.models.ObjectType`
``ENUM``       :class:`~swagts.models.PrimitiveType` with literals
``ARRAY``      :class:`~swagts.models.ArrayType`
``OBJECT``     :class:`~swagts.models.ObjectType`
``PRIMITIVE``  :class:`~swagts.models.PrimitiveType`
``EMPTY``      :class:`~swagts.models.EmptyType`
=============  ==================================================

A ``$ref`` is never dereferenced here. That is what keeps mapping finite on
self-referential definitions (a ``Node`` whose ``children`` are ``Node``
items): the referenced schema is only descended into when the definition
itself is mapped.
"""

from __future__ import annotations

import enum
from typing import Any

from swagts.models import (
    ArrayType,
    EmptyType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TypeNode,
)

_DEFINITIONS_PREFIX = "#/definitions/"

_PRIMITIVE_TYPES: dict[str, PrimitiveKind] = {
    "string": PrimitiveKind.STRING,
    "number": PrimitiveKind.NUMBER,
    "integer": PrimitiveKind.NUMBER,
    "boolean": PrimitiveKind.BOOLEAN,
    "file": PrimitiveKind.ANY,
    "null": PrimitiveKind.ANY,
}


class SchemaShape(str, enum.Enum):
    """The recognised shapes of a Swagger 2.0 schema fragment."""

    REF = "ref"
    ALL_OF = "allOf"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"
    PRIMITIVE = "primitive"
    EMPTY = "empty"


def classify_schema(schema: Any) -> SchemaShape:
    """Return the single shape *schema* is mapped as.

    Shapes are checked in precedence order ``$ref``, ``allOf``, ``enum``,
    array, object, primitive. Anything else -- including non-dict input --
    is :attr:`SchemaShape.EMPTY`.

    Args:
        schema: A schema object, a non-body parameter object, or any other
            value found where a schema was expected.

    Returns:
        The :class:`SchemaShape` that :func:`map_schema` will build.
    """
    if not isinstance(schema, dict):
        return SchemaShape.EMPTY

    schema_type = schema.get("type")
    if not isinstance(schema_type, str):
        schema_type = None

    if isinstance(schema.get("$ref"), str):
        return SchemaShape.REF
    if isinstance(schema.get("allOf"), list):
        return SchemaShape.ALL_OF
    if isinstance(schema.get("enum"), list):
        return SchemaShape.ENUM
    if schema_type == "array" or "items" in schema:
        return SchemaShape.ARRAY
    if schema_type == "object" or "properties" in schema:
        return SchemaShape.OBJECT
    if schema_type in _PRIMITIVE_TYPES:
        return SchemaShape.PRIMITIVE
    return SchemaShape.EMPTY


def map_schema(schema: Any, required: bool = False) -> TypeNode:
    """Map a Swagger 2.0 schema fragment to an IR type node.

    Total and side-effect-free: every input produces a node and *schema*
    is never modified.

    Args:
        schema: The schema fragment. Non-body parameter objects are accepted
            as-is since they carry ``type``/``items``/``enum`` inline.
        required: Optionality supplied by the call site, stored on the
            returned node. Independent of the schema's own ``required``
            list, which only governs its properties.

    Returns:
        The mapped :data:`~swagts.models.TypeNode`.

    Example::

        >>> map_schema({"$ref": "#/definitions/Pet"})
        ReferenceType(required=False, kind='reference', name='Pet')
    """
    shape = classify_schema(schema)

    if shape is SchemaShape.REF:
        return ReferenceType(name=_ref_name(schema["$ref"]), required=required)
    if shape is SchemaShape.ALL_OF:
        return _map_all_of(schema["allOf"], required)
    if shape is SchemaShape.ENUM:
        return _map_enum(schema, required)
    if shape is SchemaShape.ARRAY:
        items = schema.get("items")
        return ArrayType(
            items=map_schema(items) if items is not None else EmptyType(),
            required=required,
        )
    if shape is SchemaShape.OBJECT:
        return _map_object(schema, required)
    if shape is SchemaShape.PRIMITIVE:
        return PrimitiveType(name=_PRIMITIVE_TYPES[schema["type"]], required=required)
    return EmptyType(required=required)


def _ref_name(ref: str) -> str:
    """Extract the definition name from a ``$ref`` pointer.

    ``#/definitions/Pet`` yields ``Pet``; any other pointer falls back to its
    last segment, with RFC 6901 escapes undone.
    """
    if ref.startswith(_DEFINITIONS_PREFIX):
        name = ref[len(_DEFINITIONS_PREFIX):]
    else:
        name = ref.rsplit("/", 1)[-1]
    return name.replace("~1", "/").replace("~0", "~")


def _map_object(schema: dict[str, Any], required: bool) -> ObjectType:
    """Map an object schema, honouring its ``required`` list per property."""
    required_list = schema.get("required")
    if not isinstance(required_list, list):
        required_list = []

    properties = schema.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    return ObjectType(
        properties={
            name: map_schema(prop, name in required_list)
            for name, prop in properties.items()
        },
        required=required,
    )


def _map_all_of(members: list[Any], required: bool) -> ObjectType:
    """Merge the members of an ``allOf`` into one object.

    Members mapping to an object contribute their properties; on a name
    collision the later member wins. Members mapping to a reference are
    recorded in ``bases``. Other members contribute nothing.
    """
    properties: dict[str, TypeNode] = {}
    bases: list[str] = []

    for member in members:
        node = map_schema(member)
        if isinstance(node, ObjectType):
            properties.update(node.properties)
            for base in node.bases:
                if base not in bases:
                    bases.append(base)
        elif isinstance(node, ReferenceType) and node.name not in bases:
            bases.append(node.name)

    return ObjectType(properties=properties, bases=bases, required=required)


def _map_enum(schema: dict[str, Any], required: bool) -> PrimitiveType:
    """Map an ``enum`` to a primitive restricted to its literal values.

    The primitive kind comes from ``type`` when present; otherwise it is
    inferred from the values (all strings, all numbers, all booleans),
    falling back to ``any`` for mixed sets.
    """
    literals = list(schema["enum"])
    schema_type = schema.get("type")
    kind = _PRIMITIVE_TYPES.get(schema_type) if isinstance(schema_type, str) else None
    if kind is None:
        kind = _infer_literal_kind(literals)
    return PrimitiveType(name=kind, literals=literals, required=required)


def _infer_literal_kind(literals: list[Any]) -> PrimitiveKind:
    if literals and all(isinstance(v, bool) for v in literals):
        return PrimitiveKind.BOOLEAN
    if literals and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in literals
    ):
        return PrimitiveKind.NUMBER
    if literals and all(isinstance(v, str) for v in literals):
        return PrimitiveKind.STRING
    return PrimitiveKind.ANY
