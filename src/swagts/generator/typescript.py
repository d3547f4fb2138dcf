"""Render IR type nodes as TypeScript type expressions.

This is where :class:`~swagts.models.ReferenceType` nodes are finally
resolved -- by name only, against the set of known definitions.  The walk in
:func:`collect_references` never follows a reference into its target, so
self-referential definitions stay finite here too.

Mapping summary:

* ``primitive`` -- ``string`` / ``number`` / ``boolean`` / ``any``, or a
  union of literals for enums (``"a" | "b"``).
* ``array`` -- ``Array<T>``.
* ``object`` -- an inline ``{ key: T; other?: U; }`` literal, intersected
  with its ``allOf`` bases.
* ``reference`` -- the definition's identifier (imported by the caller).
* ``empty`` -- the *empty* argument (``any`` by default, ``void`` for
  responses).
"""

from __future__ import annotations

import json
import re
from typing import Iterator

from swagts.models import (
    ArrayType,
    EmptyType,
    NamingConvention,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    ReferenceType,
    TypeNode,
)
from swagts.parser.naming import normalize_case

_INVALID_IDENT_RE = re.compile(r"[^a-zA-Z0-9_$]")
_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Reserved words (strict mode) plus the built-in type names a type alias may not take.
_RESERVED_WORDS = frozenset(
    """
    break case catch class const continue debugger default delete do else enum
    export extends false finally for function if implements import in
    instanceof interface let new null package private protected public return
    static super switch this throw true try typeof var void while with yield
    any bigint boolean never number object string symbol undefined unknown
    """.split()
)

_PRIMITIVE_NAMES: dict[PrimitiveKind, str] = {
    PrimitiveKind.STRING: "string",
    PrimitiveKind.NUMBER: "number",
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.ANY: "any",
}

_INDENT = "  "


def ts_identifier(name: str) -> str:
    """Turn an arbitrary definition or operation name into a TypeScript identifier.

    Invalid characters become ``_``; a leading digit or a reserved word gets
    an ``_`` prefix: ``"Pet.Info"`` -> ``"Pet_Info"``, ``"2fa"`` -> ``"_2fa"``,
    ``"delete"`` -> ``"_delete"``.
    """
    result = _INVALID_IDENT_RE.sub("_", name) or "_"
    if result[0].isdigit() or result in _RESERVED_WORDS:
        result = f"_{result}"
    return result


def property_key(name: str, naming: NamingConvention) -> str:
    """Return *name* cased per *naming*, quoted when it is not a bare identifier."""
    key = normalize_case(name, naming)
    return key if _IDENT_RE.match(key) else json.dumps(key)


def property_access(target: str, name: str, naming: NamingConvention) -> str:
    """Return a TypeScript expression reading property *name* of *target*."""
    key = normalize_case(name, naming)
    if _IDENT_RE.match(key):
        return f"{target}.{key}"
    return f"{target}[{json.dumps(key)}]"


def render_type(
    node: TypeNode,
    naming: NamingConvention = NamingConvention.PRESERVE,
    empty: str = "any",
    depth: int = 0,
) -> str:
    """Render *node* as a TypeScript type expression.

    Args:
        node: The IR node to render.
        naming: Casing applied to object property keys.
        empty: Expression used for :class:`~swagts.models.EmptyType` nodes
            at the top level; nested empty nodes always render as ``any``.
        depth: Current nesting level, used for indentation of object
            literals.

    Returns:
        The TypeScript type expression.
    """
    if isinstance(node, PrimitiveType):
        if node.literals:
            return " | ".join(json.dumps(v) for v in node.literals)
        return _PRIMITIVE_NAMES[node.name]

    if isinstance(node, ArrayType):
        return f"Array<{render_type(node.items, naming, depth=depth)}>"

    if isinstance(node, ReferenceType):
        return ts_identifier(node.name)

    if isinstance(node, ObjectType):
        parts = [ts_identifier(base) for base in node.bases]
        if node.properties or not parts:
            parts.append(_render_object_literal(node, naming, depth))
        return " & ".join(parts)

    if isinstance(node, EmptyType):
        return empty

    raise TypeError(f"Unknown type node: {node!r}")


def _render_object_literal(node: ObjectType, naming: NamingConvention, depth: int) -> str:
    if not node.properties:
        return "{}"

    pad = _INDENT * depth
    lines = ["{"]
    for name, child in node.properties.items():
        optional = "" if child.required else "?"
        rendered = render_type(child, naming, depth=depth + 1)
        lines.append(f"{pad}{_INDENT}{property_key(name, naming)}{optional}: {rendered};")
    lines.append(f"{pad}}}")
    return "\n".join(lines)


def collect_references(node: TypeNode | None) -> list[str]:
    """Return the definition names *node* refers to, in first-seen order.

    References are collected, not followed: the walk stops at every
    :class:`~swagts.models.ReferenceType`.
    """
    seen: list[str] = []
    for name in _iter_references(node):
        if name not in seen:
            seen.append(name)
    return seen


def _iter_references(node: TypeNode | None) -> Iterator[str]:
    if isinstance(node, ReferenceType):
        yield node.name
    elif isinstance(node, ArrayType):
        yield from _iter_references(node.items)
    elif isinstance(node, ObjectType):
        yield from node.bases
        for child in node.properties.values():
            yield from _iter_references(child)
