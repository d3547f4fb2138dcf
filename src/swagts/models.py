"""Canonical Pydantic models shared across all swagts modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**IR type nodes** -- the language-agnostic representation of a data shape
produced by :func:`~swagts.parser.type_mapper.map_schema`:
    :class:`PrimitiveType`, :class:`ArrayType`, :class:`ObjectType`,
    :class:`ReferenceType`, :class:`EmptyType`, combined into the
    discriminated union :data:`TypeNode`.

**Extractor output models** -- produced by the spec extractor and consumed by
the renderer:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`DefinitionSchema`,
    :class:`OperationSchema`, :class:`APIInfo`, and :class:`ParsedSpec`.

**Generation settings** -- resolved from CLI flags, environment, and project
config:
    :class:`NamingConvention`, :class:`GenerateOptions`, :class:`RenderConfig`,
    and :class:`GeneratedFile`.

A :data:`TypeNode` never embeds the structure of a named definition: a
``$ref`` becomes a :class:`ReferenceType` carrying only the definition name.
Resolving that name is the renderer's job, which keeps every IR tree finite
even for self-referential schemas.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


# --- IR type nodes ---


class PrimitiveKind(str, enum.Enum):
    """Scalar kinds a :class:`PrimitiveType` can take."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"


class _BaseTypeNode(BaseModel):
    """Fields shared by every IR type node.

    ``required`` is the optionality supplied by the caller of
    :func:`~swagts.parser.type_mapper.map_schema` -- for an object property
    it reflects membership in the parent's ``required`` list, for a
    parameter it reflects the parameter's own ``required`` flag.
    """

    required: bool = False


class PrimitiveType(_BaseTypeNode):
    """A scalar value, optionally restricted to a closed set of literals (``enum``)."""

    kind: Literal["primitive"] = "primitive"
    name: PrimitiveKind = PrimitiveKind.ANY
    literals: Optional[list[Any]] = None


class ArrayType(_BaseTypeNode):
    """A homogeneous array of ``items``."""

    kind: Literal["array"] = "array"
    items: TypeNode


class ObjectType(_BaseTypeNode):
    """An object with an ordered mapping of named properties.

    ``bases`` holds the names of definitions referenced from an ``allOf``
    composition. They are kept by name (never expanded) and rendered as an
    intersection with the inline properties.
    """

    kind: Literal["object"] = "object"
    properties: dict[str, TypeNode] = Field(default_factory=dict)
    bases: list[str] = Field(default_factory=list)


class ReferenceType(_BaseTypeNode):
    """A by-name reference to a :class:`DefinitionSchema`."""

    kind: Literal["reference"] = "reference"
    name: str


class EmptyType(_BaseTypeNode):
    """The canonical "no shape" value, used when a schema is absent or unrecognised."""

    kind: Literal["empty"] = "empty"


TypeNode = Annotated[
    Union[PrimitiveType, ArrayType, ObjectType, ReferenceType, EmptyType],
    Field(discriminator="kind"),
]
"""Discriminated union of every IR type node, tagged by ``kind``."""

ArrayType.model_rebuild()
ObjectType.model_rebuild()


# --- Extractor output ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised on a Swagger 2.0 path-item object.

    Member order matches the Swagger 2.0 Path Item Object field order.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"


class ParameterLocation(str, enum.Enum):
    """Locations where a Swagger 2.0 parameter can appear, per the ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    FORM_DATA = "formData"
    BODY = "body"


class DefinitionSchema(BaseModel):
    """A named, reusable schema from the document's ``definitions`` map."""

    name: str
    schema_: TypeNode = Field(alias="schema")

    model_config = {"populate_by_name": True}


class OperationSchema(BaseModel):
    """A single non-deprecated operation (one HTTP method bound to one path).

    ``path_parameter`` and ``query_parameter`` are always objects, possibly
    with zero properties. ``body_parameter`` is ``None`` when the operation
    declares no body parameter.
    """

    name: str
    path: str
    method: HTTPMethod
    summary: Optional[str] = None
    response: TypeNode = Field(default_factory=EmptyType)
    path_parameter: ObjectType = Field(default_factory=ObjectType)
    query_parameter: ObjectType = Field(default_factory=ObjectType)
    body_parameter: Optional[TypeNode] = None


class APIInfo(BaseModel):
    """API metadata extracted from the document's *Info Object*."""

    title: str
    version: str
    description: Optional[str] = None


class ParsedSpec(BaseModel):
    """Complete IR of a Swagger 2.0 document.

    Produced by :func:`~swagts.parser.extractor.extract_spec` and consumed
    by :func:`~swagts.generator.renderer.render_files`. Both sequences keep
    the document's own key order so rendered output is deterministic.
    """

    swagger_version: str = "2.0"
    info: APIInfo
    definitions: list[DefinitionSchema] = Field(default_factory=list)
    operations: list[OperationSchema] = Field(default_factory=list)


# --- Generation settings ---


class NamingConvention(str, enum.Enum):
    """How property and parameter names are cased in generated source."""

    PRESERVE = "preserve"
    CAMEL = "camel"
    SNAKE = "snake"


class GenerateOptions(BaseModel):
    """User-facing options for ``swagts generate``.

    Loaded from the project config file and environment, then overridden
    by CLI flags. See :func:`~swagts.config.resolve_options` for the full
    precedence chain. Template fields hold file paths; they are read into
    a :class:`RenderConfig` before rendering.
    """

    dist: str = Field(default=".", description="Output root directory")
    definition_dir: str = Field(
        default="models", description="Sub-directory for definition files"
    )
    operation_dir: str = Field(
        default="requests", description="Sub-directory for operation files"
    )
    naming: NamingConvention = Field(
        default=NamingConvention.PRESERVE,
        description="Casing applied to property names: preserve, camel, snake",
    )
    definition_template: Optional[str] = Field(
        default=None, description="Path to a custom definition template"
    )
    operation_template: Optional[str] = Field(
        default=None, description="Path to a custom operation template"
    )


class RenderConfig(BaseModel):
    """Explicit configuration for a single render pass.

    Passed by value into :func:`~swagts.generator.renderer.render_files`;
    nothing is registered globally, so several render passes with different
    configurations can run in the same process.
    """

    naming: NamingConvention = NamingConvention.PRESERVE
    definition_dir: str = "models"
    operation_dir: str = "requests"
    definition_template: Optional[str] = Field(
        default=None, description="Template source overriding definition.ts.j2"
    )
    operation_template: Optional[str] = Field(
        default=None, description="Template source overriding operation.ts.j2"
    )


class GeneratedFile(BaseModel):
    """A rendered file waiting to be written by :mod:`swagts.generator.writer`."""

    path: Path
    content: str
