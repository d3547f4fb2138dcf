"""Extract definitions and operations from a Swagger 2.0 document.

This module walks a raw Swagger 2.0 dictionary and builds a
:class:`~swagts.models.ParsedSpec` whose ``definitions`` and ``operations``
feed the renderer.  Every schema fragment it meets -- definition bodies,
path/query parameters, body parameters, response schemas -- is handed to
:func:`~swagts.parser.type_mapper.map_schema`; ``$ref`` pointers are never
resolved here.

The single public entry point is :func:`extract_spec`.  Internally it
delegates to private helpers that each handle one section of the document:

* ``_extract_info`` -- the ``info`` object (title, version, description).
* ``_extract_definitions`` -- the ``definitions`` map.
* ``_extract_operations`` -- the ``paths`` object, iterating over every
  path + HTTP method combination.

Per-operation anomalies never abort the pass:

* deprecated operations are skipped (logged at WARNING);
* parameters located anywhere but ``path``, ``query`` or ``body`` are
  dropped (logged at DEBUG);
* when several body parameters are declared the first one wins (the rest
  are logged at WARNING).

Path-level ``parameters`` lists are not inherited by operations.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from swagts.exceptions import MalformedDocumentError
from swagts.models import (
    APIInfo,
    DefinitionSchema,
    EmptyType,
    HTTPMethod,
    ObjectType,
    OperationSchema,
    ParameterLocation,
    ParsedSpec,
    TypeNode,
)
from swagts.parser.loader import validate_swagger_version
from swagts.parser.naming import create_operation_name
from swagts.parser.type_mapper import map_schema

logger = logging.getLogger(__name__)

# HTTP methods recognized on a path item
_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

# Response codes whose schema becomes the operation response, in preference order
_RESPONSE_CODES = ("200", "201")


def extract_spec(raw_spec: dict[str, Any]) -> ParsedSpec:
    """Extract a :class:`~swagts.models.ParsedSpec` from a raw Swagger dict.

    This is the main public entry point for the extraction pipeline.  The
    input is read but never modified, so extracting the same document twice
    yields structurally identical results.

    Args:
        raw_spec: The raw document as returned by
            :func:`~swagts.parser.loader.load_spec`.

    Returns:
        A :class:`~swagts.models.ParsedSpec` with definitions and operations
        in document order.

    Raises:
        UnsupportedVersionError: If the document is not Swagger 2.0.
        MalformedDocumentError: If ``paths`` is missing or not a mapping.

    Example::

        raw = load_spec("petstore.yaml")
        parsed = extract_spec(raw)
        for op in parsed.operations:
            print(f"{op.method.value.upper()} {op.path} -> {op.name}")
    """
    version = validate_swagger_version(raw_spec)

    paths = raw_spec.get("paths")
    if not isinstance(paths, dict):
        raise MalformedDocumentError(
            "Swagger document has no 'paths' object"
            if paths is None
            else f"'paths' must be an object (got {type(paths).__name__})"
        )

    return ParsedSpec(
        swagger_version=version,
        info=_extract_info(raw_spec),
        definitions=_extract_definitions(raw_spec),
        operations=_extract_operations(paths),
    )


def _extract_info(spec: dict[str, Any]) -> APIInfo:
    """Extract API metadata from the document's ``info`` object.

    Missing fields fall back to ``"Untitled API"`` / ``"0.0.0"``.
    """
    info = spec.get("info")
    if not isinstance(info, dict):
        info = {}

    return APIInfo(
        title=str(info.get("title", "Untitled API")),
        version=str(info.get("version", "0.0.0")),
        description=_optional_text(info.get("description")),
    )


def _optional_text(value: Any) -> Optional[str]:
    """Return *value* as text; YAML may hand over numbers or booleans."""
    return None if value is None else str(value)

def _extract_definitions(spec: dict[str, Any]) -> list[DefinitionSchema]:
    """Map every entry of the ``definitions`` map, preserving key order."""
    definitions = spec.get("definitions")
    if not isinstance(definitions, dict):
        return []

    return [
        DefinitionSchema(name=str(name), schema=map_schema(schema))
        for name, schema in definitions.items()
    ]


def _extract_operations(paths: dict[str, Any]) -> list[OperationSchema]:
    """Extract all non-deprecated operations from the ``paths`` object.

    Paths and the methods within each path item are visited in document
    order.  Keys that are not HTTP methods (``parameters``, ``$ref``,
    ``x-*`` extensions) are ignored.

    Args:
        paths: The ``paths`` object of the document.

    Returns:
        A list of :class:`~swagts.models.OperationSchema` instances, one
        per path + HTTP method combination that is not deprecated.
    """
    operations: list[OperationSchema] = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        for key, operation in path_item.items():
            method_str = str(key).lower()
            if method_str not in _HTTP_METHODS or not isinstance(operation, dict):
                continue

            method = HTTPMethod(method_str)
            name = _optional_text(operation.get("operationId")) or create_operation_name(
                method, path
            )

            if operation.get("deprecated"):
                logger.warning(
                    "Skip deprecated operation %s (%s %s)",
                    name,
                    method.value.upper(),
                    path,
                )
                continue

            parameters = operation.get("parameters")
            if not isinstance(parameters, list):
                parameters = []
            grouped = _group_parameters(name, parameters)

            operations.append(
                OperationSchema(
                    name=name,
                    path=path,
                    method=method,
                    summary=_optional_text(operation.get("summary")),
                    response=_extract_response(operation.get("responses")),
                    path_parameter=_build_parameter_object(
                        grouped[ParameterLocation.PATH]
                    ),
                    query_parameter=_build_parameter_object(
                        grouped[ParameterLocation.QUERY]
                    ),
                    body_parameter=_extract_body_parameter(
                        name, grouped[ParameterLocation.BODY]
                    ),
                )
            )

    return operations


def _group_parameters(
    operation_name: str,
    parameters: list[Any],
) -> dict[ParameterLocation, list[dict[str, Any]]]:
    """Classify parameters by their ``in`` location.

    Only ``path``, ``query`` and ``body`` are kept; every other parameter
    (``header``, ``formData``, unknown or missing locations, non-dict
    entries) is dropped.

    Returns:
        A dict with exactly the keys PATH, QUERY and BODY, each mapping to
        the parameters of that location in declaration order.
    """
    grouped: dict[ParameterLocation, list[dict[str, Any]]] = {
        ParameterLocation.PATH: [],
        ParameterLocation.QUERY: [],
        ParameterLocation.BODY: [],
    }

    for param in parameters:
        location = param.get("in") if isinstance(param, dict) else None
        try:
            key = ParameterLocation(location)
        except ValueError:
            key = None

        if key not in grouped:
            logger.debug(
                "Ignore parameter %r in %s: unsupported location %r",
                param.get("name") if isinstance(param, dict) else param,
                operation_name,
                location,
            )
            continue
        grouped[key].append(param)

    return grouped


def _build_parameter_object(parameters: list[dict[str, Any]]) -> ObjectType:
    """Build an object node with one property per path or query parameter.

    Non-body parameters carry ``type``/``items``/``enum`` inline, so the
    parameter object itself is mapped.  Each property's ``required`` comes
    from the parameter's own ``required`` flag.
    """
    properties: dict[str, TypeNode] = {}
    for param in parameters:
        properties[str(param.get("name", ""))] = map_schema(
            param, bool(param.get("required", False))
        )
    return ObjectType(properties=properties)


def _extract_body_parameter(
    operation_name: str,
    parameters: list[dict[str, Any]],
) -> Optional[TypeNode]:
    """Map the first body parameter's schema, or return ``None`` if there is none."""
    if not parameters:
        return None

    if len(parameters) > 1:
        logger.warning(
            "Operation %s declares %d body parameters; using %r",
            operation_name,
            len(parameters),
            parameters[0].get("name"),
        )

    first = parameters[0]
    return map_schema(first.get("schema"), bool(first.get("required", False)))


def _extract_response(responses: Any) -> TypeNode:
    """Map the ``200`` response schema, falling back to ``201``.

    Status codes may be strings (JSON) or integers (unquoted YAML keys).
    The first declared code is used even when it carries no schema (a
    ``200`` without a body means "no content", not "look at ``201``").
    When neither code is declared the result is
    :class:`~swagts.models.EmptyType`.
    """
    if not isinstance(responses, dict):
        return EmptyType()

    for code in _RESPONSE_CODES:
        response = responses.get(code, responses.get(int(code)))
        if response is None:
            continue
        if isinstance(response, dict) and response.get("schema") is not None:
            return map_schema(response["schema"])
        return EmptyType()

    return EmptyType()
