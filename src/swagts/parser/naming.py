"""Identifier helpers: operation-name synthesis and case conversion.

:func:`create_operation_name` gives every operation without an
``operationId`` a deterministic, identifier-safe name derived from its HTTP
method and path template::

    >>> create_operation_name("get", "/pets/{petId}")
    'getPetsByPetId'
    >>> create_operation_name("post", "/pets/{petId}")
    'postPetsByPetId'

:func:`snake_to_camel` and :func:`camel_to_snake` back the renderer's
``normalize_case`` filter.
"""

from __future__ import annotations

import re

from swagts.models import HTTPMethod, NamingConvention

# Runs of characters that cannot appear in an identifier.
_WORD_SPLIT_RE = re.compile(r"[^a-zA-Z0-9]+")


def create_operation_name(method: HTTPMethod | str, path: str) -> str:
    """Synthesise an operation name from its HTTP method and path template.

    Literal path segments contribute their PascalCased words; a path
    parameter segment ``{id}`` contributes ``By`` + ``Id``. The lowercase
    method leads, so the result never starts with a digit and differs for
    every method on the same path. The root path ``/`` yields ``Root``.

    Args:
        method: The HTTP method, as :class:`~swagts.models.HTTPMethod` or a
            plain string in any case.
        path: The path template (e.g. ``"/pets/{petId}/photos"``).

    Returns:
        A camelCase identifier, stable for a given ``(method, path)`` pair.
    """
    verb = method.value if isinstance(method, HTTPMethod) else str(method).lower()

    parts: list[str] = []
    for segment in _split_segments(path):
        if _is_path_param(segment):
            parts.append("By" + to_pascal_case(segment[1:-1]))
        else:
            parts.append(to_pascal_case(segment))

    suffix = "".join(parts) or "Root"
    return verb + suffix


def to_pascal_case(text: str) -> str:
    """Join the alphanumeric words of *text* with each word's first letter upper-cased.

    ``"pet-store"`` -> ``"PetStore"``, ``"petId"`` -> ``"PetId"``,
    ``"v1"`` -> ``"V1"``.
    """
    return "".join(
        word[0].upper() + word[1:] for word in _WORD_SPLIT_RE.split(text) if word
    )


def snake_to_camel(text: str) -> str:
    """Convert ``snake_case`` to ``camelCase``; leading underscores are kept.

    >>> snake_to_camel("created_at")
    'createdAt'
    """
    stripped = text.lstrip("_")
    leading = text[: len(text) - len(stripped)]
    head, *rest = stripped.split("_")
    return leading + head + "".join(w[:1].upper() + w[1:] for w in rest if w)


def camel_to_snake(text: str) -> str:
    """Convert ``camelCase`` / ``PascalCase`` to ``snake_case``.

    >>> camel_to_snake("createdAt")
    'created_at'
    >>> camel_to_snake("HTTPStatus")
    'http_status'
    """
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", result)
    return result.lower()


def normalize_case(text: str, naming: NamingConvention) -> str:
    """Apply *naming* to a property or parameter name."""
    if naming is NamingConvention.CAMEL:
        return snake_to_camel(text)
    if naming is NamingConvention.SNAKE:
        return camel_to_snake(text)
    return text


def _is_path_param(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def _split_segments(path: str) -> list[str]:
    """Split a path into non-empty segments.

    ``"/api/v1/users"`` -> ``["api", "v1", "users"]``
    ``"/"``             -> ``[]``
    """
    return [s for s in path.split("/") if s]
