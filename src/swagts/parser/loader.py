"""Read Swagger 2.0 documents into plain dictionaries.

A *source* is a local path, an ``http(s)://`` URL, or ``-`` for stdin.
Documents may be JSON or YAML; the file extension or the response
``Content-Type`` only decides which parser is tried first.  Status-code keys
written unquoted in YAML (``200:``) arrive as integers and are left that way;
the extractor accepts both forms.

:func:`validate_swagger_version` is the gate in front of extraction: only
``swagger: "2.0"`` documents pass.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from swagts.exceptions import InvalidUsageError, SpecParseError, UnsupportedVersionError

logger = logging.getLogger(__name__)

SUPPORTED_SWAGGER_VERSION = "2.0"

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_spec(source: str) -> dict[str, Any]:
    """Load the document named by *source*.

    Args:
        source: File path, ``http://``/``https://`` URL, or ``-`` for stdin.

    Returns:
        The top-level document mapping.

    Raises:
        InvalidUsageError: If *source* is ``-`` and stdin is a terminal.
        SpecParseError: If the document cannot be read, fetched or parsed,
            or is not a mapping.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(Path(source))


def _load_from_stdin() -> dict[str, Any]:
    if sys.stdin.isatty():
        raise InvalidUsageError(
            "Reading the spec from '-' needs a document piped on stdin"
        )
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    logger.debug("Fetching spec from %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    return _parse_content(response.text, hint=_content_type_hint(content_type))


def _content_type_hint(content_type: str) -> Optional[str]:
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"
    return None


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")
    return _parse_content(content, hint=_SUFFIX_HINTS.get(path.suffix.lower()))


def _parse_content(content: str, hint: Optional[str] = None) -> dict[str, Any]:
    """Parse *content* as JSON, falling back to YAML.

    A ``"json"`` hint makes a JSON error final; a ``"yaml"`` hint skips JSON.
    Without a hint both are tried, and a failure reports both errors.

    Raises:
        SpecParseError: If nothing parses, or the result is not a mapping.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse spec as JSON or YAML" + "".join(f"\n  {e}" for e in errors)
    )


def _require_mapping(document: Any) -> dict[str, Any]:
    if isinstance(document, dict):
        return document
    got = "empty document" if document is None else type(document).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {got})")


def validate_swagger_version(spec: dict[str, Any]) -> str:
    """Return the document's ``swagger`` version, which must be ``"2.0"``.

    An unquoted ``swagger: 2.0`` in YAML parses as a float and is accepted.

    Raises:
        UnsupportedVersionError: For OpenAPI 3.x documents, a missing
            ``swagger`` field, or any other version.
    """
    if "openapi" in spec and "swagger" not in spec:
        raise UnsupportedVersionError(
            f"OpenAPI {spec['openapi']} is not supported. "
            f"Only Swagger {SUPPORTED_SWAGGER_VERSION} is supported."
        )

    version = spec.get("swagger")
    if version is None:
        raise UnsupportedVersionError(
            "Missing 'swagger' field. Is this a Swagger 2.0 document?"
        )

    version_str = str(version)
    if version_str != SUPPORTED_SWAGGER_VERSION:
        raise UnsupportedVersionError(
            f"Only {SUPPORTED_SWAGGER_VERSION} is supported. Your version: {version_str}"
        )
    return version_str
