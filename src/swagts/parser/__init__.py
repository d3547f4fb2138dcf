"""Swagger 2.0 parser -- load documents and translate them into the IR.

This sub-package is responsible for the first half of the swagts pipeline:
turning a raw Swagger 2.0 document (JSON or YAML, local file or remote URL)
into a :class:`~swagts.models.ParsedSpec` that the renderer can consume.

Typical usage::

    from swagts.parser import extract_spec, load_spec

    raw = load_spec("https://petstore.swagger.io/v2/swagger.json")
    parsed = extract_spec(raw)

Sub-modules:

* :mod:`~swagts.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and Swagger version validation.
* :mod:`~swagts.parser.type_mapper` -- Schema fragment to
  :data:`~swagts.models.TypeNode` mapping.
* :mod:`~swagts.parser.naming` -- Operation-name synthesis and case
  conversion.
* :mod:`~swagts.parser.extractor` -- Walks ``definitions`` and ``paths`` and
  produces :class:`~swagts.models.DefinitionSchema` and
  :class:`~swagts.models.OperationSchema` records.
"""

from swagts.parser.extractor import extract_spec
from swagts.parser.loader import load_spec, validate_swagger_version
from swagts.parser.type_mapper import map_schema

__all__ = ["load_spec", "validate_swagger_version", "extract_spec", "map_schema"]
