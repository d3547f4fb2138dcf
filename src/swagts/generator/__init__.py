"""TypeScript generator -- render the IR and write source files.

This sub-package is responsible for the second half of the swagts pipeline:
taking a :class:`~swagts.models.ParsedSpec` (produced by the parser) and
producing TypeScript files.

Typical usage::

    from swagts.generator import render_files, write_files
    from swagts.models import NamingConvention, RenderConfig

    config = RenderConfig(naming=NamingConvention.CAMEL)
    write_files(render_files(parsed_spec, config, "./src/api"))

Sub-modules:

* :mod:`~swagts.generator.typescript` -- TypeNode to TypeScript type
  expressions, reference collection, identifier helpers.
* :mod:`~swagts.generator.renderer` -- Jinja2 environment and templates;
  reference checking.
* :mod:`~swagts.generator.writer` -- Atomic file output.
"""

from swagts.generator.renderer import render_files
from swagts.generator.writer import write_files

__all__ = ["render_files", "write_files"]
