"""Built-in CLI sub-commands for swagts.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~swagts.commands.generate` -- translate a Swagger 2.0 document into
  TypeScript files.
* :mod:`~swagts.commands.inspect` -- examine the operations and definitions
  extracted from a document.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect``) or a plain callback function
registered directly on the root app (for single commands like ``generate``).
"""
