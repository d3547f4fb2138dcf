"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swagts.exceptions.SwagtsError` subclass.
Build scripts can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ swagts generate openapi3.json
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- only Swagger 2.0 is accepted
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The Swagger document could not be loaded, parsed, or is structurally unusable."""

EXIT_RENDER_ERROR = 8
"""The intermediate representation could not be rendered (e.g. a dangling reference)."""

EXIT_OUTPUT_ERROR = 9
"""Generated files could not be written to disk."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C."""
