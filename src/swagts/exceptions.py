"""Exception hierarchy for swagts.

All exceptions inherit from :class:`SwagtsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swagts.exit_codes`.
The top-level error handler in :func:`swagts.app.main` catches
``SwagtsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SwagtsError (exit 1)
    +-- InvalidUsageError            (exit 2)
    +-- SpecParseError               (exit 7)
    |   +-- UnsupportedVersionError
    |   +-- MalformedDocumentError
    +-- RenderError                  (exit 8)
    |   +-- UnresolvedReferenceError
    +-- OutputError                  (exit 9)
    +-- ConfigError                  (exit 1)
"""

from swagts.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_RENDER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SwagtsError(Exception):
    """Base exception for all swagts errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swagts.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SwagtsError):
    """Raised for invalid CLI arguments or option values."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SwagtsError):
    """Raised when the Swagger document cannot be loaded or parsed."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnsupportedVersionError(SpecParseError):
    """Raised when the document does not declare ``swagger: "2.0"``."""


class MalformedDocumentError(SpecParseError):
    """Raised when a structurally required top-level field (``paths``) is missing or invalid."""


class RenderError(SwagtsError):
    """Raised when the intermediate representation cannot be rendered to source."""

    exit_code = EXIT_RENDER_ERROR


class UnresolvedReferenceError(RenderError):
    """Raised when a reference node names a definition that does not exist.

    Args:
        name: The dangling definition name.
        owner: The definition or operation whose type contains the reference.
    """

    def __init__(self, name: str, owner: str):
        super().__init__(f"Unresolved reference '{name}' in '{owner}'")
        self.name = name
        self.owner = owner


class OutputError(SwagtsError):
    """Raised when a generated file cannot be written."""

    exit_code = EXIT_OUTPUT_ERROR


class ConfigError(SwagtsError):
    """Raised for configuration problems (invalid project config, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE
