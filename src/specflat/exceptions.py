"""Exception hierarchy for specflat.

All exceptions inherit from :class:`SpecflatError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specflat.exit_codes`.
The top-level error handler in :func:`specflat.app.main` catches
``SpecflatError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The resolution and merge algorithms never raise: missing optional fields are
treated as empty.  Only the collaborators around them (loading, decoding,
conformance validation, configuration) fail.

Subclass hierarchy::

    SpecflatError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- SpecLoadError          (exit 3)
    +-- SpecFormatError        (exit 4)
    +-- SpecConformanceError   (exit 5)
    +-- ConfigError            (exit 1)
"""

from specflat.exit_codes import (
    EXIT_CONFORMANCE_FAILURE,
    EXIT_FORMAT_FAILURE,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_FAILURE,
)


class SpecflatError(Exception):
    """Base exception for all specflat errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specflat.exit_codes`. The entry point catches
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


class InvalidUsageError(SpecflatError):
    """Raised for invalid CLI arguments or unknown formatter styles."""

    exit_code = EXIT_INVALID_USAGE


class SpecLoadError(SpecflatError):
    """Raised when a document cannot be retrieved from a file or URL."""

    exit_code = EXIT_LOAD_FAILURE


class SpecFormatError(SpecflatError):
    """Raised when document text is neither JSON nor YAML."""

    exit_code = EXIT_FORMAT_FAILURE


class SpecConformanceError(SpecflatError):
    """Raised when a document fails Swagger 2.0 meta-schema validation.

    The validator's diagnostics are not part of the message; they remain
    reachable through ``__cause__``.
    """

    exit_code = EXIT_CONFORMANCE_FAILURE


class ConfigError(SpecflatError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
