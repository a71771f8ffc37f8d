"""Exception hierarchy for apidesign.

All exceptions inherit from :class:`ApiDesignError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`apidesign.exit_codes`.
The top-level error handler in :func:`apidesign.app.main` catches
``ApiDesignError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ApiDesignError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SourceError         (exit 6)
    +-- ParseError          (exit 7)
    +-- ConfigError         (exit 1)
"""

from apidesign.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PARSE_ERROR,
    EXIT_SOURCE_ERROR,
)


class ApiDesignError(Exception):
    """Base exception for all apidesign errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`apidesign.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ApiDesignError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SourceError(ApiDesignError):
    """Raised when document content cannot be read from its source."""

    exit_code = EXIT_SOURCE_ERROR


class ParseError(ApiDesignError):
    """Raised when content cannot be decoded into an API design document.

    Covers malformed JSON/YAML syntax as well as structurally wrong documents
    (a scalar or array at the root, a non-object ``info`` section, ...). The
    originating decoder error is always available as ``__cause__``.
    """

    exit_code = EXIT_PARSE_ERROR


class ConfigError(ApiDesignError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
