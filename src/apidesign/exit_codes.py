"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~apidesign.exceptions.ApiDesignError` subclass.
Shell wrappers can inspect the exit code to tell a bad document apart from
an unreachable source without parsing stderr.

Example::

    $ apidesign extract broken.json
    $ echo $?
    7   # EXIT_PARSE_ERROR -- the document could not be decoded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SOURCE_ERROR = 6
"""The document could not be read (missing file, HTTP failure, empty stdin)."""

EXIT_PARSE_ERROR = 7
"""The document could not be parsed in its detected format."""
