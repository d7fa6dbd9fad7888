"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specflat.exceptions.SpecflatError` subclass.
Shell wrappers can inspect the exit code to tell a missing document apart
from a malformed or non-conforming one without parsing stderr.

Example::

    $ specflat parse ./missing.json
    $ echo $?
    3   # EXIT_LOAD_FAILURE -- the document could not be retrieved
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_LOAD_FAILURE = 3
"""The document could not be retrieved (missing file, unreadable file, HTTP error)."""

EXIT_FORMAT_FAILURE = 4
"""The document content is neither valid JSON nor valid YAML."""

EXIT_CONFORMANCE_FAILURE = 5
"""The document does not conform to the Swagger 2.0 meta-schema."""
