"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~curvenote.exceptions.CurvenoteError` subclass, so
shell wrappers can tell failures apart without parsing stderr.

Example::

    $ curvenote build my-project
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the API token has expired
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_AUTH_FAILURE = 3
"""The API token could not be decoded or has expired."""

EXIT_NOT_FOUND = 4
"""The requested entity was not found or is not accessible."""

EXIT_SERVER_ERROR = 5
"""The API answered with a response that could not be used."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (DNS failure, connection refused)."""

EXIT_INTERRUPTED = 130
"""The user cancelled with Ctrl-C."""
