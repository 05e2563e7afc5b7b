"""Exception hierarchy for curvenote.

All exceptions inherit from :class:`CurvenoteError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`curvenote.exit_codes`.
The top-level handler in :func:`curvenote.app.main` catches
``CurvenoteError`` and exits with the matching code; unexpected exceptions
produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    CurvenoteError (exit 1)
    +-- AuthError              (exit 3)
    |   +-- TokenInvalidError
    |   +-- TokenExpiredError
    +-- NotFoundError          (exit 4)
    |   +-- FetchFailedError
    +-- InvalidResponseError   (exit 5)
    +-- ConnectionError_       (exit 6)
    +-- NotLoadedError         (exit 1)
    +-- UnconfiguredError      (exit 1)
    +-- ConfigError            (exit 1)
"""

from curvenote.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class CurvenoteError(Exception):
    """Base exception for all curvenote errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class AuthError(CurvenoteError):
    """Raised when the API token cannot be used."""

    exit_code = EXIT_AUTH_FAILURE


class TokenInvalidError(AuthError):
    """Raised when the session token cannot be decoded or carries no expiry."""


class TokenExpiredError(AuthError):
    """Raised when the decoded token expiry lies in the past."""


class NotFoundError(CurvenoteError):
    """Raised when a remote resource does not exist or is not visible."""

    exit_code = EXIT_NOT_FOUND


class FetchFailedError(NotFoundError):
    """Raised when an entity GET returns anything other than HTTP 200.

    Args:
        kind: Entity kind, e.g. ``"Project"``.
        url: The URL that was requested.
        status: The HTTP status code returned by the API.
    """

    def __init__(self, kind: str, url: str, status: int):
        super().__init__(f"{kind}: Not found ({url}) or you do not have access.")
        self.kind = kind
        self.url = url
        self.status = status


class InvalidResponseError(CurvenoteError):
    """Raised when an entity GET succeeds but its body cannot be normalised.

    Args:
        kind: Entity kind, e.g. ``"Project"``.
        url: The URL that was requested.
        reason: What was wrong with the body.
    """

    exit_code = EXIT_SERVER_ERROR

    def __init__(self, kind: str, url: str, reason: str):
        super().__init__(f"{kind}: Unexpected response from {url}: {reason}")
        self.kind = kind
        self.url = url
        self.reason = reason


class ConnectionError_(CurvenoteError):
    """Raised on network-level failures (DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class NotLoadedError(CurvenoteError):
    """Raised when an accessor's data is read before it was loaded."""

    def __init__(self, kind: str):
        super().__init__(f'{kind}: Must call "get" first')
        self.kind = kind


class UnconfiguredError(CurvenoteError):
    """Raised when an accessor is created without a usable entity binding."""


class ConfigError(CurvenoteError):
    """Raised for configuration problems (invalid JSON, bad field values)."""

    exit_code = EXIT_GENERIC_FAILURE
