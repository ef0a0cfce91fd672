"""Exception hierarchy for cocli.

All exceptions inherit from :class:`CocliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`cocli.exit_codes`.
The client raises these as ordinary exceptions; only the command layer
(:mod:`cocli.commands.shared`) turns them into an error message and a
process exit.

Subclass hierarchy::

    CocliError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- AuthError             (exit 3)
    +-- NotFoundError         (exit 4)
    +-- ServerError           (exit 5)
    +-- ConnectionError_      (exit 6)
    +-- RequestRejectedError  (exit 7)
    +-- ResponseParseError    (exit 1)
    +-- ConfigError           (exit 1)
"""

from cocli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REQUEST_REJECTED,
    EXIT_SERVER_ERROR,
)


class CocliError(Exception):
    """Base exception for all cocli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`cocli.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CocliError):
    """Raised for invalid CLI arguments or unsupported flag combinations."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(CocliError):
    """Raised when the API rejects the bearer token (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(CocliError):
    """Raised when the API returns HTTP 404 or an expected record is absent."""

    exit_code = EXIT_NOT_FOUND


class ServerError(CocliError):
    """Raised when the API returns an HTTP error status other than 401/403/404."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(CocliError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class RequestRejectedError(CocliError):
    """Raised when the API reports a semantic error in an otherwise delivered response."""

    exit_code = EXIT_REQUEST_REJECTED


class ResponseParseError(CocliError):
    """Raised when a response body cannot be decoded into the expected record."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(CocliError):
    """Raised for configuration problems (missing token, invalid config file, bad credential source)."""

    exit_code = EXIT_GENERIC_FAILURE
