"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~cocli.exceptions.CocliError` subclass, so shell
scripts can tell a bad token from a rejected deployment without parsing
stderr.

Example::

    $ cocli create deployment mydb mongodb --datacenter aws:us-east-1
    Error: Deployment quota exceeded
    $ echo $?
    7   # EXIT_REQUEST_REJECTED
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (bad configuration, unparseable response)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unsupported flag combination."""

EXIT_AUTH_FAILURE = 3
"""The API rejected the bearer token (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404 or an empty account list)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_REQUEST_REJECTED = 7
"""The API accepted the request but reported a semantic error (quota, invalid type)."""
