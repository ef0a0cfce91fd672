"""cocli -- a command-line client for the Compose database-provisioning API.

The package wraps the Compose REST API (``https://api.compose.io/2016-07/``)
with a typed client and a Typer CLI. Every command issues a single
authenticated request, parses the HAL JSON response into pydantic records
and prints them as raw JSON, indented JSON, or fixed-column text.

Typical usage::

    export COMPOSEAPITOKEN=...
    cocli --fmt show deployments
    cocli create deployment mydb mongodb --datacenter aws:us-east-1

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic records for API resources and client configuration.
    config: Token and settings resolution.
    client: HTTP transport wrapper and typed Compose API operations.
    render: Fixed-label text formatting for records.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
