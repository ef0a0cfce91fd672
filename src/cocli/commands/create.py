"""Create commands -- the one mutating operation.

Provides ``cocli create deployment``. The command always parses the
response, so a rejection reported by the API can be told apart from a
successful creation; ``--raw`` is therefore refused.
"""

from __future__ import annotations

from typing import Optional

import typer

from cocli.commands.shared import emit_record, exit_on_error, open_client, options
from cocli.exceptions import InvalidUsageError, RequestRejectedError
from cocli.models import CreateDeploymentParams
from cocli.render import format_deployment


create_app = typer.Typer(no_args_is_help=True)


@create_app.command("deployment")
def create_deployment(
    ctx: typer.Context,
    name: str = typer.Argument(help="New deployment name."),
    database_type: str = typer.Argument(
        metavar="TYPE", help="Database type, e.g. mongodb, postgresql, redis."
    ),
    cluster: Optional[str] = typer.Option(None, "--cluster", help="Cluster ID."),
    datacenter: Optional[str] = typer.Option(
        None, "--datacenter", help="Datacenter region, e.g. aws:us-east-1."
    ),
    version: Optional[str] = typer.Option(None, "--version", help="Database version."),
    units: Optional[int] = typer.Option(None, "--units", min=1, help="Initial resource units."),
    ssl: bool = typer.Option(False, "--ssl", help="Enable SSL."),
    wired_tiger: bool = typer.Option(
        False, "--wiredtiger", help="Use the WiredTiger storage engine (MongoDB)."
    ),
) -> None:
    """Create deployment.

    Looks up the account for the current token, then asks the API to
    provision a new deployment on the given cluster or in the given
    datacenter. Either ``--cluster`` or ``--datacenter`` is required.

    Example::

        cocli create deployment orders mongodb --datacenter aws:us-east-1
        cocli --fmt create deployment cache redis --cluster 56f3a1e5c5ff
    """
    opts = options(ctx)
    with exit_on_error():
        if opts.get("raw"):
            raise InvalidUsageError("Raw mode not supported for create deployment")
        if not cluster and not datacenter:
            raise InvalidUsageError("Must supply either a --cluster id or --datacenter region")

        with open_client(ctx) as client:
            account = client.get_account()
            params = CreateDeploymentParams(
                name=name,
                account_id=account.id,
                database_type=database_type,
                cluster_id=cluster or None,
                datacenter=datacenter or None,
                version=version,
                units=units,
                ssl=ssl or None,
                wired_tiger=wired_tiger or None,
            )
            deployment = client.create_deployment(params)

        if deployment.error:
            raise RequestRejectedError(deployment.error)

        full_ca = bool(opts.get("fullca"))
        emit_record(ctx, deployment, lambda d: format_deployment(d, full_ca=full_ca))
