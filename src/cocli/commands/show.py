"""Show commands -- read-only views of Compose resources.

Provides the ``cocli show`` sub-command group. Every command issues one
``GET`` and prints the result as indented JSON, as fixed-label text with
``--fmt``, or as the re-indented response body with ``--raw``.
"""

from __future__ import annotations

import typer

from cocli.client import compose
from cocli.commands.shared import options, show_record, show_records
from cocli.render import (
    format_account,
    format_cluster,
    format_database,
    format_datacenter,
    format_deployment,
    format_deployment_summary,
    format_recipe,
    format_user,
)


show_app = typer.Typer(no_args_is_help=True)


@show_app.command("account")
def show_account(ctx: typer.Context) -> None:
    """Show account details.

    The token belongs to a single account; with ``--raw`` the full account
    collection returned by the API is printed.
    """
    show_record(ctx, compose.ACCOUNTS, lambda client: client.get_account(), format_account)


@show_app.command("deployments")
def show_deployments(ctx: typer.Context) -> None:
    """Show deployments."""
    show_records(
        ctx,
        compose.DEPLOYMENTS,
        lambda client: client.get_deployments(),
        format_deployment_summary,
    )


@show_app.command("deployment")
def show_deployment(
    ctx: typer.Context,
    deployment_id: str = typer.Argument(metavar="DEPID", help="Deployment ID."),
) -> None:
    """Show one deployment with its connection strings.

    The CA certificate is shortened in ``--fmt`` mode unless ``--fullca``
    is given.
    """
    full_ca = bool(options(ctx).get("fullca"))
    show_record(
        ctx,
        compose.deployment_path(deployment_id),
        lambda client: client.get_deployment(deployment_id),
        lambda deployment: format_deployment(deployment, full_ca=full_ca),
    )


@show_app.command("recipe")
def show_recipe(
    ctx: typer.Context,
    recipe_id: str = typer.Argument(metavar="RECID", help="Recipe ID."),
) -> None:
    """Show recipe."""
    show_record(
        ctx,
        compose.recipe_path(recipe_id),
        lambda client: client.get_recipe(recipe_id),
        format_recipe,
    )


@show_app.command("recipes")
def show_recipes(
    ctx: typer.Context,
    deployment_id: str = typer.Argument(metavar="DEPID", help="Deployment ID."),
) -> None:
    """Show recipes for a deployment."""
    show_records(
        ctx,
        compose.deployment_recipes_path(deployment_id),
        lambda client: client.get_recipes_for_deployment(deployment_id),
        format_recipe,
    )


@show_app.command("clusters")
def show_clusters(ctx: typer.Context) -> None:
    """Show available clusters."""
    show_records(ctx, compose.CLUSTERS, lambda client: client.get_clusters(), format_cluster)


@show_app.command("datacenters")
def show_datacenters(ctx: typer.Context) -> None:
    """Show datacenters available for new deployments."""
    show_records(
        ctx,
        compose.DATACENTERS,
        lambda client: client.get_datacenters(),
        format_datacenter,
    )


@show_app.command("databases")
def show_databases(ctx: typer.Context) -> None:
    """Show database types and their versions."""
    show_records(ctx, compose.DATABASES, lambda client: client.get_databases(), format_database)


@show_app.command("user")
def show_user(ctx: typer.Context) -> None:
    """Show current associated user."""
    show_record(ctx, compose.USER, lambda client: client.get_user(), format_user)
