"""Fixed-label text rendering for ``--fmt`` output.

Each record is rendered as a block of ``label: value`` lines with the label
right-aligned in a 15-character column::

                 ID: 5755c9c2b9fd7a0016000009
               Name: production-mongo
               Type: mongodb

Every function here returns a string and performs no I/O; the command layer
decides where it goes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Union

from cocli.models import (
    Account,
    Cluster,
    Database,
    Datacenter,
    Deployment,
    Link,
    Recipe,
    User,
)

LABEL_WIDTH = 15
CA_PREFIX_LENGTH = 32
LINK_TEMPLATE = "{?embed}"

FieldValue = Union[str, int, bool, datetime, None, list[str]]


def strip_link_template(href: str) -> str:
    """Remove the unresolved ``{?embed}`` template from a HAL link."""
    return href.replace(LINK_TEMPLATE, "")


def link_href(link: Link) -> str:
    return strip_link_template(link.href)


def truncate_certificate(certificate: str, full: bool = False) -> str:
    """Shorten a base64 CA certificate to its first 32 characters plus ``...``.

    Certificates that already fit are returned unchanged, as is everything
    when *full* is set.
    """
    if full or len(certificate) <= CA_PREFIX_LENGTH:
        return certificate
    return certificate[:CA_PREFIX_LENGTH] + "..."


def _value(value: FieldValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def format_fields(fields: Iterable[tuple[str, FieldValue]]) -> str:
    """Render ``(label, value)`` pairs as right-aligned label lines."""
    return "\n".join(f"{label:>{LABEL_WIDTH}}: {_value(value)}" for label, value in fields)


def format_account(account: Account) -> str:
    return format_fields([
        ("ID", account.id),
        ("Name", account.name),
        ("Slug", account.slug),
    ])


def format_deployment_summary(deployment: Deployment) -> str:
    """Short block used when listing deployments."""
    return format_fields([
        ("ID", deployment.id),
        ("Name", deployment.name),
        ("Type", deployment.type),
        ("Created At", deployment.created_at),
        ("Web UI Link", link_href(deployment.links.compose_web_ui)),
    ])


def format_deployment(deployment: Deployment, full_ca: bool = False) -> str:
    """Full block for a single deployment, including connection strings.

    The provisioning recipe and CA certificate lines are only present when
    the API reported them.
    """
    fields: list[tuple[str, FieldValue]] = [
        ("ID", deployment.id),
        ("Name", deployment.name),
        ("Type", deployment.type),
        ("Created At", deployment.created_at),
    ]
    if deployment.provision_recipe_id:
        fields.append(("Prov Recipe ID", deployment.provision_recipe_id))
    if deployment.ca_certificate_base64:
        fields.append(
            ("CA Certificate", truncate_certificate(deployment.ca_certificate_base64, full_ca))
        )
    conn = deployment.connection_strings
    fields += [
        ("Web UI Link", link_href(deployment.links.compose_web_ui)),
        ("Health", conn.health),
        ("SSH", conn.ssh),
        ("Admin", conn.admin),
        ("SSHAdmin", conn.ssh_admin),
        ("CLI Connect", conn.cli),
        ("Direct Connect", conn.direct),
    ]
    return format_fields(fields)


def format_recipe(recipe: Recipe) -> str:
    return format_fields([
        ("ID", recipe.id),
        ("Template", recipe.template),
        ("Status", recipe.status),
        ("Status Detail", recipe.status_detail),
        ("Account ID", recipe.account_id),
        ("Deployment ID", recipe.deployment_id),
        ("Name", recipe.name),
        ("Child Recipes", len(recipe.children)),
    ])


def format_cluster(cluster: Cluster) -> str:
    return format_fields([
        ("ID", cluster.id),
        ("Account ID", cluster.account_id),
        ("Account Slug", cluster.account_slug),
        ("Name", cluster.name),
        ("Type", cluster.type),
        ("Multitenant", cluster.multitenant),
        ("Provider", cluster.provider),
        ("Region", cluster.region),
        ("Created At", cluster.created_at),
        ("Subdomain", cluster.subdomain),
    ])


def format_datacenter(datacenter: Datacenter) -> str:
    return format_fields([
        ("Region", datacenter.region),
        ("Provider", datacenter.provider),
        ("Slug", datacenter.slug),
    ])


def format_database(database: Database) -> str:
    # Preferred versions are starred.
    versions = [v.version + ("*" if v.preferred else "") for v in database.versions]
    return format_fields([
        ("Type", database.database_type),
        ("Status", database.status),
        ("Versions", versions),
    ])


def format_user(user: User) -> str:
    return format_fields([("ID", user.id)])
