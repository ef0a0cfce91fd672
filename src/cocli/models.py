"""Canonical Pydantic models shared across all cocli modules.

The models fall into three groups:

**Resource records** -- parsed from Compose API responses:
    :class:`Link`, :class:`Account`, :class:`ConnectionStrings`,
    :class:`Deployment`, :class:`Recipe`, :class:`Cluster`,
    :class:`Datacenter`, :class:`Version`, :class:`Database`, and
    :class:`User`.

**HAL envelopes** -- list responses wrap their records in an
``_embedded`` object keyed by resource name. Each envelope exposes the
unwrapped list through its ``items`` property:
    :class:`AccountsResponse`, :class:`DeploymentsResponse`,
    :class:`RecipesResponse`, :class:`ClustersResponse`,
    :class:`DatacentersResponse`, and :class:`DatabasesResponse`.

**Request / configuration models**:
    :class:`CreateDeploymentParams` and :class:`ClientConfig`.

Parsing is best-effort: absent, ``null`` and mistyped fields fall back to
zero-value defaults, ``null`` list entries are skipped and unknown fields
are ignored, so a partial response still produces a usable record. Fields whose wire names start with an underscore
(``_embedded``, ``_links``) are declared through aliases and serialised
back under their wire names by :meth:`ComposeModel.to_json_data`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

DEFAULT_BASE_URL = "https://api.compose.io/2016-07/"


class ComposeModel(BaseModel):
    """Base class for every record parsed from the Compose API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null means "not set": let the field default apply.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        """Validate one field, keeping its default when the value does not fit.

        ``null`` entries are removed from lists first. If some other entries
        still fail, they are dropped and the rest of the list is kept.
        """
        if isinstance(value, list):
            value = [item for item in value if item is not None]
        try:
            return handler(value)
        except ValidationError as exc:
            if isinstance(value, list):
                bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
                kept = [item for i, item in enumerate(value) if i not in bad]
                try:
                    return handler(kept)
                except ValidationError:
                    pass
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)

    def to_json_data(self) -> dict[str, Any]:
        """Return a JSON-compatible dict using the API's field names."""
        return self.model_dump(mode="json", by_alias=True)


# --- HAL ---


class Link(ComposeModel):
    """A HAL hypermedia link.

    ``href`` may still contain an RFC 6570 template such as ``{?embed}``
    when ``templated`` is true; see :func:`cocli.render.strip_link_template`.
    """

    href: str = ""
    templated: bool = False


class Envelope(ComposeModel):
    """Base class for ``{"_embedded": {"<key>": [...]}}`` list responses.

    A missing ``_embedded`` object or a missing key yields an empty
    ``items`` list rather than an error.
    """


# --- Accounts ---


class Account(ComposeModel):
    id: str = ""
    slug: str = ""
    name: str = ""


class _AccountList(ComposeModel):
    accounts: list[Account] = Field(default_factory=list)


class AccountsResponse(Envelope):
    embedded: _AccountList = Field(default_factory=_AccountList, alias="_embedded")

    @property
    def items(self) -> list[Account]:
        return self.embedded.accounts


# --- Deployments ---


class ConnectionStrings(ComposeModel):
    """Connection endpoints reported for a deployment."""

    health: str = ""
    ssh: str = ""
    admin: str = ""
    ssh_admin: str = ""
    cli: list[str] = Field(default_factory=list)
    direct: list[str] = Field(default_factory=list)


class DeploymentErrors(ComposeModel):
    """Semantic errors reported by the API instead of a deployment.

    The API either sends a single ``error`` message or a mapping of
    field names to messages (``{"name": ["is already taken"]}``); the
    latter are kept as extra fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    error: str = ""

    @property
    def message(self) -> str:
        """Single-line description of the reported errors, or ``""``."""
        if self.error:
            return self.error
        parts = []
        for field, detail in (self.model_extra or {}).items():
            if isinstance(detail, list):
                detail = ", ".join(str(d) for d in detail)
            parts.append(f"{field}: {detail}")
        return "; ".join(parts)


class DeploymentLinks(ComposeModel):
    compose_web_ui: Link = Field(default_factory=Link)


class Deployment(ComposeModel):
    """A provisioned database deployment.

    When creation is rejected by the API, the record carries the reason in
    :attr:`error` and every other field is left at its default.
    """

    errors: DeploymentErrors = Field(default_factory=DeploymentErrors)
    id: str = ""
    name: str = ""
    type: str = ""
    created_at: Optional[datetime] = None
    provision_recipe_id: str = ""
    ca_certificate_base64: str = ""
    connection_strings: ConnectionStrings = Field(default_factory=ConnectionStrings)
    links: DeploymentLinks = Field(default_factory=DeploymentLinks, alias="_links")

    @field_validator("errors", mode="before")
    @classmethod
    def _errors_from_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"error": value}
        return value

    @property
    def error(self) -> str:
        """The server-reported error message, empty when the request succeeded."""
        return self.errors.message


class _DeploymentList(ComposeModel):
    deployments: list[Deployment] = Field(default_factory=list)


class DeploymentsResponse(Envelope):
    embedded: _DeploymentList = Field(default_factory=_DeploymentList, alias="_embedded")

    @property
    def items(self) -> list[Deployment]:
        return self.embedded.deployments


# --- Recipes ---


class _RecipeList(ComposeModel):
    recipes: list[Recipe] = Field(default_factory=list)


class Recipe(ComposeModel):
    """A provisioning or maintenance job; recipes embed their child recipes."""

    id: str = ""
    template: str = ""
    status: str = ""
    status_detail: str = ""
    account_id: str = ""
    deployment_id: str = ""
    name: str = ""
    created_at: Optional[datetime] = None
    embedded: _RecipeList = Field(default_factory=_RecipeList, alias="_embedded")

    @property
    def children(self) -> list[Recipe]:
        return self.embedded.recipes


_RecipeList.model_rebuild()
Recipe.model_rebuild()


class RecipesResponse(Envelope):
    embedded: _RecipeList = Field(default_factory=_RecipeList, alias="_embedded")

    @property
    def items(self) -> list[Recipe]:
        return self.embedded.recipes


# --- Clusters ---


class Cluster(ComposeModel):
    id: str = ""
    account_id: str = ""
    account_slug: str = ""
    name: str = ""
    type: str = ""
    provider: str = ""
    region: str = ""
    multitenant: bool = False
    created_at: Optional[datetime] = None
    subdomain: str = ""


class _ClusterList(ComposeModel):
    clusters: list[Cluster] = Field(default_factory=list)


class ClustersResponse(Envelope):
    embedded: _ClusterList = Field(default_factory=_ClusterList, alias="_embedded")

    @property
    def items(self) -> list[Cluster]:
        return self.embedded.clusters


# --- Datacenters ---


class Datacenter(ComposeModel):
    region: str = ""
    provider: str = ""
    slug: str = ""


class _DatacenterList(ComposeModel):
    datacenters: list[Datacenter] = Field(default_factory=list)


class DatacentersResponse(Envelope):
    embedded: _DatacenterList = Field(default_factory=_DatacenterList, alias="_embedded")

    @property
    def items(self) -> list[Datacenter]:
        return self.embedded.datacenters


# --- Databases ---


class Version(ComposeModel):
    """One available version of a database type."""

    application: str = ""
    status: str = ""
    preferred: bool = False
    version: str = ""


class _VersionList(ComposeModel):
    versions: list[Version] = Field(default_factory=list)


class Database(ComposeModel):
    """A database type offered by the catalog, with its available versions."""

    database_type: str = Field(default="", alias="type")
    status: str = ""
    embedded: _VersionList = Field(default_factory=_VersionList, alias="_embedded")

    @property
    def versions(self) -> list[Version]:
        return self.embedded.versions


class _DatabaseList(ComposeModel):
    applications: list[Database] = Field(default_factory=list)


class DatabasesResponse(Envelope):
    embedded: _DatabaseList = Field(default_factory=_DatabaseList, alias="_embedded")

    @property
    def items(self) -> list[Database]:
        return self.embedded.applications


# --- User ---


class User(ComposeModel):
    id: str = ""


# --- Request models ---


class CreateDeploymentParams(BaseModel):
    """Body of ``POST /deployments``.

    Either ``cluster_id`` or ``datacenter`` must be provided for the API to
    place the deployment; the CLI checks this before sending. Unset
    optional fields are left out of the payload.
    """

    name: str
    account_id: str
    database_type: str = Field(alias="type")
    cluster_id: Optional[str] = None
    datacenter: Optional[str] = None
    version: Optional[str] = None
    units: Optional[int] = None
    ssl: Optional[bool] = None
    wired_tiger: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON request body, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- Client configuration ---


class ClientConfig(BaseModel):
    """Settings needed to talk to the Compose API.

    Produced by :func:`cocli.config.resolve_config` and passed to
    :class:`~cocli.client.ComposeClient`, so several clients with
    different tokens or base URLs can coexist.
    """

    token: str = Field(description="Bearer token sent on every request")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Versioned API root")
    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class ConfigFile(BaseModel):
    """Optional user settings stored at ``<config_dir>/config.json``."""

    base_url: Optional[str] = None
    timeout: Optional[float] = None
    verify_ssl: Optional[bool] = None
    token_source: Optional[str] = Field(
        default=None,
        description="Where to read the token when COMPOSEAPITOKEN is unset: env:VAR or file:/path",
    )
