"""Typed operations for the Compose API.

:class:`ComposeClient` maps each remote resource to a method that issues
one request through :class:`~cocli.client.sync_client.SyncClient` and
parses the body into the matching record from :mod:`cocli.models`. List
resources are unwrapped from their HAL envelope. :meth:`ComposeClient.fetch`
returns the unmodified body for callers that want to pass it through.

Errors are raised as :class:`~cocli.exceptions.CocliError` subclasses and
never terminate the process, so the client can be reused outside the CLI.
"""

from __future__ import annotations

import json
from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from cocli.client.sync_client import SyncClient
from cocli.exceptions import NotFoundError, ResponseParseError
from cocli.models import (
    Account,
    AccountsResponse,
    ClientConfig,
    Cluster,
    ClustersResponse,
    CreateDeploymentParams,
    Database,
    DatabasesResponse,
    Datacenter,
    DatacentersResponse,
    Deployment,
    DeploymentsResponse,
    Recipe,
    RecipesResponse,
    User,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Resource paths, relative to the versioned base URL.
ACCOUNTS = "accounts"
DEPLOYMENTS = "deployments"
CLUSTERS = "clusters"
DATACENTERS = "datacenters"
DATABASES = "databases"
USER = "user"


def deployment_path(deployment_id: str) -> str:
    return f"deployments/{deployment_id}"


def deployment_recipes_path(deployment_id: str) -> str:
    return f"deployments/{deployment_id}/recipes"


def recipe_path(recipe_id: str) -> str:
    return f"recipes/{recipe_id}"


def parse_body(body: str, model: type[ModelT]) -> ModelT:
    """Parse a JSON response body into *model*.

    Missing fields take their defaults; a body that is not a JSON document
    of the right shape raises :class:`~cocli.exceptions.ResponseParseError`.
    """
    try:
        return model.model_validate(json.loads(body))
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Response is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise ResponseParseError(
            f"Unexpected response shape for {model.__name__}: {exc}"
        ) from exc


class ComposeClient:
    """Client for the Compose REST API.

    Args:
        config: Token, base URL and request settings, usually from
            :func:`cocli.config.resolve_config`.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`).

    Example::

        with ComposeClient(resolve_config()) as compose:
            for deployment in compose.get_deployments():
                print(deployment.name)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = SyncClient(config, transport=transport)

    def __enter__(self) -> ComposeClient:
        self._http.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._http.__exit__(*args)

    # ------------------------------------------------------------------ #
    # Generic access
    # ------------------------------------------------------------------ #

    def fetch(self, path: str) -> str:
        """Return the raw body of ``GET <path>``."""
        return self._http.get(path).text

    def fetch_typed(self, path: str, model: type[ModelT]) -> ModelT:
        """Return ``GET <path>`` parsed into *model*."""
        return parse_body(self.fetch(path), model)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def get_accounts(self) -> list[Account]:
        return self.fetch_typed(ACCOUNTS, AccountsResponse).items

    def get_account(self) -> Account:
        """Return the account the token belongs to.

        The API answers with a collection; the first entry is the account.

        Raises:
            NotFoundError: If the collection is empty.
        """
        accounts = self.get_accounts()
        if not accounts:
            raise NotFoundError("No account is associated with this token")
        return accounts[0]

    def get_deployments(self) -> list[Deployment]:
        return self.fetch_typed(DEPLOYMENTS, DeploymentsResponse).items

    def get_deployment(self, deployment_id: str) -> Deployment:
        return self.fetch_typed(deployment_path(deployment_id), Deployment)

    def get_recipe(self, recipe_id: str) -> Recipe:
        return self.fetch_typed(recipe_path(recipe_id), Recipe)

    def get_recipes_for_deployment(self, deployment_id: str) -> list[Recipe]:
        return self.fetch_typed(deployment_recipes_path(deployment_id), RecipesResponse).items

    def get_clusters(self) -> list[Cluster]:
        return self.fetch_typed(CLUSTERS, ClustersResponse).items

    def get_datacenters(self) -> list[Datacenter]:
        return self.fetch_typed(DATACENTERS, DatacentersResponse).items

    def get_databases(self) -> list[Database]:
        return self.fetch_typed(DATABASES, DatabasesResponse).items

    def get_user(self) -> User:
        return self.fetch_typed(USER, User)

    def create_deployment(self, params: CreateDeploymentParams) -> Deployment:
        """Create a deployment.

        A rejection reported in the body's ``errors`` object (quota exceeded,
        unknown database type, ...) is returned on the record's ``error``
        attribute rather than raised, whatever the HTTP status. An error
        status without such a body is raised like any other failed call.

        Args:
            params: The new deployment's parameters.

        Returns:
            The created :class:`~cocli.models.Deployment`, or one whose
            ``error`` is set.
        """
        response = self._http.post(DEPLOYMENTS, json_body=params.to_payload(), check_status=False)
        if response.status_code >= 400:
            try:
                deployment = parse_body(response.text, Deployment)
            except ResponseParseError:
                deployment = Deployment()
            if not deployment.error:
                self._http.raise_for_status(response)
            return deployment
        return parse_body(response.text, Deployment)
