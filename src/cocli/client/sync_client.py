"""Synchronous HTTP client with bearer auth and error mapping.

This module provides :class:`SyncClient`, the blocking transport used by
:class:`~cocli.client.compose.ComposeClient`. It wraps
:class:`httpx.Client` and layers on:

- **Auth injection** -- ``Authorization: Bearer <token>`` on every request,
  taken from the :class:`~cocli.models.ClientConfig` it was built with.
- **Error mapping** -- network failures and HTTP error statuses become
  :class:`~cocli.exceptions.CocliError` subclasses.
- **Debug tracing** -- method, URL and status are written to stderr in
  ``--verbose`` mode.

Each call makes exactly one request. There is no retry and no caching.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from cocli.exceptions import AuthError, ConnectionError_, NotFoundError, ServerError
from cocli.models import ClientConfig, DeploymentErrors
from cocli.output import debug


class SyncClient:
    """Synchronous HTTP client for Compose API calls.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: Token, base URL and request settings.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests. ``None`` uses the default network transport.

    Example::

        with SyncClient(config) as client:
            response = client.get("accounts")
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            base_url=self._config.base_url,
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self._config.token}",
                "Accept": "application/json",
            },
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        check_status: bool = True,
    ) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST).
            path: Resource path relative to the configured base URL.
            json_body: JSON-serialisable body (sets Content-Type automatically).
            check_status: When ``True``, HTTP error statuses are raised as
                exceptions. Callers that read errors out of the body pass
                ``False`` and call :meth:`raise_for_status` themselves.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On any other status >= 400.
            ConnectionError_: On network / timeout errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        kwargs: dict[str, Any] = {"method": method, "url": path}
        if json_body is not None:
            kwargs["json"] = json_body

        debug(f"{method} {self._client.base_url.join(path)}")
        try:
            response = self._client.request(**kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Connection failed: {exc}") from exc
        debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

        if check_status:
            self.raise_for_status(response)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request.

        Args:
            path: Resource path relative to the base URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request.

        Args:
            path: Resource path relative to the base URL.
            **kwargs: Forwarded to :meth:`request`.
        """
        return self.request("POST", path, **kwargs)

    @staticmethod
    def raise_for_status(response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        # Try to extract an error message from the response body.
        try:
            detail = response.json()
            if isinstance(detail, dict):
                msg = detail.get("error") or detail.get("message") or detail.get("errors") or ""
                if isinstance(msg, dict):
                    msg = DeploymentErrors.model_validate(msg).message
                elif not isinstance(msg, str):
                    msg = str(msg)
            else:
                msg = str(detail)
        except ValueError:
            msg = response.text[:200] if response.text else ""

        full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"

        if status in (401, 403):
            raise AuthError(full_msg)
        if status == 404:
            raise NotFoundError(full_msg)
        raise ServerError(full_msg)
