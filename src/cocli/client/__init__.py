"""HTTP client module for cocli.

Provides the transport wrapper and the typed API client:

Classes:
    :class:`SyncClient` -- blocking httpx wrapper with bearer auth and
    error mapping.
    :class:`ComposeClient` -- one typed method per Compose API resource.

Both are context managers and take a :class:`~cocli.models.ClientConfig`
plus an optional httpx transport.

Example::

    from cocli.client import ComposeClient

    with ComposeClient(config) as compose:
        account = compose.get_account()
"""

from cocli.client.compose import ComposeClient
from cocli.client.sync_client import SyncClient

__all__ = ["ComposeClient", "SyncClient"]
