"""Helpers shared by the ``show`` and ``create`` command groups.

Commands read the global flags stored by :func:`~cocli.app.main_callback`
in ``ctx.obj``, open a :class:`~cocli.client.ComposeClient` with the
resolved configuration, and hand records to :func:`emit_record` or
:func:`emit_records`, which pick the output mode:

* ``--raw`` -- the response body, re-indented (handled by the callers
  before any parsing happens);
* ``--fmt`` -- fixed-label text from :mod:`cocli.render`;
* otherwise -- indented JSON of the parsed record.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence, TypeVar

import typer

from cocli.client import ComposeClient
from cocli.config import resolve_config
from cocli.exceptions import CocliError
from cocli.models import ClientConfig, ComposeModel
from cocli.output import error, print_data, print_json, print_json_text

RecordT = TypeVar("RecordT", bound=ComposeModel)


def build_client(config: ClientConfig) -> ComposeClient:
    """Create the API client for a command invocation."""
    return ComposeClient(config)


def options(ctx: typer.Context) -> dict[str, Any]:
    """Return the global flags stored by the root callback."""
    return ctx.obj if isinstance(ctx.obj, dict) else {}


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn a :class:`~cocli.exceptions.CocliError` into an error message and exit code."""
    try:
        yield
    except CocliError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@contextmanager
def open_client(ctx: typer.Context) -> Iterator[ComposeClient]:
    """Resolve configuration and open a client.

    Raises:
        ConfigError: If no bearer token is available. Nothing has been
            sent at that point.
    """
    config = resolve_config(cli_base_url=options(ctx).get("base_url"))
    with build_client(config) as client:
        yield client


def emit_record(ctx: typer.Context, record: RecordT, render: Callable[[RecordT], str]) -> None:
    if options(ctx).get("fmt"):
        print_data(render(record))
    else:
        print_json(record.to_json_data())


def emit_records(
    ctx: typer.Context,
    records: Sequence[RecordT],
    render: Callable[[RecordT], str],
) -> None:
    if options(ctx).get("fmt"):
        for record in records:
            print_data(render(record))
            print_data("")
    else:
        print_json([record.to_json_data() for record in records])


def show_record(
    ctx: typer.Context,
    path: str,
    load: Callable[[ComposeClient], RecordT],
    render: Callable[[RecordT], str],
) -> None:
    """Fetch one record from *path* and print it in the selected mode."""
    with exit_on_error():
        with open_client(ctx) as client:
            if options(ctx).get("raw"):
                print_json_text(client.fetch(path))
                return
            record = load(client)
        emit_record(ctx, record, render)


def show_records(
    ctx: typer.Context,
    path: str,
    load: Callable[[ComposeClient], Sequence[RecordT]],
    render: Callable[[RecordT], str],
) -> None:
    """Fetch a collection from *path* and print it in the selected mode."""
    with exit_on_error():
        with open_client(ctx) as client:
            if options(ctx).get("raw"):
                print_json_text(client.fetch(path))
                return
            records = load(client)
        emit_records(ctx, records, render)
