"""Typer application and CLI entry point for cocli.

This module wires together the top-level Typer application, declares the
global output flags (``--raw``, ``--fmt``, ``--fullca``) and registers the
``show`` and ``create`` sub-command groups.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`cocli.config`: Token and base URL resolution.
    :mod:`cocli.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from cocli import __version__
from cocli.commands.create import create_app
from cocli.commands.show import show_app
from cocli.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="cocli",
    help="A Compose CLI application.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(show_app, name="show", help="Show attribute.")
app.add_typer(create_app, name="create", help="Create resources.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"cocli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    raw: bool = typer.Option(
        False, "--raw", help="Output raw JSON responses."
    ),
    fmt: bool = typer.Option(
        False, "--fmt", help="Format output for readability."
    ),
    fullca: bool = typer.Option(
        False, "--fullca", help="Show all of CA Certificates."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", hidden=True, help="Override the API base URL."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~cocli.output.OutputManager` from CLI
    flags and stores the output-mode flags in the Typer context so that
    sub-commands can read them via ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        raw: Print response bodies as received, re-indented.
        fmt: Print records as fixed-label text instead of JSON.
        fullca: Do not shorten CA certificates in formatted output.
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level diagnostic output.
        base_url: API base URL override (highest precedence).
    """
    from cocli.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["raw"] = raw
    ctx.obj["fmt"] = fmt
    ctx.obj["fullca"] = fullca
    ctx.obj["base_url"] = base_url


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from cocli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``cocli`` console script.

    Commands convert :class:`~cocli.exceptions.CocliError` into an exit
    code themselves; anything that still escapes here is reported the same
    way. All other exceptions produce a crash log and a generic failure
    exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from cocli.exceptions import CocliError
        from cocli.output import error

        if isinstance(exc, CocliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
