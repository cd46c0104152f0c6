"""Typer application wiring for the richdoc CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.traceback import Traceback
import typer

from richdoc.version import get_version

from .commands import convert, rules
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Convert HTML fragments into structured document JSON.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _configure_logging(verbosity: int) -> None:
    if verbosity < 1:
        return
    level = logging.DEBUG if verbosity >= 2 else logging.INFO
    logger = logging.getLogger("richdoc")
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(console=get_cli_state().err_console, show_path=False, show_time=False)
    )


def _print_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Print the installed version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    ctx.obj = set_cli_state(verbosity=verbose, debug=debug)
    _configure_logging(verbose)


app.command(name="convert")(convert)
app.command(name="rules")(rules)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
