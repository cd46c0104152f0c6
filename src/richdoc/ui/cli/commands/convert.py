"""Implementation of the `richdoc convert` command."""

from __future__ import annotations

from pathlib import Path
import sys

from pydantic import ValidationError
import typer

from ....conversion import HtmlConverter
from ....core.config import MAX_DEPTH_LIMIT, ConverterConfig
from ....core.exceptions import ParseFailure
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state


def convert(
    input_path: Path | None = typer.Argument(
        None,
        metavar="INPUT",
        help="HTML file to convert. Reads standard input when omitted or '-'.",
        dir_okay=False,
        allow_dash=True,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the document JSON to this file instead of stdout.",
        dir_okay=False,
    ),
    parser: str = typer.Option(
        "html.parser",
        "--parser",
        help='BeautifulSoup parser backend to use (defaults to "html.parser").',
    ),
    max_depth: int = typer.Option(
        64,
        "--max-depth",
        min=1,
        max=MAX_DEPTH_LIMIT,
        help="Flatten inline formatting nested deeper than this to plain text.",
    ),
    encoding: str = typer.Option(
        "utf-8",
        "--encoding",
        help="Encoding of the input file.",
    ),
    indent: int | None = typer.Option(
        None,
        "--indent",
        min=0,
        help="Pretty-print the JSON output with the given indentation.",
    ),
) -> None:
    """Convert an HTML fragment into a document JSON tree."""
    try:
        config = ConverterConfig(parser=parser, max_depth=max_depth, encoding=encoding)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if input_path is None or str(input_path) == "-":
        payload = sys.stdin.buffer.read()
    else:
        try:
            payload = input_path.read_bytes()
        except OSError as exc:
            emit_error(f"Unable to read '{input_path}'", exception=exc)
            raise typer.Exit(code=1) from exc

    converter = HtmlConverter(config)
    emitter = CliEmitter(get_cli_state())
    try:
        document = converter.convert(payload, emitter=emitter)
    except ParseFailure as exc:
        # Already reported through the emitter.
        if emitter.debug_enabled:
            raise
        raise typer.Exit(code=1) from exc

    rendered = document.to_json(indent=indent)
    if output is None:
        typer.echo(rendered)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered + "\n", encoding="utf-8")


__all__ = ["convert"]
