"""Implementation of the `richdoc rules` command."""

from __future__ import annotations

from rich.table import Table

from ....conversion import HtmlConverter
from ..state import get_cli_state


def rules() -> None:
    """List the registered conversion rules per tag."""
    converter = HtmlConverter()
    table = Table(title="Conversion rules")
    table.add_column("Kind")
    table.add_column("Tag")
    table.add_column("Rule")
    table.add_column("Priority", justify="right")

    for entry in converter.engine.registry.describe():
        if not entry["active"]:
            continue
        table.add_row(
            str(entry["kind"]).lower(),
            str(entry["tag"]),
            str(entry["name"]),
            str(entry["priority"]),
        )

    get_cli_state().console.print(table)


__all__ = ["rules"]
