"""Royalty ledger reports."""

from __future__ import annotations

from collections import defaultdict

import typer
from rich.console import Console
from rich.table import Table

from .shared import emit_json, read_store


app = typer.Typer(
    help="Royalty ledger reports",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.callback()
def ledger() -> None:
    """Reports over the persisted royalty ledger."""


@app.command("royalties", help="Total royalties owed per creator")
def royalties(
    creator: str | None = typer.Option(None, "--creator", help="Only this creator id"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    load = read_store("royalties")
    totals: dict[str, dict[str, int]] = defaultdict(lambda: {"entries": 0, "netRevenue": 0, "royalty": 0})
    for entry in load.records:
        if creator and entry.creator_id != creator:
            continue
        bucket = totals[entry.creator_id]
        bucket["entries"] += 1
        bucket["netRevenue"] += entry.net_revenue
        bucket["royalty"] += entry.royalty_amount

    if json_out:
        emit_json({creator_id: dict(values) for creator_id, values in sorted(totals.items())})
        return
    if not totals:
        console.print("[yellow]No royalty entries.[/yellow]")
        return

    table = Table(title="Royalties by creator")
    table.add_column("Creator")
    table.add_column("Entries", justify="right")
    table.add_column("Net revenue", justify="right")
    table.add_column("Royalty", justify="right")
    for creator_id, values in sorted(totals.items()):
        table.add_row(
            creator_id,
            str(values["entries"]),
            str(values["netRevenue"]),
            str(values["royalty"]),
        )
    console.print(table)
