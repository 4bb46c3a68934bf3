"""Record store inspection commands."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from persistence.record_store import parse_limit
from .shared import emit_json, preview, read_store, record_json, store_names


app = typer.Typer(
    help="Inspect persisted record stores",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.command("stats", help="Show the snapshot status of every store")
def stats(
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    rows = []
    for name in store_names():
        load = read_store(name)
        rows.append(
            {
                "store": name,
                "status": load.status,
                "records": len(load.records),
                "discarded": load.discarded,
            }
        )
    if json_out:
        emit_json(rows)
        return

    table = Table(title="Record stores")
    table.add_column("Store")
    table.add_column("Status")
    table.add_column("Records", justify="right")
    table.add_column("Discarded", justify="right")
    for row in rows:
        status = row["status"]
        color = {"loaded": "green", "missing": "yellow", "corrupt": "red"}.get(status, "white")
        table.add_row(
            row["store"],
            f"[{color}]{status}[/{color}]",
            str(row["records"]),
            str(row["discarded"]),
        )
    console.print(table)


@app.command("show", help="Print the newest records of one store")
def show(
    store: str = typer.Argument(..., help="Store name (intake, chat, sops, entitlements, royalties)"),
    limit: str = typer.Option("20", "--limit", "-n", help="Number of records"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
) -> None:
    load = read_store(store)
    count = parse_limit(limit, default=20, ceiling=max(len(load.records), 1))
    items = [record_json(record) for record in load.records[:count]]
    if json_out:
        emit_json(items)
        return
    if load.status != "loaded":
        console.print(f"[yellow]{store}: snapshot {load.status}[/yellow]")
    typer.echo(f"Records: {len(load.records)} (printing {len(items)})")
    for idx, item in enumerate(items, start=1):
        record_id = item.pop("id")
        fields = " ".join(f"{key}={preview(str(value))}" for key, value in item.items())
        typer.echo(f"{idx:>3}. {record_id} {fields}")
