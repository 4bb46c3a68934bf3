"""Typer CLI entrypoint for PlantPilot."""

from __future__ import annotations

import logging

import typer

from cli.commands import config, ledger, stores
from plantpilot import __version__

app = typer.Typer(
    help="PlantPilot backend tools\n\nRun the API and inspect its record stores.",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=True,
)


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version and exit",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command(help="Run the HTTP API with uvicorn")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    import uvicorn

    from core.config import get_settings

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


app.add_typer(config.app, name="config")
app.add_typer(stores.app, name="stores")
app.add_typer(ledger.app, name="ledger")


def main() -> None:
    app()


__all__ = ["app", "main"]
