"""Main CLI entry point for Menuflow"""

import typer
from dotenv import load_dotenv

from menuflow.__version__ import __version__
from menuflow.cli.commands import bots as bots_module
from menuflow.cli.commands import chat as chat_module
from menuflow.cli.commands import flow as flow_module
from menuflow.observability.logging import setup_logging

app = typer.Typer(
    name="menuflow",
    help="Menuflow - WhatsApp chatbot menu flow authoring",
    add_completion=False,
)

# Register subcommands
app.add_typer(flow_module.app, name="flow", help="Build, validate and inspect flow documents")
app.add_typer(chat_module.app, name="chat", help="Try a chatbot in the terminal")
app.add_typer(bots_module.app, name="bots", help="Manage stored chatbots")


def version_callback(value: bool) -> None:
    """Print version and exit"""
    if value:
        typer.echo(f"Menuflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Log level (defaults to MENUFLOW_LOG_LEVEL or INFO)"
    ),
    log_file: str | None = typer.Option(None, "--log-file", help="Write JSON logs to this file"),
) -> None:
    """Menuflow - WhatsApp chatbot menu flow authoring"""
    load_dotenv()
    settings = flow_module.load_settings_or_exit()
    level = (log_level or settings.log_level).upper()
    try:
        setup_logging(level=level, log_file=log_file)
    except ValueError as e:
        typer.echo(f"Cannot configure logging: {e}", err=True)
        raise typer.Exit(1)


def cli() -> None:
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    cli()
