"""Flow document commands: build, validate, options."""

import os
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from menuflow.config.loader import ConfigLoader
from menuflow.config.models import ChatbotConfig
from menuflow.config.settings import Settings
from menuflow.core.errors import (
    ConfigError,
    FlowValidationError,
    MalformedDocumentError,
)
from menuflow.flow.builder import build_flow_from_menu
from menuflow.flow.models import FlowDocument
from menuflow.flow.reverse import derive_menu_options_from_flow
from menuflow.flow.validator import load_flow_text, parse_flow_text, validate_flow_document

app = typer.Typer(help="Build, validate and inspect flow documents")
console = Console()


def document_from_config(config: ChatbotConfig) -> FlowDocument:
    """Produce the flow document an authoring file describes."""
    if config.mode == "raw":
        return validate_flow_document(config.flow)
    config.form.require_options()
    return build_flow_from_menu(config.form)


def load_config_or_exit(path: Path) -> ChatbotConfig:
    try:
        return ConfigLoader.load(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    except yaml.YAMLError as e:
        console.print(f"[red]Invalid YAML in {path}: {e}[/]")
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"[red]Invalid chatbot config: {e}[/]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid chatbot config in {path}:[/]\n{escape(str(e))}")
        raise typer.Exit(1)


def load_settings_or_exit() -> Settings:
    """Read ``MENUFLOW_*`` settings from the environment."""
    try:
        return Settings.from_env(dict(os.environ))
    except ValidationError as e:
        console.print(f"[red]Invalid MENUFLOW_* settings:[/]\n{escape(str(e))}")
        raise typer.Exit(1)


def read_text_or_exit(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/]")
        raise typer.Exit(1)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        console.print(f"[red]Malformed document:[/] {path} is not UTF-8 text ({e.reason})")
        raise typer.Exit(1)


@app.command()
def build(
    config: Path = typer.Option(
        Path("chatbot.yaml"), "--config", "-c", help="Path to chatbot.yaml or config directory"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON here"),
):
    """Build the flow document described by an authoring file."""
    chatbot = load_config_or_exit(config)

    try:
        document = document_from_config(chatbot)
    except (ConfigError, FlowValidationError) as e:
        console.print(f"[red]Cannot build flow: {e}[/]")
        raise typer.Exit(1)

    text = document.to_json()
    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Flow written to {output}[/] ({len(document.steps)} steps)")


@app.command()
def validate(
    path: Path = typer.Argument(..., help="JSON flow document"),
):
    """Check that a flow document can be run."""
    text = read_text_or_exit(path)

    try:
        document = load_flow_text(text)
    except MalformedDocumentError as e:
        console.print(f"[red]Malformed document:[/] {e}")
        raise typer.Exit(1)
    except FlowValidationError as e:
        console.print(f"[red]Invalid flow:[/] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Valid flow[/] ({len(document.steps)} steps, start: {document.start_step})"
    )


@app.command()
def options(
    path: Path = typer.Argument(..., help="JSON flow document"),
):
    """Show the menu options the guided builder would load."""
    text = read_text_or_exit(path)

    try:
        data = parse_flow_text(text)
    except MalformedDocumentError as e:
        console.print(f"[red]Malformed document:[/] {e}")
        raise typer.Exit(1)

    rows = derive_menu_options_from_flow(data)
    if not rows:
        console.print("[yellow]No builder options found (no main_menu step).[/]")
        return

    table = Table(title="Menu options")
    table.add_column("#")
    table.add_column("Text")
    table.add_column("Reply")
    for row in rows:
        table.add_row(row.id, row.text, row.reply)
    console.print(table)
