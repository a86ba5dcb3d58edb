"""Chatbot record commands backed by the file store."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from menuflow.cli.commands.flow import (
    load_config_or_exit,
    load_settings_or_exit,
    read_text_or_exit,
)
from menuflow.core.errors import (
    ConfigError,
    FlowValidationError,
    MalformedDocumentError,
    RecordNotFoundError,
)
from menuflow.editor.editor import ChatbotEditor
from menuflow.store.backends import StoreFactory

app = typer.Typer(help="Manage stored chatbots")
console = Console()


def get_editor(store: Path | None) -> ChatbotEditor:
    settings = load_settings_or_exit()
    if store is not None:
        settings = settings.model_copy(update={"store_path": str(store)})
    return ChatbotEditor(StoreFactory.create(settings), settings=settings)


StoreOption = typer.Option(None, "--store", "-s", help="Chatbot store directory")


@app.command()
def create(
    chatbot_id: str = typer.Argument(..., help="Chatbot identifier"),
    config: Path = typer.Option(
        Path("chatbot.yaml"), "--config", "-c", help="Path to chatbot.yaml or config directory"
    ),
    store: Path | None = StoreOption,
):
    """Create (or replace) a chatbot from an authoring file."""
    chatbot = load_config_or_exit(config)
    editor = get_editor(store)
    try:
        record = editor.create(chatbot_id, chatbot)
    except (ConfigError, FlowValidationError) as e:
        console.print(f"[red]Cannot create chatbot: {e}[/]")
        raise typer.Exit(1)
    steps = len(record.flow_config.steps) if record.flow_config else 0
    console.print(f"[green]Chatbot '{record.id}' saved[/] ({steps} steps)")


@app.command("list")
def list_bots(store: Path | None = StoreOption):
    """List stored chatbots."""
    records = get_editor(store).store.list_all()
    if not records:
        console.print("[yellow]No chatbots stored.[/]")
        return

    table = Table(title="Chatbots")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Steps")
    for record in records:
        steps = str(len(record.flow_config.steps)) if record.flow_config else "-"
        table.add_row(record.id, record.name, record.company_name, steps)
    console.print(table)


@app.command()
def show(
    chatbot_id: str = typer.Argument(..., help="Chatbot identifier"),
    store: Path | None = StoreOption,
):
    """Print the builder fields recovered from a stored chatbot."""
    try:
        session = get_editor(store).open_for_edit(chatbot_id)
    except (RecordNotFoundError, ConfigError) as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    form = session.form
    console.print(f"[bold]Greeting:[/] {form.greeting_message}")
    console.print(f"[bold]Menu:[/] {form.menu_message}")
    for option in form.options:
        console.print(f"  {option.id}. {option.text} -> {option.reply}")
    if not form.options:
        console.print("[yellow]Flow does not map to builder options.[/]")


@app.command("set-flow")
def set_flow(
    chatbot_id: str = typer.Argument(..., help="Chatbot identifier"),
    path: Path = typer.Argument(..., help="JSON flow document"),
    store: Path | None = StoreOption,
):
    """Replace a chatbot's flow with a hand-written document."""
    text = read_text_or_exit(path)
    editor = get_editor(store)
    try:
        record = editor.save_from_raw(chatbot_id, text)
    except (RecordNotFoundError, ConfigError) as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    except MalformedDocumentError as e:
        console.print(f"[red]Malformed document:[/] {e}")
        raise typer.Exit(1)
    except FlowValidationError as e:
        console.print(f"[red]Invalid flow:[/] {e}")
        raise typer.Exit(1)
    steps = len(record.flow_config.steps) if record.flow_config else 0
    console.print(f"[green]Flow of '{record.id}' replaced[/] ({steps} steps)")
