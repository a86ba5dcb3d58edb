"""Chat command: try a chatbot in the terminal."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from menuflow.cli.commands.flow import document_from_config, load_config_or_exit
from menuflow.core.errors import ConfigError, FlowError, FlowValidationError
from menuflow.runtime.simulator import FlowSimulator, SimulatorStatus

app = typer.Typer(help="Start an interactive chatbot preview")
console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("exit", "quit", "sair", "q")


def print_messages(messages: list[str]) -> None:
    for message in messages:
        console.print(Panel(message, border_style="cyan", title="Bot", title_align="left"))


@app.callback(invoke_without_command=True)
def run_chat(
    ctx: typer.Context,
    config: Path = typer.Option(
        Path("chatbot.yaml"), "--config", "-c", help="Path to chatbot.yaml or config directory"
    ),
) -> None:
    """Start interactive chat session."""
    if ctx and ctx.invoked_subcommand:
        return

    chatbot = load_config_or_exit(config)
    try:
        document = document_from_config(chatbot)
    except (ConfigError, FlowValidationError) as e:
        console.print(f"[red]Cannot build flow: {e}[/]")
        raise typer.Exit(1)

    simulator = FlowSimulator(
        document,
        fallback_message=chatbot.form.fallback_message,
        max_attempts=chatbot.form.max_attempts,
        company_name=chatbot.company_name,
    )

    console.print(f"[italic green]Preview of '{chatbot.name}'. Type 'sair' to end.[/]\n")
    try:
        print_messages(simulator.start())
        while simulator.is_active:
            user_input = Prompt.ask("[bold green]Você[/]")
            if user_input.strip().lower() in EXIT_WORDS:
                console.print("[yellow]Ending conversation...[/]")
                break
            print_messages(simulator.reply(user_input))
    except FlowError as e:
        console.print(f"[red]Flow error: {e}[/]")
        raise typer.Exit(1)

    logger.info(
        "Preview finished",
        extra={"chatbot": chatbot.name, "status": simulator.status.value},
    )
    if simulator.status == SimulatorStatus.abandoned:
        console.print("[yellow]Conversation abandoned after too many invalid replies.[/]")
