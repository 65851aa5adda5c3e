"""Main CLI application using Typer."""
import asyncio

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .providers import build_view_model, console_debug_callback, get_config

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="fredchat",
    help="Chat widget for an LLM completion API with per-request key retrieval",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat widget."""
    async def _tui():
        from ..ui import run_textual_tui

        config = get_config(console)
        async with httpx.AsyncClient() as http_client:
            view_model = build_view_model(config, http_client, console)
            await run_textual_tui(view_model, log_level=log_level)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print log messages at or above this level (debug, info, warning, error)"
    ),
):
    """Interactive console chat over the same view-model."""
    async def _chat():
        config = get_config(console)
        async with httpx.AsyncClient() as http_client:
            view_model = build_view_model(config, http_client, console)
            if log_level is not None:
                view_model.set_debug_callback(console_debug_callback(console, log_level))

            console.print("[bold cyan]Fred Chat[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
            for message in view_model.messages:
                console.print(f"[bold green]{escape(config.bot_label)}:[/bold green] {escape(message.text)}\n")

            while True:
                try:
                    user_input = console.input(f"[bold yellow]{escape(config.user_label)}:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                view_model.user_input = user_input
                before = len(view_model.messages)
                with console.status("[dim]Thinking...[/dim]"):
                    accepted = await view_model.send_message()
                if not accepted:
                    continue

                if view_model.error_occurred:
                    console.print(f"[red]{escape(view_model.custom_error_message or '')}[/red]\n")
                    continue
                for message in view_model.messages[before:]:
                    if not message.user:
                        console.print(
                            f"[bold green]{escape(config.bot_label)}:[/bold green] {escape(message.text)}\n"
                        )

    asyncio.run(_chat())


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
    html: bool = typer.Option(
        False,
        "--html",
        help="Print the reply as the formatted HTML fragment"
    ),
):
    """Send one message and print the reply."""
    async def _ask() -> bool:
        config = get_config(console)
        async with httpx.AsyncClient() as http_client:
            view_model = build_view_model(config, http_client, console)
            accepted = await view_model.send_message(message)
            if not accepted:
                console.print("[yellow]Nothing to send.[/yellow]")
                return False
            if view_model.error_occurred:
                console.print(f"[red]Error: {escape(view_model.custom_error_message or '')}[/red]")
                return False
            if html:
                # Plain print: the fragment must not pass through Rich markup
                print(view_model.formatted_response)
            else:
                console.print(escape(view_model.messages[-1].text))
            return True

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
