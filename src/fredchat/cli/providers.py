"""Provider factory functions for CLI.

Centralizes creation of the config, credential source, LLM provider and
view-model from environment variables. Hides configuration details from
command implementations.
"""

import os
from datetime import datetime
from typing import Any

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..chat import ChatViewModel
from ..config import ChatConfig
from ..credentials import CredentialSource, create_credential_source
from ..llm import create_llm_provider
from ..ui.config import LOG_TIMESTAMP_FORMAT, LogLevel

# Default console for output
_console = Console()


def get_config(console: Console | None = None) -> ChatConfig:
    """Load the widget config from FREDCHAT_* environment variables.

    Raises:
        SystemExit: If a variable holds an invalid value
    """
    con = console or _console
    try:
        return ChatConfig.from_env()
    except ValidationError as e:
        con.print(f"[red]Error: invalid configuration[/red]\n{escape(str(e))}")
        raise typer.Exit(code=1)


def get_credential_source(
    config: ChatConfig,
    http_client: httpx.AsyncClient,
    console: Console | None = None,
) -> CredentialSource:
    """Create the credential source.

    Environment variables:
        FREDCHAT_API_KEY: Use this fixed key instead of the key backend
    """
    con = console or _console
    static_key = os.getenv("FREDCHAT_API_KEY")
    if static_key:
        return create_credential_source("static", api_key=static_key)

    if not config.auth_token:
        con.print("[yellow]Warning: FREDCHAT_AUTH_TOKEN not set, key backend will likely refuse requests[/yellow]")
    return create_credential_source(
        "backend",
        endpoint=config.key_endpoint,
        auth_token=config.auth_token,
        http_client=http_client,
    )


def build_view_model(
    config: ChatConfig,
    http_client: httpx.AsyncClient,
    console: Console | None = None,
) -> ChatViewModel:
    """Wire a view-model whose clients share one HTTP client."""
    credentials = get_credential_source(config, http_client, console)
    llm = create_llm_provider(
        "openai",
        model=config.model,
        base_url=config.base_url,
        http_client=http_client,
    )
    return ChatViewModel(config, credentials=credentials, llm=llm)


def console_debug_callback(console: Console, log_level: str) -> Any:
    """Build a debug callback that prints to a Rich console.

    Args:
        console: Console to print to
        log_level: Minimum level shown (debug, info, warning, error)

    Returns:
        Callable(level: str, component: str, message: str)
    """
    threshold = LogLevel.from_string(log_level)
    level_colors = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def _callback(level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < threshold:
            return
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        color = level_colors.get(numeric, "white")
        console.print(
            f"[dim]{timestamp}[/] [{color}]{LogLevel.name(numeric):<5}[/] "
            f"{escape(f'[{component}]')} {escape(message)}"
        )

    return _callback
