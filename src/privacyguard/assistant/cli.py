"""
CLI commands for the privacy assistant.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.progress import Progress, SpinnerColumn, TextColumn

from privacyguard.assistant.client import AssistantClient
from privacyguard.assistant.models import ChatHistory
from privacyguard.config import GuardConfig

console = Console()

# Messages kept from earlier turns when talking to the assistant
HISTORY_LIMIT = 20

EXIT_WORDS = {"exit", "quit", "bye"}


def _build_client(ctx: click.Context) -> AssistantClient:
    ctx.ensure_object(dict)
    config = ctx.obj.get("config") or GuardConfig.from_env()
    return AssistantClient(
        api_key=config.ai_api_key,
        model=config.ai_model,
        timeout=config.request_timeout,
        user_agent=config.user_agent,
    )


@click.group()
@click.pass_context
def assistant(ctx: click.Context) -> None:
    """PrivacyGuard AI - ask questions about breaches and privacy.

    Set PRIVACYGUARD_AI_API_KEY (or GEMINI_API_KEY) to enable the assistant.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


@assistant.command("ask")
@click.argument("message")
@click.pass_context
def ask(ctx: click.Context, message: str) -> None:
    """Ask the assistant a single question.

    Example:
        privacyguard assistant ask "What should I do after a breach?"
    """
    if not message.strip():
        console.print("[red]Message must not be empty[/red]")
        raise SystemExit(1)

    client = _build_client(ctx)

    async def _ask():
        async with client:
            return await client.reply(ChatHistory(), message)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Thinking...", total=None)
        reply = asyncio.run(_ask())

    console.print(Markdown(reply))


@assistant.command("chat")
@click.pass_context
def chat(ctx: click.Context) -> None:
    """Start an interactive conversation.

    Type 'exit' or 'quit' to leave.
    """
    client = _build_client(ctx)
    if not client.is_configured:
        console.print("[yellow]AI assistant is not configured; replies will be limited.[/yellow]")

    console.print("[bold]PrivacyGuard AI[/bold] - ask me about data breaches and online privacy.")

    async def _turn(history: ChatHistory, message: str) -> str:
        return await client.reply(history, message)

    loop = asyncio.new_event_loop()
    history = ChatHistory()
    try:
        while True:
            try:
                message = click.prompt("[you]", prompt_suffix=" ").strip()
            except (EOFError, click.Abort):
                break

            if not message:
                continue
            if message.lower() in EXIT_WORDS:
                break

            reply = loop.run_until_complete(_turn(history.truncated(HISTORY_LIMIT), message))
            console.print(Markdown(reply))
            history = history.with_exchange(message, reply).truncated(HISTORY_LIMIT)
    finally:
        loop.run_until_complete(client.close())
        loop.close()

    console.print("[dim]Goodbye.[/dim]")


def add_assistant_commands(main_cli):
    """Add assistant commands to main CLI."""
    main_cli.add_command(assistant)
