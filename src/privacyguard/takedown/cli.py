"""
CLI commands for takedown requests.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json
import random
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from privacyguard.takedown.brokers import SampleBrokerSource
from privacyguard.takedown.letters import render_letter
from privacyguard.takedown.models import LetterKind, RemovalDifficulty

console = Console()


def difficulty_color(difficulty: RemovalDifficulty) -> str:
    colors = {
        RemovalDifficulty.EASY: "green",
        RemovalDifficulty.MEDIUM: "yellow",
        RemovalDifficulty.HARD: "red",
    }
    return colors.get(difficulty, "white")


@click.group()
@click.pass_context
def takedown(ctx: click.Context) -> None:
    """Takedown Request Center - reclaim your personal data.

    Generate GDPR/CCPA deletion requests and find data brokers that may
    hold your information.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


@takedown.command("letter")
@click.argument("kind", type=click.Choice([k.value for k in LetterKind]))
@click.option("--company", "-c", help="Company the request is addressed to")
@click.option("--name", "-n", help="Your full name")
@click.option("--email", "-e", help="Email address registered with the company")
@click.option("--username", "-u", help="Username (GDPR letter)")
@click.option("--address", "-a", help="Postal address (CCPA letter)")
@click.option("--output", "-o", type=click.Path(), help="Write the letter to a file")
def letter(
    kind: str,
    company: str | None,
    name: str | None,
    email: str | None,
    username: str | None,
    address: str | None,
    output: str | None,
) -> None:
    """Generate a data deletion request letter.

    Example:
        privacyguard takedown letter gdpr --company "EshopMarket" --name "Alex Doe"
    """
    text = render_letter(
        kind,
        company=company,
        name=name,
        email=email,
        username=username,
        address=address,
    )

    if output:
        Path(output).write_text(text + "\n")
        console.print(f"[green]Letter saved to {output}[/green]")
        return

    console.print(Panel(text, title=f"{kind.upper()} Deletion Request"))


@takedown.command("brokers")
@click.option("--query", "-q", default="", help="Name or email to look for")
@click.option("--seed", type=int, help="Random seed for the sample scan")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def brokers(query: str, seed: int | None, json_output: bool) -> None:
    """Scan public records for data brokers listing you.

    Example:
        privacyguard takedown brokers --query "Alex Doe"
    """
    source = SampleBrokerSource(rng=random.Random(seed))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Scanning data brokers...", total=None)
        found = asyncio.run(source.scan(query))

    if json_output:
        console.print(json.dumps([b.to_dict() for b in found], indent=2))
        return

    if not found:
        console.print("[green]Good news! We didn't find your information on the data broker sites we scanned.[/green]")
        return

    table = Table(title="Data Brokers")
    table.add_column("Broker", style="cyan")
    table.add_column("Difficulty", justify="center")
    table.add_column("Description")
    table.add_column("Removal")

    for broker in found:
        color = difficulty_color(broker.difficulty)
        table.add_row(
            broker.name,
            f"[{color}]{broker.difficulty.value}[/{color}]",
            broker.description,
            broker.removal_link,
        )

    console.print(table)


def add_takedown_commands(main_cli):
    """Add takedown commands to main CLI."""
    main_cli.add_command(takedown)
