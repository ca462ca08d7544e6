"""
CLI commands for breach scans and password checks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json
import random

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from privacyguard.config import BreachSourceType, GuardConfig
from privacyguard.exposure.models import ActionPriority, RiskLevel
from privacyguard.exposure.passwords import PasswordCheckError, PwnedPasswordsClient
from privacyguard.exposure.sources import (
    BreachSource,
    HIBPBreachSource,
    SampleBreachSource,
    scan_identity,
)

console = Console()


def risk_color(risk: RiskLevel) -> str:
    """Get color for risk level."""
    colors = {
        RiskLevel.LOW: "green",
        RiskLevel.MEDIUM: "yellow",
        RiskLevel.HIGH: "red",
        RiskLevel.CRITICAL: "bold red",
    }
    return colors.get(risk, "white")


def priority_color(priority: ActionPriority) -> str:
    colors = {
        ActionPriority.HIGH: "red",
        ActionPriority.MEDIUM: "yellow",
        ActionPriority.LOW: "cyan",
    }
    return colors.get(priority, "white")


def _get_config(ctx: click.Context) -> GuardConfig:
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = GuardConfig.from_env()
    return ctx.obj["config"]


def build_breach_source(
    config: GuardConfig,
    source_type: BreachSourceType,
    seed: int | None = None,
) -> BreachSource:
    """Create the breach source selected on the command line or in config."""
    if source_type == BreachSourceType.HIBP:
        return HIBPBreachSource(
            api_key=config.hibp_api_key,
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        )
    return SampleBreachSource(rng=random.Random(seed))


# =============================================================================
# Breach Scan
# =============================================================================

@click.command("scan")
@click.argument("query")
@click.option(
    "--source",
    "source_name",
    type=click.Choice([s.value for s in BreachSourceType]),
    help="Breach data source (default from PRIVACYGUARD_BREACH_SOURCE)",
)
@click.option("--seed", type=int, help="Random seed for the sample source")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def scan(
    ctx: click.Context,
    query: str,
    source_name: str | None,
    seed: int | None,
    json_output: bool,
) -> None:
    """Scan an email, phone number or username for breach exposure.

    Example:
        privacyguard scan user@example.com
        privacyguard scan user@example.com --source hibp
    """
    config = _get_config(ctx)
    source_type = BreachSourceType(source_name) if source_name else config.breach_source

    if not query.strip():
        console.print("[red]Query must not be empty[/red]")
        raise SystemExit(1)

    source = build_breach_source(config, source_type, seed)

    async def _scan():
        try:
            return await scan_identity(query, source)
        finally:
            if isinstance(source, HIBPBreachSource):
                await source.close()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Scanning {query}...", total=None)
        result = asyncio.run(_scan())

    if result.error:
        console.print(f"[red]Error: {result.error}[/red]")
        raise SystemExit(1)

    if json_output:
        console.print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    risk = result.risk
    color = risk_color(risk.level)

    if not result.is_breached:
        console.print(Panel(
            f"[green]Good news![/green] No breaches found for [cyan]{result.query}[/cyan]\n\n"
            f"{risk.details}",
            title="Scan Result"
        ))
        return

    console.print(Panel(
        f"[cyan]{result.query}[/cyan] found in [bold red]{result.breach_count}[/bold red] breach(es)\n\n"
        f"Risk Score: [{color}]{risk.score}/100[/{color}]\n"
        f"Risk Level: [{color}]{risk.level.value.upper()}[/{color}]\n\n"
        f"{risk.details}",
        title="Scan Result"
    ))

    if result.compromised_data_types:
        console.print("\n[bold]Compromised Data Types:[/bold]")
        console.print(", ".join(sorted(result.compromised_data_types)))

    table = Table(title="\nBreach Details")
    table.add_column("Breach", style="cyan")
    table.add_column("Domain")
    table.add_column("Date", style="yellow")
    table.add_column("Accounts", justify="right")
    table.add_column("Data Exposed")

    for breach in result.breaches:
        date_str = breach.breach_date.strftime("%Y-%m-%d") if breach.breach_date else "Unknown"
        data_types = ", ".join(breach.data_classes[:3])
        if len(breach.data_classes) > 3:
            data_types += f" (+{len(breach.data_classes) - 3})"

        table.add_row(
            breach.name,
            breach.domain or "-",
            date_str,
            f"{breach.pwn_count:,}",
            data_types,
        )

    console.print(table)

    if result.actions:
        console.print("\n[bold]Recommended Actions:[/bold]")
        for action in result.actions:
            pcolor = priority_color(action.priority)
            console.print(f"  [{pcolor}][{action.priority.value}][/{pcolor}] [bold]{action.title}[/bold]")
            console.print(f"      {action.description}")


# =============================================================================
# Password Checking
# =============================================================================

@click.command("password")
@click.option("--password", "-p", help="Password to check (or prompts securely)")
@click.option("--hash", "password_hash", help="SHA-1 hash to check instead")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def password(
    ctx: click.Context,
    password: str | None,
    password_hash: str | None,
    json_output: bool,
) -> None:
    """Check if a password has been exposed in data breaches.

    Uses k-anonymity - only the first 5 characters of the SHA-1 hash
    are sent to the API. Your password never leaves your system.

    Example:
        privacyguard password
        privacyguard password --hash 5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8
    """
    config = _get_config(ctx)

    if password is None and not password_hash:
        password = click.prompt("Password to check", hide_input=True, default="", show_default=False)

    async def _check():
        async with PwnedPasswordsClient(
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        ) as client:
            if password_hash:
                return await client.check_password_hash(password_hash)
            return await client.check_password(password)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Checking password...", total=None)
            result = asyncio.run(_check())
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)
    except PasswordCheckError:
        console.print("[red]Could not check password. Please try again later.[/red]")
        raise SystemExit(1)

    if json_output:
        console.print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    if not result.is_pwned:
        console.print(Panel(
            "[green]Good news![/green] This password has NOT been found in any known data breaches.",
            title="Password Check Result"
        ))
    else:
        console.print(Panel(
            f"[red]Warning![/red] This password has been seen [bold]{result.count:,}[/bold] times in data breaches!\n\n"
            "You should stop using it and change it everywhere it is used.",
            title="Password Check Result"
        ))


def add_exposure_commands(main_cli):
    """Add exposure commands to main CLI."""
    main_cli.add_command(scan)
    main_cli.add_command(password)
