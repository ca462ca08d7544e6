"""
CLI commands for the local user profile.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from privacyguard.config import GuardConfig
from privacyguard.exposure.cli import build_breach_source
from privacyguard.exposure.risk import privacy_grade
from privacyguard.exposure.sources import HIBPBreachSource, scan_identity
from privacyguard.profile.models import NotificationPreferences
from privacyguard.profile.storage import JsonFileStorage
from privacyguard.profile.store import ProfileStore

console = Console()

FLAG_LABELS = {
    "new_breach_alerts": "New Breach Alerts",
    "weekly_summary": "Weekly Summary Reports",
    "security_tips": "Security Tips & News",
}


def _get_config(ctx: click.Context) -> GuardConfig:
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = GuardConfig.from_env()
    return ctx.obj["config"]


def _get_store(ctx: click.Context) -> ProfileStore:
    config = _get_config(ctx)
    return ProfileStore(JsonFileStorage(config.get_profile_path()))


@click.group()
@click.pass_context
def profile(ctx: click.Context) -> None:
    """Manage your local PrivacyGuard profile."""
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


@profile.command("show")
@click.option("--grade", is_flag=True, help="Scan your email and show your privacy grade")
@click.option("--seed", type=int, help="Random seed for the sample breach source")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, grade: bool, seed: int | None, json_output: bool) -> None:
    """Show your profile and notification preferences."""
    user = _get_store(ctx).load()

    privacy = None
    if grade:
        if not user.email.strip():
            console.print("[red]Error: No email address set. Use: profile set --email[/red]")
            raise SystemExit(1)

        config = _get_config(ctx)
        source = build_breach_source(config, config.breach_source, seed)

        async def _scan():
            try:
                return await scan_identity(user.email, source)
            finally:
                if isinstance(source, HIBPBreachSource):
                    await source.close()

        result = asyncio.run(_scan())
        if result.error:
            console.print(f"[red]Error: {result.error}[/red]")
            raise SystemExit(1)
        privacy = privacy_grade(result.breach_count)

    if json_output:
        data = user.to_dict()
        if privacy:
            data["privacy_grade"] = {"grade": privacy.grade, "description": privacy.description}
        console.print(json.dumps(data, indent=2))
        return

    body = f"[bold]{user.name}[/bold]\n{user.email}"
    if privacy:
        body += f"\n\nOverall Privacy Grade: [bold]{privacy.grade}[/bold]\n{privacy.description}"
    console.print(Panel(body, title="My Profile"))

    table = Table(title="Notification Preferences")
    table.add_column("Flag", style="cyan")
    table.add_column("Setting")
    table.add_column("Enabled", justify="center")

    for flag, enabled in user.notifications.to_dict().items():
        table.add_row(
            flag,
            FLAG_LABELS[flag],
            "[green]Yes[/green]" if enabled else "[dim]No[/dim]",
        )

    console.print(table)


@profile.command("set")
@click.option("--name", "-n", help="Full name")
@click.option("--email", "-e", help="Email address")
@click.pass_context
def set_profile(ctx: click.Context, name: str | None, email: str | None) -> None:
    """Update your name or email address."""
    if name is None and email is None:
        console.print("[yellow]Nothing to change. Use --name or --email.[/yellow]")
        return

    if email is not None and "@" not in email:
        console.print(f"[red]Invalid email address: {email}[/red]")
        raise SystemExit(1)

    user = _get_store(ctx).update(name=name, email=email)
    console.print(f"[green]Saved![/green] {user.name} <{user.email}>")


@profile.command("notify")
@click.argument("flag", type=click.Choice(NotificationPreferences.flag_names()))
@click.argument("state", type=click.Choice(["on", "off"]))
@click.pass_context
def notify(ctx: click.Context, flag: str, state: str) -> None:
    """Turn a notification on or off.

    Example:
        privacyguard profile notify weekly_summary on
    """
    _get_store(ctx).set_notification(flag, state == "on")
    console.print(f"[green]Saved![/green] {FLAG_LABELS[flag]}: {state}")


def add_profile_commands(main_cli):
    """Add profile commands to main CLI."""
    main_cli.add_command(profile)
