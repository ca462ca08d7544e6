"""
PrivacyGuard CLI - Main entry point for the command-line interface.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from privacyguard import __version__
from privacyguard.config import GuardConfig

console = Console()


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="privacyguard")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """PrivacyGuard - Personal Data Exposure Checker

    Find out which known breaches mention your email, phone number or
    username, see how risky that exposure is, check passwords safely and
    request removal of your data.
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj.setdefault("config", GuardConfig.from_env())


@main.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show configuration and API key status."""
    config: GuardConfig = ctx.obj["config"]
    settings = config.to_dict()

    table = Table(title="PrivacyGuard Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Breach Source", settings["breach_source"])
    table.add_row(
        "HIBP API Key",
        "[green]Set[/green]" if settings["hibp_api_key_set"] else "[red]Not set[/red]",
    )
    table.add_row(
        "AI API Key",
        "[green]Set[/green]" if settings["ai_api_key_set"] else "[red]Not set[/red]",
    )
    table.add_row("AI Model", settings["ai_model"])
    table.add_row("Request Timeout", f"{settings['request_timeout']}s")
    table.add_row("User Agent", settings["user_agent"])
    table.add_row("Profile Path", settings["profile_path"])

    console.print(table)

    errors = config.validate()
    for error in errors:
        console.print(f"[yellow]Warning: {error}[/yellow]")


# Import and register subcommand groups
from privacyguard.exposure.cli import add_exposure_commands
from privacyguard.assistant.cli import add_assistant_commands
from privacyguard.takedown.cli import add_takedown_commands
from privacyguard.profile.cli import add_profile_commands

add_exposure_commands(main)
add_assistant_commands(main)
add_takedown_commands(main)
add_profile_commands(main)


if __name__ == "__main__":
    main()
