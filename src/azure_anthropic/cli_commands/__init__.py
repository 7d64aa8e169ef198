"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from azure_anthropic.cli_commands.generate import generate
    from azure_anthropic.cli_commands.stream import stream

    cli.add_command(generate)
    cli.add_command(stream)
