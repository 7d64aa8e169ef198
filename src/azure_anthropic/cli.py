"""azure-anthropic CLI entrypoint."""

from __future__ import annotations

import click

from azure_anthropic import __version__


@click.group()
@click.version_option(version=__version__, prog_name="azure-anthropic")
def main() -> None:
    """Talk to Claude deployments on Azure AI Foundry."""


# Register subcommands
from azure_anthropic.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
