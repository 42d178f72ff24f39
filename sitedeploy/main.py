#!/usr/bin/env python3
"""SiteDeploy CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: colored CLI help
import rich_click as click

from sitedeploy import __version__
from sitedeploy.commands import deploy, doctor, init

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"

console = Console()

BANNER = """
[bold magenta]╔════════════════════════════════════════╗[/bold magenta]
[bold magenta]║[/bold magenta]  [bold white]SiteDeploy[/bold white] - static site deployment   [bold magenta]║[/bold magenta]
[bold magenta]╚════════════════════════════════════════╝[/bold magenta]
"""


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    SiteDeploy - publish index.html and styles.css over rsync, safely.

    \b
    Quick Start:
      sitedeploy init      # Write .env.example and .env
      sitedeploy doctor    # Check tools and configuration
      sitedeploy check     # Run every safety check, transfer nothing
      sitedeploy deploy    # Check, then rsync the site
    """
    if ctx.invoked_subcommand is None:
        console.print(BANNER)
        console.print("[yellow]Run 'sitedeploy --help' for usage[/yellow]\n")


cli.add_command(deploy.deploy)
cli.add_command(deploy.check)
cli.add_command(init.init)
cli.add_command(doctor.doctor)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
