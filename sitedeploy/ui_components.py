"""
SiteDeploy - UI Components
Standardized headers, banners and summaries
"""

from typing import Iterable

from rich.console import Console
from rich.panel import Panel

LOGO = "sitedeploy"

# Color scheme
BRAND_COLOR = "magenta"
SUCCESS_COLOR = "green"
INFO_COLOR = "blue"


def show_header(
    title: str,
    subtitle: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Deploy Site")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy Site",
            details={"Target": "deploy@example.com:/var/www", "Branch": "main"}
        )
    """
    if console is None:
        console = Console()

    console.print(
        Panel.fit(
            f"[bold white]🚀 {title}[/bold white]",
            border_style=BRAND_COLOR,
        )
    )

    if subtitle:
        console.print(
            f" [bold {BRAND_COLOR}]{LOGO}[/bold {BRAND_COLOR}] [dim]›[/dim] [dim]{subtitle}[/dim]"
        )

    if details:
        for key, value in details.items():
            console.print(
                f" [bold {BRAND_COLOR}]{LOGO}[/bold {BRAND_COLOR}] [dim]›[/dim] {key}: [cyan]{value}[/cyan]"
            )

    console.print()


def show_section(title: str, console: Console = None):
    """Print a ruled section divider (used around the transfer output)."""
    if console is None:
        console = Console()
    console.print()
    console.rule(f"[bold {INFO_COLOR}]{title}[/bold {INFO_COLOR}]", style=INFO_COLOR)


def show_deploy_summary(
    files: Iterable[str], destination: str, console: Console = None
):
    """Print the success box with the deployed files and destination."""
    if console is None:
        console = Console()

    console.print()
    console.print(
        Panel.fit(
            "[bold green]✓ Deployment Successful! 🎉[/bold green]",
            border_style=SUCCESS_COLOR,
        )
    )
    console.print("\n[cyan]📦 Deployed files:[/cyan]")
    for name in files:
        console.print(f"   • {name}")
    console.print(f"[cyan]📍 Destination:[/cyan] {destination}\n")
