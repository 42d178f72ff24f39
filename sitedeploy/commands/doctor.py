"""SiteDeploy - Doctor command"""

import shutil
from pathlib import Path

import click
from rich.table import Table

from sitedeploy.base import BaseCommand
from sitedeploy.constants import REQUIRED_TOOLS
from sitedeploy.exceptions import ConfigurationError
from sitedeploy.services import ArtifactService, ConfigService


class DoctorCommand(BaseCommand):
    """Tooling and configuration diagnostics."""

    def __init__(self, site_dir: Path = None, env_file: Path = None, console=None):
        super().__init__(site_dir=site_dir, console=console)
        self.env_file = env_file
        self.problems = 0
        self.table = Table(
            title="System Health Report", title_justify="left", padding=(0, 1)
        )
        self.table.add_column("Check", style="cyan", no_wrap=True)
        self.table.add_column("Status")
        self.table.add_column("Details", style="dim")

    def check_tools(self) -> None:
        """Check required tools installation."""
        for tool in REQUIRED_TOOLS:
            location = shutil.which(tool)
            if location:
                self.table.add_row(f"✅ {tool}", "[green]Installed[/green]", location)
            else:
                self.problems += 1
                self.table.add_row(
                    f"❌ {tool}", "[red]Missing[/red]", f"Install {tool} and retry"
                )

    def check_configuration(self) -> None:
        try:
            config = ConfigService(self.site_dir, env_file=self.env_file).load()
        except ConfigurationError as e:
            self.problems += 1
            self.table.add_row("❌ Configuration", "[red]Invalid[/red]", e.message)
            return

        self.table.add_row(
            "✅ Configuration",
            "[green]Valid[/green]",
            f"{config.display_destination} ({config.deploy_branch})",
        )

    def check_files(self) -> None:
        missing = ArtifactService(self.site_dir).find_missing()
        if missing:
            self.problems += 1
            self.table.add_row(
                "❌ Site files", "[red]Missing[/red]", ", ".join(missing)
            )
        else:
            self.table.add_row("✅ Site files", "[green]Present[/green]", "")

    def execute(self) -> None:
        """Execute doctor command."""
        self.show_header(
            title="System Diagnostics",
            subtitle="Checking tools, configuration and site files",
            details={"Site": self.site_dir},
        )

        self.check_tools()
        self.check_configuration()
        self.check_files()

        self.console.print(self.table)
        self.console.print()

        if self.problems:
            self.print_error(f"{self.problems} problem(s) found")
            raise SystemExit(1)
        self.print_success("Ready to deploy")


@click.command()
@click.option(
    "--site-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory containing the site and its .env",
)
@click.option(
    "--env-file",
    "-e",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: <site-dir>/.env)",
)
def doctor(site_dir, env_file):
    """
    Health check & diagnostics

    Checks:
    - git, ssh and rsync are installed
    - Configuration loads and has every required key
    - index.html and styles.css exist
    """
    cmd = DoctorCommand(site_dir=site_dir, env_file=env_file)
    cmd.run()
