"""
Init command - write the configuration template for a site
"""

from pathlib import Path

import click

from sitedeploy.base import BaseCommand
from sitedeploy.constants import CONFIG_FILENAME, CONFIG_TEMPLATE, CONFIG_TEMPLATE_FILENAME


class InitCommand(BaseCommand):
    """Creates .env.example and, if missing, a .env to edit."""

    def __init__(self, site_dir: Path = None, force: bool = False, console=None):
        super().__init__(site_dir=site_dir, console=console)
        self.force = force

    def write_file(self, path: Path) -> bool:
        """Write the template to path; False if it exists and force is off."""
        if path.exists() and not self.force:
            self.print_dim(f"Skipped {path.name} (already exists, use --force to overwrite)")
            return False
        path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
        self.print_success(f"Wrote {path}")
        return True

    def execute(self) -> None:
        self.show_header(title="Initialize Site", details={"Site": self.site_dir})

        self.write_file(self.site_dir / CONFIG_TEMPLATE_FILENAME)
        self.write_file(self.site_dir / CONFIG_FILENAME)

        self.console.print(f"\n[dim]Edit[/dim] {self.site_dir / CONFIG_FILENAME} [dim]then run:[/dim]")
        self.console.print("  [cyan]sitedeploy check[/cyan]")
        self.console.print("  [cyan]sitedeploy deploy[/cyan]\n")


@click.command()
@click.option(
    "--site-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory containing the site",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing files")
def init(site_dir, force):
    """
    Create .env.example and .env for a site

    \b
    Examples:
      sitedeploy init
      sitedeploy init -d ~/sites/maintenance --force
    """
    cmd = InitCommand(site_dir=site_dir, force=force)
    cmd.run()
