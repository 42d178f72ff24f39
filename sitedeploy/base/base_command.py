"""
Base Command Class

Abstract base for all SiteDeploy commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console

from sitedeploy.exceptions import SiteDeployError
from sitedeploy.logger import DeployLogger
from sitedeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling (SiteDeployError -> exit status 1)
    - Confirmation prompt
    """

    def __init__(
        self,
        site_dir: Optional[Path] = None,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        console: Optional[Console] = None,
    ):
        self.site_dir = Path(site_dir) if site_dir else Path.cwd()
        self.verbose = verbose
        self.log_dir = log_dir
        self.console = console or Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            command_name: Command name, used for the log file name

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            command_name,
            verbose=self.verbose,
            log_dir=self.log_dir,
            console=self.console,
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                subtitle=subtitle,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for user confirmation.

        Args:
            question: Question to ask
            default: Default answer

        Returns:
            True if confirmed
        """
        default_str = "y" if default else "n"
        self.console.print(
            f"[yellow]{question}[/yellow] [bold bright_white]\\[y/N][/bold bright_white] [dim]({default_str})[/dim]: ",
            end="",
        )
        try:
            answer = input().strip().lower()
        except EOFError:
            # No operator on stdin
            self.console.print()
            return default

        if not answer:
            return default

        return answer in ["y", "yes"]

    def handle_error(self, error: Exception, context: Optional[str] = None) -> None:
        """
        Handle error with consistent formatting.

        Args:
            error: Exception object
            context: Optional context message
        """
        if isinstance(error, SiteDeployError):
            message, context = error.message, context or error.context
        else:
            message = str(error)

        if self.logger:
            self.logger.log_error(message, context=context)
        else:
            self.print_error(message)
            if context:
                self.print_dim(context)

    def _print_log_location(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._print_log_location()
            raise SystemExit(130)
        except SystemExit:
            raise
        except SiteDeployError as e:
            self.handle_error(e)
            self._print_log_location()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n")
            if self.logger:
                self.logger.log(f"{error_type}: {e}", "ERROR")
            self._print_log_location()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
