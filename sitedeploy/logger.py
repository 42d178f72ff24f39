"""
Logging system for SiteDeploy
Provides step-by-step console narration with optional log files
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.console import Console

from sitedeploy.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for deployment operations
    - Shows clean progress UI in console (unless verbose)
    - Writes all output to a log file when a log directory is given
    - Captures errors with context
    """

    def __init__(
        self,
        operation: str,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        console: Console = console,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'deploy', 'check')
            verbose: If True, show raw log lines instead of the step UI
            log_dir: Directory for log files (None disables file logging)
            console: Rich console to print to
        """
        self.operation = operation
        self.verbose = verbose
        self.console = console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        if log_dir is not None:
            # Structure: {log_dir}/{date}/{time}_{operation}.log
            now = datetime.now()
            day_dir = Path(log_dir) / now.strftime(LOG_DATE_FORMAT)
            day_dir.mkdir(parents=True, exist_ok=True)
            self.log_path = day_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

            # Line buffered so the file is readable while a transfer runs
            self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")
            self._write_log_header()

    def _write_log_header(self):
        header = f"""
{"=" * 80}
SiteDeploy Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        if self.log_file:
            timestamp = datetime.now().strftime("%H:%M:%S")
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{message}[/dim]")
            else:
                self.console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log captured command output

        Always written to the log file; shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        if self.log_file:
            clean_output = ANSI_ESCAPE.sub("", output)
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")

        if self.verbose:
            self.console.print(output, markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Remediation hint or failing command
        """
        self.has_errors = True

        if self.log_file:
            error_block = f"\n{'!' * 80}\nERROR OCCURRED\n{'!' * 80}\n{error}\n"
            if context:
                error_block += f"\nContext: {context}\n"
            error_block += f"{'!' * 80}\n\n"
            self.log_file.write(error_block)

        # Errors always reach the console, even if not verbose
        self.console.print(f"[bold red]✗ {error}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{context}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(f"[cyan]➜[/cyan] [white]{step_name}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [green]✓[/green] {message}")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] {message}")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        if exc_type is not None and exc_type is not SystemExit and not self.has_errors:
            self.has_errors = True
            self.log(f"{exc_type.__name__}: {exc_val}", "ERROR")
        self.close()
        return False  # Don't suppress exceptions
