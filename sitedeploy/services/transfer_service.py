"""Transfer service: rsync of the site files to the remote host."""

import subprocess
from pathlib import Path
from typing import Iterable

from sitedeploy.constants import REQUIRED_FILES
from sitedeploy.exceptions import TransferError
from sitedeploy.models.config import DeployConfig
from sitedeploy.models.results import ExecutionResult


class TransferService:
    """Mirrors exactly the allow-listed files to the configured destination."""

    def __init__(
        self,
        config: DeployConfig,
        site_dir: Path,
        files: Iterable[str] = REQUIRED_FILES,
        logger=None,
    ):
        """
        Initialize transfer service.

        Args:
            config: Deployment configuration
            site_dir: Local directory that is synced
            files: Names allowed through the include/exclude filter
            logger: Optional DeployLogger receiving commands and output
        """
        self.config = config
        self.site_dir = Path(site_dir)
        self.files = tuple(files)
        self.logger = logger

    def build_command(self) -> list[str]:
        """
        Build the rsync invocation.

        Each file gets an --include rule, then --exclude=* drops everything
        else, so nothing outside the allow-list is ever sent.
        """
        filters = [f"--include={name}" for name in self.files]
        return [
            "rsync",
            "-avz",
            "--progress",
            *filters,
            "--exclude=*",
            "-e",
            self.config.ssh_command,
            "./",
            self.config.destination,
        ]

    def sync(self) -> ExecutionResult:
        """
        Run rsync, streaming its progress to the terminal.

        Returns:
            ExecutionResult of the rsync process

        Raises:
            TransferError: If rsync could not be started
        """
        rsync_cmd = self.build_command()
        command = " ".join(rsync_cmd)
        if self.logger:
            self.logger.log_command(command)

        try:
            process = subprocess.Popen(
                rsync_cmd,
                cwd=str(self.site_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise TransferError(f"Could not start rsync: {e}", context=command)

        # Verbose loggers echo output themselves
        echo = not (self.logger and self.logger.verbose)

        output_lines = []
        for line in process.stdout:
            line_stripped = line.rstrip()
            output_lines.append(line_stripped)
            if echo:
                print(line_stripped, flush=True)
            if self.logger:
                self.logger.log_output(line_stripped, "stdout")
        returncode = process.wait()

        return ExecutionResult(
            returncode=returncode,
            stdout="\n".join(output_lines),
            command=command,
        )
