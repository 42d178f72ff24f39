"""SSH service for probing the deployment host."""

import subprocess
import time
from typing import Optional

from sitedeploy.constants import SSH_CONNECTION_TIMEOUT, SSH_PROBE_PROCESS_TIMEOUT
from sitedeploy.exceptions import SSHError
from sitedeploy.models.config import DeployConfig
from sitedeploy.models.results import SSHResult


class SSHService:
    """Service for SSH operations."""

    def __init__(self, config: DeployConfig, logger=None):
        """
        Initialize SSH service.

        Args:
            config: Deployment configuration (user, host, port)
            logger: Optional DeployLogger receiving commands and output
        """
        self.config = config
        self.logger = logger

    def build_probe_command(self) -> list[str]:
        """Non-interactive handshake: no password prompts, bounded connect."""
        return [
            "ssh",
            "-p",
            str(self.config.ssh_port),
            "-o",
            f"ConnectTimeout={SSH_CONNECTION_TIMEOUT}",
            "-o",
            "BatchMode=yes",
            self.config.connection_string,
            "exit",
        ]

    def probe(self, timeout: Optional[int] = SSH_PROBE_PROCESS_TIMEOUT) -> SSHResult:
        """
        Attempt a non-interactive SSH connection.

        Args:
            timeout: Hard limit for the ssh process in seconds

        Returns:
            SSHResult with execution details

        Raises:
            SSHError: If ssh could not be started or did not finish in time
        """
        ssh_cmd = self.build_probe_command()
        command = " ".join(ssh_cmd)
        if self.logger:
            self.logger.log_command(command)

        start_time = time.time()

        try:
            result = subprocess.run(
                ssh_cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                stdin=subprocess.DEVNULL,
            )
        except subprocess.TimeoutExpired:
            raise SSHError(
                f"SSH probe timed out after {timeout}s",
                context=f"Host: {self.config.remote_host}",
            )
        except OSError as e:
            raise SSHError(
                f"SSH probe could not start: {e}",
                context=f"Host: {self.config.remote_host}",
            )

        if self.logger:
            self.logger.log_output(result.stderr.rstrip(), "stderr")

        return SSHResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            host=self.config.remote_host,
            command=command,
            duration_seconds=time.time() - start_time,
        )
