"""
Deployment Configuration Models

Dataclass model for the deployment target read from .env.
"""

from dataclasses import dataclass

from sitedeploy.constants import DEFAULT_DEPLOY_BRANCH, DEFAULT_SSH_PORT


@dataclass(frozen=True)
class DeployConfig:
    """Where and from which branch the site is deployed."""

    remote_user: str
    remote_host: str
    remote_path: str
    deploy_branch: str = DEFAULT_DEPLOY_BRANCH
    ssh_port: int = DEFAULT_SSH_PORT

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.remote_user}@{self.remote_host}"

    @property
    def ssh_command(self) -> str:
        """Remote shell string handed to rsync -e."""
        return f"ssh -p {self.ssh_port}"

    @property
    def destination(self) -> str:
        """Get rsync destination (user@host:path/)."""
        return f"{self.connection_string}:{self.remote_path.rstrip('/')}/"

    @property
    def display_destination(self) -> str:
        return f"{self.connection_string}:{self.remote_path}"

    def __repr__(self) -> str:
        return (
            f"DeployConfig(target={self.display_destination}, "
            f"branch={self.deploy_branch}, port={self.ssh_port})"
        )
