"""
Deploy Command

Gate a site deployment on git state, then rsync the site files.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import click

from sitedeploy.base import BaseCommand
from sitedeploy.constants import DEFAULT_GIT_REMOTE, REQUIRED_FILES
from sitedeploy.exceptions import (
    DeploymentCancelled,
    RemoteSyncError,
    RepositoryError,
    SSHError,
    StaleBranchError,
    TransferError,
    WrongBranchError,
)
from sitedeploy.models.config import DeployConfig
from sitedeploy.models.repo import RepoStatus, SyncStatus
from sitedeploy.services import (
    ArtifactService,
    ConfigService,
    GitService,
    SSHService,
    TransferService,
)
from sitedeploy.ui_components import show_deploy_summary, show_section

SYNC_MESSAGES = {
    SyncStatus.NO_UPSTREAM: "No upstream branch set",
    SyncStatus.UP_TO_DATE: "Local is up to date with remote",
    SyncStatus.AHEAD: "Local is ahead of remote (unpushed commits)",
    SyncStatus.DIVERGED: "Local and remote have diverged",
}


@dataclass
class DeployOptions:
    """Options for deploy command."""

    env_file: Optional[Path] = None
    assume_yes: bool = False
    dry_run: bool = False


class DeployCommand(BaseCommand):
    """
    Deploy the static site.

    Stages, in order (each fatal failure stops the run):
    - Load .env configuration
    - Repository, branch and working tree checks
    - Fetch and compare with upstream (only 'behind' blocks)
    - Required files present
    - SSH connectivity probe (advisory)
    - rsync transfer (skipped on dry run)
    """

    def __init__(
        self,
        options: DeployOptions,
        site_dir: Optional[Path] = None,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        console=None,
    ):
        """
        Initialize deploy command.

        Args:
            options: DeployOptions with configuration
            site_dir: Directory holding the site, its .env and git checkout
            verbose: Whether to show verbose output
            log_dir: Directory for log files (None disables file logging)
            confirm: Decision callback for a dirty working tree
            console: Rich console to print to
        """
        super().__init__(
            site_dir=site_dir, verbose=verbose, log_dir=log_dir, console=console
        )
        self.options = options
        self.ask = confirm or self.confirm
        self.files = REQUIRED_FILES
        self.config: Optional[DeployConfig] = None
        self.repo_status: Optional[RepoStatus] = None
        self.is_dirty: Optional[bool] = None

    # Service factories (overridden in tests)

    def make_config_service(self) -> ConfigService:
        return ConfigService(self.site_dir, env_file=self.options.env_file)

    def make_git_service(self) -> GitService:
        return GitService(self.site_dir, logger=self.logger)

    def make_ssh_service(self, config: DeployConfig) -> SSHService:
        return SSHService(config, logger=self.logger)

    def make_transfer_service(self, config: DeployConfig) -> TransferService:
        return TransferService(config, self.site_dir, self.files, logger=self.logger)

    def execute(self) -> None:
        """Execute deploy command."""
        operation = "check" if self.options.dry_run else "deploy"
        self.show_header(
            title="Deployment Check" if self.options.dry_run else "Starting Deployment Process",
            details={"Site": self.site_dir},
        )

        logger = self.init_logger(operation)

        config = self.load_config()
        git = self.make_git_service()
        self.validate_repository(git, config)
        self.check_remote_sync(git, config)
        self.check_artifacts()
        self.probe_connection(config)

        if self.options.dry_run:
            logger.success("All checks passed, ready to deploy")
            self.console.print(
                f"\n[dim]Run[/dim] [cyan]sitedeploy deploy[/cyan] [dim]to publish to[/dim] {config.display_destination}\n"
            )
            return

        self.transfer(config)

    def load_config(self) -> DeployConfig:
        logger = self.logger
        logger.step("Loading configuration...")
        config = self.make_config_service().load()
        logger.success(
            f"Target {config.display_destination} (branch {config.deploy_branch}, port {config.ssh_port})"
        )
        self.config = config
        return config

    def validate_repository(self, git: GitService, config: DeployConfig) -> None:
        """Repository, branch and cleanliness gates."""
        logger = self.logger

        logger.step("Checking git repository...")
        if not git.is_repository():
            raise RepositoryError(
                "Not a git repository!", context=f"Directory: {self.site_dir}"
            )
        logger.success("Git repository found")

        logger.step("Checking current branch...")
        branch = git.current_branch()
        if branch != config.deploy_branch:
            raise WrongBranchError(branch, config.deploy_branch)
        logger.success(f"On {config.deploy_branch} branch")

        logger.step("Checking for uncommitted changes...")
        self.is_dirty = git.is_dirty()
        if not self.is_dirty:
            logger.success("Working directory clean")
            return

        logger.warning("You have uncommitted changes!")
        self.console.print(git.short_status(), markup=False, highlight=False)

        if self.options.dry_run:
            return
        if self.options.assume_yes:
            logger.warning("Continuing with uncommitted changes (--yes)")
            return
        if not self.ask("Continue anyway?"):
            raise DeploymentCancelled("Deployment cancelled")
        logger.log("Operator chose to deploy a dirty working tree", "WARNING")

    def check_remote_sync(self, git: GitService, config: DeployConfig) -> SyncStatus:
        """Fetch, then refuse to deploy a branch that is strictly behind."""
        logger = self.logger

        logger.step("Fetching from remote...")
        result = git.fetch(DEFAULT_GIT_REMOTE)
        if result.is_failure:
            raise RemoteSyncError(
                "Failed to fetch from remote!", context=result.stderr.strip() or None
            )
        logger.success("Fetched latest changes")

        logger.step("Checking if local is up to date...")
        self.repo_status = git.status(
            branch=config.deploy_branch, is_dirty=self.is_dirty
        )
        sync_status = self.repo_status.sync_status

        if sync_status.is_blocking:
            raise StaleBranchError(config.deploy_branch)
        if sync_status is SyncStatus.UP_TO_DATE:
            logger.success(SYNC_MESSAGES[sync_status])
        else:
            logger.warning(SYNC_MESSAGES[sync_status])
        return sync_status

    def check_artifacts(self) -> None:
        self.logger.step("Checking required files...")
        ArtifactService(self.site_dir, self.files).ensure_present()
        self.logger.success("All required files present")

    def probe_connection(self, config: DeployConfig) -> bool:
        """Best-effort SSH handshake; never stops the deployment."""
        logger = self.logger
        logger.step(f"Testing SSH connection to {config.connection_string}...")

        try:
            result = self.make_ssh_service(config).probe()
        except SSHError as e:
            logger.warning(f"SSH connection test failed: {e.message}")
            return False

        if result.is_failure:
            logger.warning(
                "SSH connection test failed (this might be normal if you need to enter a password)"
            )
            return False

        logger.success("SSH connection successful")
        return True

    def transfer(self, config: DeployConfig) -> None:
        """The only step that changes anything on the remote host."""
        if not self.verbose:
            show_section("Deploying files to remote server", console=self.console)
        self.logger.step("Deploying files to remote server...")

        result = self.make_transfer_service(config).sync()
        if result.is_failure:
            raise TransferError(
                "Deployment failed!",
                context=f"rsync exited with status {result.returncode}",
            )

        self.logger.log(
            f"Deployed {', '.join(self.files)} to {config.display_destination}"
        )
        show_deploy_summary(self.files, config.display_destination, console=self.console)


def site_options(func):
    """Options shared by deploy and check."""
    func = click.option(
        "--log-dir",
        type=click.Path(file_okay=False, path_type=Path),
        help="Write a log file under this directory",
    )(func)
    func = click.option("--verbose", "-v", is_flag=True, help="Show all command output")(func)
    func = click.option(
        "--env-file",
        "-e",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Configuration file (default: <site-dir>/.env)",
    )(func)
    func = click.option(
        "--site-dir",
        "-d",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=".",
        show_default=True,
        help="Directory containing index.html, styles.css and .env",
    )(func)
    return func


@click.command()
@site_options
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Deploy even with uncommitted changes")
def deploy(site_dir, env_file, verbose, log_dir, assume_yes):
    """
    Deploy index.html and styles.css to the remote host

    Runs the git safety checks (branch, uncommitted changes, upstream),
    verifies both files exist, probes SSH and then rsyncs exactly the
    two files to REMOTE_USER@REMOTE_HOST:REMOTE_PATH.

    \b
    Examples:
      sitedeploy deploy
      sitedeploy deploy -d ~/sites/maintenance -v
      sitedeploy deploy --yes --log-dir ~/.sitedeploy/logs
    """
    options = DeployOptions(env_file=env_file, assume_yes=assume_yes)
    cmd = DeployCommand(options, site_dir=site_dir, verbose=verbose, log_dir=log_dir)
    cmd.run()


@click.command()
@site_options
def check(site_dir, env_file, verbose, log_dir):
    """
    Run every deployment check without transferring anything

    Uncommitted changes are reported as a warning instead of prompting.

    \b
    Examples:
      sitedeploy check
      sitedeploy check -d ~/sites/maintenance
    """
    options = DeployOptions(env_file=env_file, dry_run=True)
    cmd = DeployCommand(options, site_dir=site_dir, verbose=verbose, log_dir=log_dir)
    cmd.run()
