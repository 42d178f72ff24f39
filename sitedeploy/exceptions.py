"""
SiteDeploy Exception Hierarchy

Every fatal condition of a deployment is raised as one of these and
rendered once by the command runner.
"""

from typing import Optional


class SiteDeployError(Exception):
    """Base exception for all SiteDeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(SiteDeployError):
    """Raised when the .env configuration is missing or incomplete."""

    pass


class MissingConfigKeysError(ConfigurationError):
    """Raised when required configuration keys are unset or empty."""

    def __init__(self, missing_keys: list[str], config_path: str):
        self.missing_keys = missing_keys
        message = f"Missing required configuration: {', '.join(missing_keys)}"
        context = f"Set them in {config_path}"
        super().__init__(message, context)


class RepositoryError(SiteDeployError):
    """Raised when the site directory is not in a deployable git state."""

    pass


class WrongBranchError(RepositoryError):
    """Raised when the checked-out branch is not the deploy branch."""

    def __init__(self, current_branch: str, deploy_branch: str):
        self.current_branch = current_branch
        self.deploy_branch = deploy_branch
        shown = current_branch or "(detached HEAD)"
        message = f"Not on {deploy_branch} branch! Currently on: {shown}"
        context = f"Please switch to {deploy_branch} before deploying"
        super().__init__(message, context)


class DeploymentCancelled(SiteDeployError):
    """Raised when the operator declines to deploy a dirty working tree."""

    pass


class RemoteSyncError(SiteDeployError):
    """Raised when remote git state cannot be fetched."""

    pass


class StaleBranchError(RemoteSyncError):
    """Raised when the local branch is strictly behind its upstream."""

    def __init__(self, deploy_branch: str):
        self.deploy_branch = deploy_branch
        message = "Local is behind remote! Please pull latest changes"
        context = f"Run: git pull origin {deploy_branch}"
        super().__init__(message, context)


class MissingArtifactsError(SiteDeployError):
    """Raised when one or more deployable files are absent."""

    def __init__(self, missing_files: list[str], site_dir: str):
        self.missing_files = missing_files
        message = f"Missing required files: {' '.join(missing_files)}"
        context = f"Site directory: {site_dir}"
        super().__init__(message, context)


class SSHError(SiteDeployError):
    """Raised when an SSH invocation cannot be started."""

    pass


class TransferError(SiteDeployError):
    """Raised when the rsync transfer fails."""

    pass
