"""
SiteDeploy Services Layer

Wrappers around git, ssh and rsync plus configuration loading.
"""

from .config_service import ConfigService
from .git_service import GitService
from .ssh_service import SSHService
from .artifact_service import ArtifactService
from .transfer_service import TransferService

__all__ = [
    "ConfigService",
    "GitService",
    "SSHService",
    "ArtifactService",
    "TransferService",
]
