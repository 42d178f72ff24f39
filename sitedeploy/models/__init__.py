"""
SiteDeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    SSHResult,
)
from .config import DeployConfig
from .repo import (
    RepoStatus,
    SyncStatus,
)

__all__ = [
    # Results
    "ExecutionResult",
    "SSHResult",
    # Config
    "DeployConfig",
    # Repository
    "RepoStatus",
    "SyncStatus",
]
