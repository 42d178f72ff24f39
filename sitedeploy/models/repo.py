"""
Repository State Models

Snapshot of the local git state taken before a deployment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SyncStatus(Enum):
    """Relationship of the local branch to its upstream."""

    NO_UPSTREAM = "no-upstream"
    UP_TO_DATE = "up-to-date"
    BEHIND = "behind"
    AHEAD = "ahead"
    DIVERGED = "diverged"

    @property
    def is_blocking(self) -> bool:
        """Only a strictly-behind branch stops a deployment."""
        return self is SyncStatus.BEHIND

    @classmethod
    def classify(
        cls, local: str, upstream: Optional[str], merge_base: Optional[str]
    ) -> "SyncStatus":
        """
        Classify local vs upstream commits.

        Args:
            local: Commit id of HEAD
            upstream: Commit id of the upstream branch (None if unset)
            merge_base: Common ancestor of HEAD and upstream (None if unknown)

        Returns:
            Matching SyncStatus
        """
        if not upstream:
            return cls.NO_UPSTREAM
        if local == upstream:
            return cls.UP_TO_DATE
        if local == merge_base:
            return cls.BEHIND
        if upstream == merge_base:
            return cls.AHEAD
        return cls.DIVERGED


@dataclass
class RepoStatus:
    """Git state of the site directory."""

    branch: str
    is_dirty: bool
    local_commit: str = ""
    upstream_commit: Optional[str] = None
    merge_base: Optional[str] = None

    @property
    def sync_status(self) -> SyncStatus:
        return SyncStatus.classify(
            self.local_commit, self.upstream_commit, self.merge_base
        )

    def __repr__(self) -> str:
        return (
            f"RepoStatus(branch={self.branch}, dirty={self.is_dirty}, "
            f"sync={self.sync_status.value})"
        )
