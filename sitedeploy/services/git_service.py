"""Git service for inspecting the site repository."""

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from sitedeploy.constants import DEFAULT_GIT_REMOTE
from sitedeploy.exceptions import RepositoryError
from sitedeploy.models.repo import RepoStatus
from sitedeploy.models.results import ExecutionResult


class GitService:
    """Read-only git queries plus fetch, run inside the site directory."""

    def __init__(self, repo_dir: Path, logger=None):
        """
        Initialize git service.

        Args:
            repo_dir: Working directory for every git invocation
            logger: Optional DeployLogger receiving commands and output
        """
        self.repo_dir = Path(repo_dir)
        self.logger = logger

    def run_git(self, args: Sequence[str]) -> ExecutionResult:
        """
        Run a git command and capture its output.

        Args:
            args: Arguments after 'git'

        Returns:
            ExecutionResult (non-zero exit codes are not raised)

        Raises:
            RepositoryError: If git itself is not installed
        """
        command = ["git", *args]
        if self.logger:
            self.logger.log_command(" ".join(command))

        try:
            result = subprocess.run(
                command,
                cwd=str(self.repo_dir),
                check=False,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError:
            raise RepositoryError(
                "git executable not found", context="Install git and retry"
            )

        if self.logger:
            self.logger.log_output(result.stdout.rstrip(), "stdout")
            self.logger.log_output(result.stderr.rstrip(), "stderr")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=" ".join(command),
        )

    def is_repository(self) -> bool:
        return self.run_git(["rev-parse", "--git-dir"]).is_success

    def current_branch(self) -> str:
        """Name of the checked-out branch ('' when HEAD is detached)."""
        result = self.run_git(["branch", "--show-current"])
        if result.is_failure:
            raise RepositoryError(
                "Could not determine current branch", context=result.stderr.strip()
            )
        return result.stdout.strip()

    def is_dirty(self) -> bool:
        """True if the working tree differs from HEAD."""
        return self.run_git(["diff-index", "--quiet", "HEAD", "--"]).is_failure

    def short_status(self) -> str:
        return self.run_git(["status", "--short"]).stdout.rstrip()

    def fetch(self, remote: str = DEFAULT_GIT_REMOTE) -> ExecutionResult:
        return self.run_git(["fetch", remote])

    def rev_parse(self, ref: str) -> Optional[str]:
        """Resolve a ref to a commit id, None if it does not resolve."""
        result = self.run_git(["rev-parse", ref])
        if result.is_failure:
            return None
        return result.stdout.strip() or None

    def merge_base(self, first: str, second: str) -> Optional[str]:
        result = self.run_git(["merge-base", first, second])
        if result.is_failure:
            return None
        return result.stdout.strip() or None

    def status(
        self, branch: Optional[str] = None, is_dirty: Optional[bool] = None
    ) -> RepoStatus:
        """
        Snapshot branch, cleanliness and upstream relationship.

        Call after fetch() so the upstream commit is current.

        Args:
            branch: Branch name already read (queried again if None)
            is_dirty: Cleanliness already checked (queried again if None)
        """
        upstream = self.rev_parse("@{u}")
        return RepoStatus(
            branch=self.current_branch() if branch is None else branch,
            is_dirty=self.is_dirty() if is_dirty is None else is_dirty,
            local_commit=self.rev_parse("@") or "",
            upstream_commit=upstream,
            merge_base=self.merge_base("@", "@{u}") if upstream else None,
        )
