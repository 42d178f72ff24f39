import io
import shutil
import subprocess
from pathlib import Path

import pytest
from rich.console import Console

from sitedeploy.commands.deploy import DeployCommand, DeployOptions
from sitedeploy.models.repo import RepoStatus
from sitedeploy.models.results import ExecutionResult, SSHResult
from sitedeploy.services.config_service import CONFIG_KEYS

ENV_TEXT = """\
REMOTE_USER=deploy
REMOTE_HOST=example.com
REMOTE_PATH=/var/www/html
"""

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git required")


@pytest.fixture(autouse=True)
def clean_config_environ(monkeypatch):
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def site_dir(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    (site / ".env").write_text(ENV_TEXT)
    (site / "index.html").write_text("<html></html>\n")
    (site / "styles.css").write_text("body {}\n")
    return site


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


def console_text(console):
    return console.file.getvalue()


class FakeGit:
    """Stands in for GitService and records which git operations ran."""

    def __init__(
        self,
        repository=True,
        branch="main",
        dirty=False,
        fetch_ok=True,
        local="c1",
        upstream="c1",
        base="c1",
    ):
        self.repository = repository
        self.branch = branch
        self.dirty = dirty
        self.fetch_ok = fetch_ok
        self.local = local
        self.upstream = upstream
        self.base = base
        self.calls = []

    def is_repository(self):
        self.calls.append("is_repository")
        return self.repository

    def current_branch(self):
        self.calls.append("current_branch")
        return self.branch

    def is_dirty(self):
        self.calls.append("is_dirty")
        return self.dirty

    def short_status(self):
        return " M index.html"

    def fetch(self, remote="origin"):
        self.calls.append("fetch")
        return ExecutionResult(
            returncode=0 if self.fetch_ok else 128,
            stderr="" if self.fetch_ok else "fatal: could not read from remote",
            command=f"git fetch {remote}",
        )

    def status(self, branch=None, is_dirty=None):
        self.calls.append("status")
        self.status_args = (branch, is_dirty)
        return RepoStatus(
            branch=self.branch if branch is None else branch,
            is_dirty=self.dirty if is_dirty is None else is_dirty,
            local_commit=self.local,
            upstream_commit=self.upstream,
            merge_base=self.base,
        )


class FakeSSH:
    def __init__(self, returncode=0, error=None):
        self.returncode = returncode
        self.error = error
        self.probed = False

    def probe(self):
        self.probed = True
        if self.error:
            raise self.error
        return SSHResult(returncode=self.returncode, host="example.com")


class FakeTransfer:
    def __init__(self, service, returncode=0):
        self.service = service
        self.returncode = returncode
        self.command = None

    def sync(self):
        self.command = self.service.build_command()
        return ExecutionResult(returncode=self.returncode, command=" ".join(self.command))


class RecordingDeployCommand(DeployCommand):
    """DeployCommand wired to fakes instead of git, ssh and rsync."""

    def __init__(self, *args, git=None, ssh=None, transfer_returncode=0, **kwargs):
        super().__init__(*args, **kwargs)
        self.git = git or FakeGit()
        self.ssh = ssh or FakeSSH()
        self.transfer_returncode = transfer_returncode
        self.transfer_service = None
        self.git_created = False
        self.prompts = []

    def make_git_service(self):
        self.git_created = True
        return self.git

    def make_ssh_service(self, config):
        return self.ssh

    def make_transfer_service(self, config):
        self.transfer_service = FakeTransfer(
            super().make_transfer_service(config), self.transfer_returncode
        )
        return self.transfer_service

    @property
    def transferred(self):
        return self.transfer_service is not None and self.transfer_service.command is not None


@pytest.fixture
def make_deploy(site_dir, console):
    def factory(answer=None, dry_run=False, assume_yes=False, **kwargs):
        prompts = []

        def confirm(question):
            prompts.append(question)
            return answer

        cmd = RecordingDeployCommand(
            DeployOptions(dry_run=dry_run, assume_yes=assume_yes),
            site_dir=site_dir,
            confirm=confirm,
            console=console,
            **kwargs,
        )
        cmd.prompts = prompts
        return cmd

    return factory


def git(*args, cwd):
    """Run git with a throwaway identity; returns stdout."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Site Deploy Tests",
            "-c",
            "user.email=tests@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=str(cwd),
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def commit_file(repo: Path, name: str, content: str, message: str) -> None:
    (repo / name).write_text(content)
    git("add", name, cwd=repo)
    git("commit", "-m", message, cwd=repo)


@pytest.fixture
def git_remote(tmp_path):
    """A bare origin with one commit on main plus a clone tracking it."""
    origin = tmp_path / "origin.git"
    git("init", "--bare", str(origin), cwd=tmp_path)

    work = tmp_path / "work"
    git("clone", str(origin), str(work), cwd=tmp_path)
    commit_file(work, "index.html", "<html></html>\n", "initial")
    git("branch", "-M", "main", cwd=work)
    git("push", "-u", "origin", "main", cwd=work)

    return origin, work


@pytest.fixture
def other_clone(tmp_path, git_remote):
    origin, _ = git_remote
    other = tmp_path / "other"
    git("clone", "-b", "main", str(origin), str(other), cwd=tmp_path)
    return other
