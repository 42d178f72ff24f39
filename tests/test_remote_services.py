import subprocess

import pytest

from sitedeploy.exceptions import SSHError, TransferError
from sitedeploy.models.config import DeployConfig
from sitedeploy.services.ssh_service import SSHService
from sitedeploy.services.transfer_service import TransferService


@pytest.fixture
def config():
    return DeployConfig(
        remote_user="deploy",
        remote_host="example.com",
        remote_path="/var/www/html",
        ssh_port=2222,
    )


def test_probe_command_is_non_interactive(config):
    command = SSHService(config).build_probe_command()

    assert command == [
        "ssh",
        "-p",
        "2222",
        "-o",
        "ConnectTimeout=10",
        "-o",
        "BatchMode=yes",
        "deploy@example.com",
        "exit",
    ]


def test_probe_returns_result(config, monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        return subprocess.CompletedProcess(cmd, 255, "", "Permission denied (publickey).")

    monkeypatch.setattr("sitedeploy.services.ssh_service.subprocess.run", fake_run)

    result = SSHService(config).probe()

    assert result.is_failure
    assert result.host == "example.com"
    assert "Permission denied" in result.stderr
    assert seen["cmd"][-2:] == ["deploy@example.com", "exit"]


def test_probe_timeout_raises_ssh_error(config, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr("sitedeploy.services.ssh_service.subprocess.run", fake_run)

    with pytest.raises(SSHError, match="timed out"):
        SSHService(config).probe()


def test_probe_without_ssh_binary_raises_ssh_error(config, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "ssh")

    monkeypatch.setattr("sitedeploy.services.ssh_service.subprocess.run", fake_run)

    with pytest.raises(SSHError, match="could not start"):
        SSHService(config).probe()


def test_rsync_transport_follows_configured_port(config, tmp_path):
    command = TransferService(config, tmp_path).build_command()

    assert config.ssh_command == "ssh -p 2222"
    assert command[command.index("-e") + 1] == config.ssh_command


def test_rsync_command_allow_lists_files(config, tmp_path):
    command = TransferService(config, tmp_path).build_command()

    assert command == [
        "rsync",
        "-avz",
        "--progress",
        "--include=index.html",
        "--include=styles.css",
        "--exclude=*",
        "-e",
        "ssh -p 2222",
        "./",
        "deploy@example.com:/var/www/html/",
    ]


class FakePopen:
    def __init__(self, cmd, returncode, lines, **kwargs):
        self.cmd = cmd
        self.kwargs = kwargs
        self.returncode = returncode
        self.stdout = iter(lines)

    def wait(self):
        return self.returncode


def test_sync_runs_in_site_dir_and_collects_output(config, tmp_path, monkeypatch, capsys):
    calls = []

    def popen(cmd, **kwargs):
        calls.append(kwargs)
        return FakePopen(cmd, 0, ["sending incremental file list\n", "index.html\n"], **kwargs)

    monkeypatch.setattr("sitedeploy.services.transfer_service.subprocess.Popen", popen)

    result = TransferService(config, tmp_path).sync()

    assert result.is_success
    assert result.stdout == "sending incremental file list\nindex.html"
    assert calls[0]["cwd"] == str(tmp_path)
    assert "index.html" in capsys.readouterr().out


def test_sync_reports_rsync_failure(config, tmp_path, monkeypatch):
    monkeypatch.setattr(
        "sitedeploy.services.transfer_service.subprocess.Popen",
        lambda cmd, **kwargs: FakePopen(cmd, 23, ["rsync error\n"]),
    )

    result = TransferService(config, tmp_path).sync()

    assert result.returncode == 23


def test_sync_without_rsync_binary(config, tmp_path, monkeypatch):
    def popen(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "rsync")

    monkeypatch.setattr("sitedeploy.services.transfer_service.subprocess.Popen", popen)

    with pytest.raises(TransferError, match="Could not start rsync"):
        TransferService(config, tmp_path).sync()
