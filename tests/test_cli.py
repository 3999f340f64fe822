import subprocess

import pandas as pd
import pytest

import ping_command.ping as ping_module
from ping_command.cli import main
from ping_command.ssh_client import SSHClient


@pytest.fixture
def local_ping(monkeypatch, macos_output):
    def run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=macos_output.encode(), stderr=b'')

    monkeypatch.setattr(ping_module.subprocess, "run", run)


def test_local_run_txt(local_ping, tmp_path, capsys):
    code = main(["127.0.0.1", "-c", "2", "-i", "0", "-o", str(tmp_path), "-f", "txt", "--csv"])

    out = capsys.readouterr().out
    assert code == 0
    assert "attempt count: 2\nsuccess count: 2\nsuccess rate: 1\n" in out
    assert "average: 26.791" in out
    assert list(tmp_path.glob("ping_report_*.txt"))
    assert list(tmp_path.glob("sessions/*/events.csv"))


def test_via_requires_servers(tmp_path):
    assert main(["127.0.0.1", "--via", "10.0.0.1", "-o", str(tmp_path)]) == 1


def test_missing_servers_file(tmp_path, capsys):
    code = main(["127.0.0.1", "--via", "10.0.0.1",
                 "--servers", str(tmp_path / "missing.xlsx"), "-o", str(tmp_path)])

    assert code == 1
    assert "配置文件不存在" in capsys.readouterr().out


def test_interrupt_still_writes_report(monkeypatch, tmp_path, capsys, macos_output):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        if len(calls) > 1:
            raise KeyboardInterrupt
        return subprocess.CompletedProcess(cmd, 0, stdout=macos_output.encode(), stderr=b'')

    monkeypatch.setattr(ping_module.subprocess, "run", run)

    code = main(["127.0.0.1", "-c", "5", "-i", "0", "-o", str(tmp_path), "-f", "txt"])

    out = capsys.readouterr().out
    assert code == 0
    assert "收到用户中断信号" in out
    assert "attempt count: 1\nsuccess count: 1\nsuccess rate: 1\n" in out

    reports = list(tmp_path.glob("ping_report_*.txt"))
    assert len(reports) == 1
    assert "average: 26.791" in reports[0].read_text(encoding='utf-8')


def test_via_runs_ping_on_ssh_server(monkeypatch, tmp_path, capsys, macos_output):
    servers_file = tmp_path / "servers.xlsx"
    pd.DataFrame([{"ip": "10.0.0.1", "user": "admin", "pass": "pw"}]).to_excel(servers_file, index=False)

    connected = []
    commands = []

    def connect(self, *args, **kwargs):
        connected.append((self.host, self.username, self.password, self.port))
        self.hostname = "edge-01"
        return True

    def run_command(self, command):
        commands.append(command)
        return 0, macos_output

    monkeypatch.setattr(SSHClient, "connect", connect)
    monkeypatch.setattr(SSHClient, "run_command", run_command)

    code = main(["223.5.5.5", "--servers", str(servers_file), "--via", "10.0.0.1",
                 "-c", "2", "-i", "0", "-o", str(tmp_path / "out"), "-f", "txt"])

    out = capsys.readouterr().out
    assert code == 0
    assert connected == [("10.0.0.1", "admin", "pw", 22)]
    assert commands == ["ping -c 1 -W 5 223.5.5.5"] * 2
    assert "✓ 已连接: 10.0.0.1 (edge-01)" in out
    assert "success rate: 1\n" in out

    reports = list((tmp_path / "out").glob("ping_report_*.txt"))
    assert len(reports) == 1
    assert "探测出发点: 10.0.0.1 (edge-01)" in reports[0].read_text(encoding='utf-8')


def test_via_unknown_server(tmp_path, capsys):
    servers_file = tmp_path / "servers.xlsx"
    pd.DataFrame([{"ip": "10.0.0.1"}]).to_excel(servers_file, index=False)

    code = main(["223.5.5.5", "--servers", str(servers_file), "--via", "10.0.0.9",
                 "-o", str(tmp_path / "out")])

    assert code == 1
    assert "配置文件中没有服务器 10.0.0.9" in capsys.readouterr().out
