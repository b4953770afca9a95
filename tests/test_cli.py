from __future__ import annotations

import shutil

import pytest

import cmdrun.__main__ as cli
from cmdrun import process, sshsession
from cmdrun.utils import ExecResult


def test_split_prints_tokens(capsys) -> None:
    cli.main(["split", "git commit -m 'first commit'"])
    assert capsys.readouterr().out.splitlines() == ["git", "commit", "-m", "first commit"]


def test_exec_prints_message(monkeypatch, capsys) -> None:
    seen = []

    def fake_exec(cmd, cwd=None, *, verbose=False):
        seen.append((cmd, cwd, verbose))
        return ExecResult(success=True, message="hello")

    monkeypatch.setattr(process, "exec", fake_exec)
    cli.main(["--verbose", "exec", "--cwd", "/tmp", "echo hello"])

    assert seen == [("echo hello", "/tmp", True)]
    assert capsys.readouterr().out == "hello\n"


@pytest.mark.skipif(shutil.which("sh") is None, reason="sh not found on PATH")
def test_exec_keeps_stderr_out_of_stdout(capsys) -> None:
    cli.main(["exec", "sh -c 'echo out; echo note >&2'"])
    captured = capsys.readouterr()
    assert captured.out == "out\n"
    assert "[WARN] note" in captured.err


def test_failure_exits_with_one(monkeypatch, capsys) -> None:
    monkeypatch.setattr(process.subprocess, "run", lambda argv, **kw: process.subprocess.CompletedProcess(argv, 2))
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "make"])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.count("[ERROR] Process failed with code 2") == 1


def test_spawn_failure_is_reported_once(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["exec", "definitely-not-a-real-command-xyz"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.count("[ERROR]") == 1


@pytest.mark.parametrize("flags, module, target", [
    ([], process, "ssh_cmd"),
    (["--capture"], sshsession, "ssh_exec"),
])
def test_ssh_dispatch(monkeypatch, flags, module, target) -> None:
    calls = []

    def fake(user, host, key, command, cwd="~", port=22, *, verbose=False):
        calls.append((user, host, key, command, cwd, port))
        return ExecResult(True, "")

    monkeypatch.setattr(module, target, fake)
    cli.main(["ssh", "--host", "h", "-u", "u", "-i", "k", "-p", "2200", *flags, "uptime"])
    assert calls == [("u", "h", "k", "uptime", "~", 2200)]


def test_keyboard_interrupt_exits_130(monkeypatch) -> None:
    def interrupted(cmd, cwd=None, *, verbose=False):
        raise KeyboardInterrupt

    monkeypatch.setattr(process, "spawn_sync", interrupted)
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "sleep 100"])
    assert exc.value.code == 130
