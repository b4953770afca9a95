from __future__ import annotations

import subprocess
from typing import List, Optional

from .tokenizer import split_args
from .utils import ExecResult, ToolError, err, handle_error, info, normalize_output

SSH_PORT = 22


def exit_code(returncode: int) -> int:
    # subprocess reports a signal kill as -SIG; shells report 128 + SIG.
    return 128 - returncode if returncode < 0 else returncode


def _argv(cmd: str) -> List[str]:
    argv = split_args(cmd)
    if not argv:
        raise ToolError("Empty command")
    return argv


def spawn_sync(cmd: str, cwd: Optional[str] = None, *, verbose: bool = False) -> ExecResult:
    """
    Run a command with the parent's stdin/stdout/stderr attached and wait for it.
    Never raises: spawn errors come back as a failed ExecResult.
    """
    try:
        argv = _argv(cmd)
        if verbose:
            info(f"Spawning: {argv}" + (f" (cwd: {cwd})" if cwd else ""))
        proc = subprocess.run(argv, cwd=cwd)
        if proc.returncode == 0:
            return ExecResult(success=True, message="Process completed")
        message = f"Process failed with code {exit_code(proc.returncode)}"
        err(message)
        return ExecResult(success=False, message=message)
    except Exception as e:
        return handle_error(e)


def exec(cmd: str, cwd: Optional[str] = None, *, verbose: bool = False) -> ExecResult:
    """
    Run a command and collect its output.
    Returns trimmed stdout on success, trimmed stderr on a non-zero exit.
    """
    try:
        argv = _argv(cmd)
        if verbose:
            info(f"Executing: {argv}" + (f" (cwd: {cwd})" if cwd else ""))
        proc = subprocess.run(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        if verbose:
            info(f"Exit: {proc.returncode}")
        return normalize_output(
            proc.returncode,
            proc.stdout.decode("utf-8", errors="replace"),
            proc.stderr.decode("utf-8", errors="replace"),
        )
    except Exception as e:
        return handle_error(e)


def remote_script(command: str, cwd: str = "~") -> str:
    return f"cd {cwd} && source ~/.profile && {command}"


def build_ssh_command(
    user: str,
    host: str,
    key_path: str,
    command: str,
    cwd: str = "~",
    port: int = SSH_PORT,
) -> str:
    """
    Compose the local ssh client command line for running `command` remotely.

    Values are interpolated as-is. The remote script is wrapped in single
    quotes, so `command` and `cwd` must not contain single quotes themselves.
    """
    return (
        f"ssh -i {key_path} -o StrictHostKeyChecking=no {user}@{host} -p {port} "
        f"'{remote_script(command, cwd)}'"
    )


def ssh_cmd(
    user: str,
    host: str,
    key_path: str,
    command: str,
    cwd: str = "~",
    port: int = SSH_PORT,
    *,
    verbose: bool = False,
) -> ExecResult:
    """
    Run `command` on user@host through the ssh client, with live output.

    Example:
        ssh_cmd("solv", "145.40.126.169", "~/.ssh/id_rsa", "solana --version")
    """
    cmd = build_ssh_command(user, host, key_path, command, cwd=cwd, port=port)
    return spawn_sync(cmd, verbose=verbose)
