from __future__ import annotations

import os
import paramiko
from typing import Optional

from .process import SSH_PORT, remote_script
from .utils import CommandOutput, ExecResult, ToolError, handle_error, info, normalize_output, quote_for_shell

class SSHSession:
    """
    Simple wrapper around paramiko for executing commands with captured output.
    Uses the given private key, or the keys under ~/.ssh when none is given.
    Unknown host keys are accepted, like ssh -o StrictHostKeyChecking=no.
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        port: int = SSH_PORT,
        key_filename: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.port = port
        self.key_filename = os.path.expanduser(key_filename) if key_filename else None
        self.verbose = verbose
        self.client = paramiko.SSHClient()
        self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    def __enter__(self) -> "SSHSession":
        try:
            self.connect()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def connect(self) -> None:
        if self.verbose:
            info(f"Connecting to {self.username}@{self.hostname}:{self.port} ...")
        try:
            # XXX: allow_agent=True will make look_for_keys=True failed
            self.client.connect(
                hostname=self.hostname,
                username=self.username,
                port=self.port,
                key_filename=self.key_filename,
                allow_agent=False,
                look_for_keys=self.key_filename is None,
                timeout=20,
            )
        except paramiko.AuthenticationException as e:
            raise ToolError(
                f"Authentication failed for {self.username}@{self.hostname}. Please verify the key."
            ) from e
        except Exception as e:
            raise ToolError(f"SSH connection error: {e}") from e

        if self.verbose:
            info("SSH connected.")

    def close(self) -> None:
        self.client.close()

    def exec(self, command: str) -> CommandOutput:
        """
        Execute a remote command within bash -lc to normalize quoting.
        Returns CommandOutput with stdout/stderr and exit code.
        """
        wrapped = f"bash -lc {quote_for_shell(command)}"
        if self.verbose:
            info(f"Executing on remote: {command}")
        try:
            stdin, stdout, stderr = self.client.exec_command(wrapped)
            stdin.close()
            out = stdout.read().decode("utf-8", errors="replace")
            err_ = stderr.read().decode("utf-8", errors="replace")
            exit_status = stdout.channel.recv_exit_status()
            if self.verbose:
                info(f"Exit: {exit_status}")
            return CommandOutput(exit_status=exit_status, stdout=out, stderr=err_)
        except Exception as e:
            raise ToolError(f"Remote command failed: {e}") from e


def ssh_exec(
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
    Capturing counterpart of ssh_cmd: run `command` on user@host over paramiko
    and return its trimmed stdout, or its trimmed stderr when it fails.
    """
    try:
        with SSHSession(hostname=host, username=user, port=port, key_filename=key_path, verbose=verbose) as ssh:
            res = ssh.exec(remote_script(command, cwd))
        return normalize_output(res.exit_status, res.stdout, res.stderr)
    except Exception as e:
        return handle_error(e)
