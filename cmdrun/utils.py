from __future__ import annotations

import sys
from dataclasses import dataclass

@dataclass(frozen=True)
class ExecResult:
    """Normalized outcome of one command invocation."""
    success: bool
    message: str


@dataclass
class CommandOutput:
    """Raw remote command output, before normalization."""
    exit_status: int
    stdout: str
    stderr: str


class ToolError(Exception):
    """Generic tool exception with a human-readable message."""
    pass


UNKNOWN_ERROR = "An unknown error occurred"


def info(msg: str) -> None:
    print(f"[INFO] {msg}")


def warn(msg: str) -> None:
    print(f"[WARN] {msg}", file=sys.stderr)


def err(msg: str) -> None:
    print(f"[ERROR] {msg}", file=sys.stderr)


def handle_error(error: BaseException) -> ExecResult:
    """Log an error and turn it into a failed ExecResult."""
    message = str(error)
    if not message:
        err(f"{type(error).__name__} raised without a message")
        return ExecResult(success=False, message=UNKNOWN_ERROR)
    err(message)
    return ExecResult(success=False, message=message)


def normalize_output(exit_status: int, stdout: str, stderr: str) -> ExecResult:
    """
    Map captured output to an ExecResult: stderr on failure, stdout on success.
    Captured stderr is always echoed to sys.stderr, as an error when the
    command failed and as a warning when it succeeded.
    """
    out = stdout.strip()
    err_ = stderr.strip()
    if exit_status != 0:
        if err_:
            err(err_)
        return ExecResult(success=False, message=err_)
    if err_:
        warn(err_)
    return ExecResult(success=True, message=out)


def shlex_quote(s: str) -> str:
    """POSIX-ish single-quote escaping."""
    return "'" + s.replace("'", "'\"'\"'") + "'"


def quote_for_shell(cmd: str) -> str:
    """Wrap a command for bash -lc argument."""
    return shlex_quote(cmd)
