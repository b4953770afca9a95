from __future__ import annotations

import argparse
import sys

from typing import List, Optional
from cmdrun import process, sshsession
from cmdrun.tokenizer import split_args
from cmdrun.utils import ExecResult, ToolError, err

# ---------------------------
# CLI
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cmdrun",
        description="Run local or remote (SSH) commands and report a uniform success/message result.",
    )
    p.add_argument("--verbose", action="store_true", help="Verbose logs.")
    sub = p.add_subparsers(dest="action", required=True)

    sp = sub.add_parser("split", help="Print the tokens of a command string, one per line.")
    sp.add_argument("command", help="Command string to tokenize.")

    rp = sub.add_parser("run", help="Run a command with live output (interactive mode).")
    rp.add_argument("--cwd", default=None, help="Working directory for the command.")
    rp.add_argument("command", help="Command string to run.")

    ep = sub.add_parser("exec", help="Run a command and print its captured output.")
    ep.add_argument("--cwd", default=None, help="Working directory for the command.")
    ep.add_argument("command", help="Command string to run.")

    hp = sub.add_parser("ssh", help="Run a command on a remote host over SSH.")
    hp.add_argument("--host", required=True, help="Remote host/IP.")
    hp.add_argument("-u", "--user", required=True, help="SSH username for remote host.")
    hp.add_argument("-i", "--key", required=True, help="Path to the private key file.")
    hp.add_argument("-p", "--port", type=int, default=22, help="SSH port (default: 22).")
    hp.add_argument("--cwd", default="~", help="Remote working directory (default: ~).")
    hp.add_argument(
        "--capture",
        action="store_true",
        help="Capture output in-process (paramiko) instead of running the ssh client interactively.",
    )
    hp.add_argument("command", help="Command to run on the remote host.")
    return p


def dispatch(args: argparse.Namespace) -> ExecResult:
    if args.action == "run":
        return process.spawn_sync(args.command, args.cwd, verbose=args.verbose)
    if args.action == "exec":
        return process.exec(args.command, args.cwd, verbose=args.verbose)
    if args.action == "ssh":
        runner = sshsession.ssh_exec if args.capture else process.ssh_cmd
        return runner(
            args.user,
            args.host,
            args.key,
            args.command,
            cwd=args.cwd,
            port=args.port,
            verbose=args.verbose,
        )
    raise ToolError(f"Unknown action: {args.action}")


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.action == "split":
            for token in split_args(args.command):
                print(token)
            return

        res = dispatch(args)
        if not res.success:
            # failures are already reported on stderr by the runners
            sys.exit(1)
        if res.message:
            print(res.message)
    except ToolError as e:
        err(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        err("Interrupted by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
