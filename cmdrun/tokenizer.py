from __future__ import annotations

from typing import List


def split_args(cmd: str) -> List[str]:
    """
    Split a command string into an executable name and its arguments.

    - Tokens are separated by spaces; runs of spaces collapse.
    - Double and single quotes group text into one token and are stripped.
      Each quote kind is literal inside the other.
    - Backslash takes the next character literally, inside quotes too.
    - Unterminated quotes and a trailing backslash are tolerated; whatever
      has been collected so far is still returned.
    """
    args: List[str] = []
    current: List[str] = []
    in_double = False
    in_single = False
    escaped = False

    for c in cmd:
        if escaped:
            current.append(c)
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == '"' and not in_single:
            in_double = not in_double
        elif c == "'" and not in_double:
            in_single = not in_single
        elif c == " " and not in_double and not in_single:
            if current:
                args.append("".join(current))
                current = []
        else:
            current.append(c)

    if current:
        args.append("".join(current))
    return args
