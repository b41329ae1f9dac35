"""Operator input and the interactivity probe.

read_line() is the blocking "one line or end-of-input" primitive the tenant
selector consumes.  On a live terminal it uses questionary (prompt_toolkit
line editing); otherwise it falls back to a plain readline on stdin.  There
is no timeout: a hung input stream blocks the caller.
"""

import sys
from typing import Optional, TextIO

import questionary


def is_interactive(stream: Optional[TextIO] = None) -> bool:
    """True when *stream* (stdin by default) is attached to a terminal."""
    stream = sys.stdin if stream is None else stream
    if stream is None or getattr(stream, "closed", False):
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def read_line() -> Optional[str]:
    """Read one line of operator input.  Returns None on end-of-input."""
    if not is_interactive():
        line = sys.stdin.readline() if sys.stdin else ""
        return line if line else None
    try:
        return questionary.text("", qmark=">").unsafe_ask()
    except EOFError:
        return None
