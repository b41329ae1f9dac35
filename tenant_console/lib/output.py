"""Leveled console output for tenant setup.

Every message goes through a single Rich console so colour handling, prefixes
and optional timestamps stay consistent:

    out = Output()
    out.header("Multiple tenants detected. Please choose one:")
    out.warning("Invalid input. Please enter a number.")
    out.backtrace(exc)          # one dim 'trace' line per traceback line

Messages are rendered as rich Text objects, never as markup, so a tenant key
such as "[acme]" prints literally.
"""

import traceback
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional, Tuple

from rich.console import Console
from rich.text import Text

PREFIX = "[TenantConsole]"

# most recent messages kept on Output.history
HISTORY_LIMIT = 1000

# level -> (symbol, rich style)
LEVELS = {
    "error": ("[✗]", "bold red"),
    "success": ("[✓]", "bold green"),
    "warning": ("[!]", "bold yellow"),
    "prompt": (None, "bold cyan"),
    "header": (None, "bold blue"),
    "trace": (None, "grey50"),
    "info": (None, None),
}


class Output:
    """Category-based output collaborator.

    Args:
        console:    Rich console to write to (a fresh stdout console by default).
        pretty:     Apply colours.  When False every line is plain text.
        timestamps: Prefix every message with the local time.  Individual
                    calls may override this with ``timestamp=``.
    """

    def __init__(self, console: Optional[Console] = None, pretty: bool = True, timestamps: bool = False):
        self.console = console or Console(highlight=False)
        self.pretty = pretty
        self.timestamps = timestamps
        self.history: Deque[Tuple[str, str]] = deque(maxlen=HISTORY_LIMIT)

    def error(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("error", text, timestamp)

    def success(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("success", text, timestamp)

    def warning(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("warning", text, timestamp)

    def info(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("info", text, timestamp)

    def prompt(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("prompt", text, timestamp)

    def header(self, text: str, timestamp: Optional[bool] = None) -> None:
        self.console.print()
        self._emit("header", f"=== {text} ===", timestamp)

    def trace(self, text: str, timestamp: Optional[bool] = None) -> None:
        self._emit("trace", text, timestamp)

    def backtrace(self, exc: Optional[BaseException]) -> None:
        """Print the traceback of *exc*, one timestamped trace line per line."""
        if exc is None:
            return
        formatted = traceback.format_exception(type(exc), exc, exc.__traceback__)
        for chunk in formatted:
            for line in chunk.rstrip("\n").splitlines():
                self.trace(f"    {line}", timestamp=True)

    def format(self, level: str, text: str, timestamp: Optional[bool] = None) -> str:
        """Return the plain (uncoloured) line for *text* at *level*."""
        symbol, _ = LEVELS[level]
        if timestamp is None:
            timestamp = self.timestamps
        stamp = datetime.now().strftime("[%Y-%m-%d %H:%M:%S] ") if timestamp else ""
        sym = f"{symbol} " if symbol else ""
        return f"{PREFIX} {stamp}{sym}{text}"

    def _emit(self, level: str, text: str, timestamp: Optional[bool]) -> None:
        message = self.format(level, text, timestamp)
        self.history.append((level, text))
        _, style = LEVELS[level]
        rendered = Text(message, style=style if (self.pretty and style) else "")
        self.console.print(rendered, soft_wrap=True)

    def messages(self, level: Optional[str] = None) -> List[str]:
        """Messages recorded so far, optionally filtered by level."""
        return [text for lvl, text in self.history if level is None or lvl == level]
