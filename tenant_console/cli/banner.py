"""Console banner — title panel showing the active tenant and partner."""

from typing import Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from tenant_console import __version__

TITLE = "tenant-console"


def build_banner_panel(session) -> Panel:
    tenant = session.current_tenant()
    partner = getattr(session.context, "partner_identifier", None)
    if tenant is not None:
        subtitle = f"Active: {tenant} (partner: {partner or 'N/A'})  |  v{__version__}"
    else:
        subtitle = f"No tenant loaded  |  v{__version__}"

    return Panel(
        Align(Text(TITLE, style="bold cyan", no_wrap=True), align="center"),
        subtitle=Text(subtitle),
        border_style="cyan" if tenant is not None else "yellow",
        padding=(0, 4),
    )


def render_banner(session, console: Optional[Console] = None) -> None:
    """Print the banner panel for *session*."""
    (console or Console()).print(build_banner_panel(session))
