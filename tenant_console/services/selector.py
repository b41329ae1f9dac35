"""Interactive tenant selection with a bounded retry budget.

Menu numbering is 0 = "no tenant", 1..N = registry entries in insertion
order.  An empty line selects the default entry ("1").  Anything that is not
an unsigned integer literal, or is outside [0, N], costs one attempt.
"""

import re
from typing import Callable, Hashable, Mapping, Optional

from tenant_console.lib.output import Output
from tenant_console.lib.prompt import read_line
from tenant_console.services.registry import TenantRegistry

RETRY_LIMIT = 3
DEFAULT_SELECTION = "1"

_UNSIGNED_INT = re.compile(r"[0-9]+")


class TenantSelector:
    """Prompt the operator for a tenant.

    Args:
        output: Output collaborator for the menu, prompt and warnings.
        reader: Blocking line reader returning None at end-of-input.
    """

    def __init__(self, output: Optional[Output] = None, reader: Optional[Callable[[], Optional[str]]] = None):
        self.output = output or Output()
        self.reader = reader or read_line

    def select(self, registry: Mapping) -> Optional[Hashable]:
        """Return the chosen key, or None if the operator declined or ran out of attempts."""
        registry = TenantRegistry.coerce(registry)
        for _ in range(RETRY_LIMIT):
            self._print_menu(registry)
            index = self._parse_selection(len(registry))
            if index is None:
                continue
            if index == 0:
                return None
            return registry.key_at(index)
        return None

    def _print_menu(self, registry: TenantRegistry) -> None:
        self.output.header("Multiple tenants detected. Please choose one:")
        self.output.info("  0. Load without tenant (no tenant configuration)")
        for position, key in enumerate(registry, start=1):
            self.output.info(f"  {position}. {key} (partner: {registry.display_partner(key)})")

    def _parse_selection(self, max_index: int) -> Optional[int]:
        raw = self._read_with_default()
        if not _UNSIGNED_INT.fullmatch(raw):
            self.output.warning("Invalid input. Please enter a number.")
            return None
        # compare lengths first so huge literals never reach int()
        digits = raw.lstrip("0") or "0"
        index = int(digits) if len(digits) <= len(str(max_index)) else None
        if index is None or not 0 <= index <= max_index:
            self.output.warning(f"Selection must be between 0 and {max_index}.")
            return None
        return index

    def _read_with_default(self) -> str:
        self.output.prompt(
            "Enter the number of the tenant you want "
            f"(or press Enter for default '{DEFAULT_SELECTION}'): "
        )
        line = self.reader()
        line = (line or "").strip()
        return line or DEFAULT_SELECTION
