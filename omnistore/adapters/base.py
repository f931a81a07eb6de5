from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..errors import Outcome


class CommandSink(Protocol):
    def on_command_line(self, text: str) -> Outcome:  # noqa: D401
        """Handle one completed line of host input."""
