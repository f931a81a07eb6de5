"""Feed command lines from a text stream into a :class:`CommandSink`."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..commands.parser import Load
from ..errors import Outcome
from .base import CommandSink

logger = logging.getLogger(__name__)


@dataclass
class LineAdapter:
    """Deliver each completed line to ``sink``.

    A line is complete once its terminator has been seen; ``\\r\\n`` and
    ``\\n`` are stripped before delivery. ``on_load`` receives the scratch
    value after every accepted ``loaddata``.
    """

    sink: CommandSink
    on_load: Callable[[str], None] | None = None

    def feed(self, line: str) -> Outcome:
        text = line.rstrip("\r\n")
        outcome = self.sink.on_command_line(text)
        if outcome and self.on_load is not None and text.startswith(Load.verb + " "):
            self.on_load(outcome.value or "")
        return outcome

    def run(self, lines: Iterable[str]) -> int:
        """Feed every line from ``lines``; return how many were applied."""

        applied = 0
        for line in lines:
            if self.feed(line):
                applied += 1
        logger.debug("adapter_drained", extra={"event_type": "adapter_drained", "entries": applied})
        return applied
