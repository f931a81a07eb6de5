from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from .config import Settings, get_settings
from .logging import configure_logging

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .handlers.dispatcher import CommandDispatcher

log = logging.getLogger(__name__)


def build(settings: Settings | None = None) -> CommandDispatcher:
    """Create the store, load it, and return a dispatcher bound to it.

    The store is fully loaded (or created empty) before the dispatcher is
    handed out, so no command can observe a half-initialized map.
    """

    from .handlers.dispatcher import CommandDispatcher
    from .state.store import Store

    settings = settings or get_settings()
    store = Store(settings.store_path, atomic=settings.atomic_writes)
    store.open()
    return CommandDispatcher(store, ready_timeout=settings.ready_timeout_s)


def run(
    lines: Iterable[str],
    settings: Settings | None = None,
    echo: Callable[[str], None] | None = None,
) -> int:
    """Apply every command line from ``lines`` against the configured store."""

    configure_logging()
    settings = settings or get_settings()

    # Lazy import keeps ``import omnistore.app`` free of store modules.
    from .adapters.console import LineAdapter

    dispatcher = build(settings)
    log.info(
        "omnistore starting",
        extra={
            "event_type": "starting",
            "path": str(settings.store_path),
            "entries": len(dispatcher.store),
        },
    )
    adapter = LineAdapter(dispatcher, on_load=echo if settings.echo_loads else None)
    applied = adapter.run(lines)
    log.info(
        "omnistore stopped after %d commands",
        applied,
        extra={"event_type": "stopped", "entries": len(dispatcher.store)},
    )
    return applied
