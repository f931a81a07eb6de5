from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..commands.parser import Command, Delete, Load, Save, parse
from ..errors import ErrorCategory, Outcome, Rejection
from ..metrics import commands_total, rejected_total
from ..state.store import Store

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Command], Outcome]


class CommandDispatcher:
    """Apply parsed commands to a :class:`Store`.

    Handlers are keyed by protocol verb. The built-in ``savedata``,
    ``loaddata`` and ``deletedata`` handlers are registered on construction;
    :meth:`on` can replace them or add new verbs, either directly::

        dispatcher.on("savedata", handler)

    or as a decorator::

        @dispatcher.on("savedata")
        def handler(command): ...

    The only state kept here is the scratch slot written by ``loaddata``.
    """

    def __init__(self, store: Store, *, ready_timeout: float | None = None) -> None:
        self.store = store
        self.ready_timeout = ready_timeout
        self._handlers: dict[str, CommandHandler] = {}
        self._retrieved = ""
        self._slot_lock = threading.Lock()

        self.on(Save.verb, self._handle_save)
        self.on(Load.verb, self._handle_load)
        self.on(Delete.verb, self._handle_delete)

    def on(
        self, verb: str, handler: CommandHandler | None = None
    ) -> CommandHandler | Callable[[CommandHandler], CommandHandler]:
        """Register ``handler`` for ``verb``.

        If ``handler`` is ``None`` this functions as a decorator factory.
        """

        if handler is not None:
            self._handlers[verb] = handler
            return handler

        def decorator(func: CommandHandler) -> CommandHandler:
            self._handlers[verb] = func
            return func

        return decorator

    def retrieved_value(self) -> str:
        with self._slot_lock:
            return self._retrieved

    def dispatch(self, command: Command) -> Outcome:
        verb = getattr(command, "verb", None)
        handler = self._handlers.get(verb) if verb else None
        if handler is None:
            raise TypeError(f"no handler for {command!r}")
        commands_total.inc()
        outcome = handler(command)
        if not outcome:
            _log_rejection(verb, getattr(command, "key", None), outcome.reason)
        return outcome

    def on_command_line(self, text: str) -> Outcome:
        """Entry point for the interception adapter: one completed line.

        Waits for the store's initial load before acting. Nothing is ever
        raised or reported back for a line that is not a valid command.
        """

        if not self.store.wait_ready(self.ready_timeout):
            return self._reject(Rejection.NOT_READY)
        result = parse(text)
        if result.command is None:
            return self._reject(result.reason)
        return self.dispatch(result.command)

    def _reject(self, reason: Rejection | None) -> Outcome:
        _log_rejection(None, None, reason)
        return Outcome.rejected(reason or Rejection.UNKNOWN_COMMAND)

    # Built-in handlers ---------------------------------------------------------

    def _handle_save(self, command: Save) -> Outcome:
        return self.store.set(command.key, command.value)

    def _handle_load(self, command: Load) -> Outcome:
        with self._slot_lock:
            value = self.store.get(command.key)
            self._retrieved = value if value is not None else ""
        if value is None:
            return Outcome(applied=True, reason=Rejection.NOT_FOUND, value="")
        return Outcome.ok(value=value)

    def _handle_delete(self, command: Delete) -> Outcome:
        return self.store.discard(command.key)


def _log_rejection(verb: str | None, key: str | None, reason: Rejection | None) -> None:
    rejected_total.inc()
    if reason is Rejection.UNKNOWN_COMMAND:
        category = ErrorCategory.PROTOCOL
    else:
        category = ErrorCategory.VALIDATION
    logger.debug(
        "command_rejected",
        extra={
            "event_type": "command_rejected",
            "command": verb,
            "key": key,
            "reason": reason.value if reason else None,
            "category": category.value,
        },
    )
