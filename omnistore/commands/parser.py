"""Parse one line of console text into a store command.

Grammar, one command per line, prefixes are case-sensitive::

    savedata <key>:<value>
    loaddata <key>
    deletedata <key>

Anything else is not a command. Rejection is silent at the protocol level;
:func:`parse` reports the reason for callers that want it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from ..errors import Rejection
from ..state.codec import DELIMITER

# Only spaces and tabs are trimmed, never other whitespace.
BLANKS = " \t"


@dataclass(frozen=True)
class Save:
    verb: ClassVar[str] = "savedata"
    key: str
    value: str


@dataclass(frozen=True)
class Load:
    verb: ClassVar[str] = "loaddata"
    key: str


@dataclass(frozen=True)
class Delete:
    verb: ClassVar[str] = "deletedata"
    key: str


Command = Union[Save, Load, Delete]


@dataclass(frozen=True)
class ParseResult:
    command: Command | None = None
    reason: Rejection | None = None

    def __bool__(self) -> bool:
        return self.command is not None


def _check_key(key: str) -> Rejection | None:
    if not key:
        return Rejection.EMPTY_KEY
    if DELIMITER in key:
        return Rejection.DELIMITER_IN_KEY
    return None


def _parse_save(payload: str) -> ParseResult:
    key, sep, value = payload.partition(DELIMITER)
    if not sep:
        return ParseResult(reason=Rejection.MISSING_DELIMITER)
    key = key.strip(BLANKS)
    value = value.strip(BLANKS)
    reason = _check_key(key)
    if reason is not None:
        return ParseResult(reason=reason)
    if not value:
        return ParseResult(reason=Rejection.EMPTY_VALUE)
    if DELIMITER in value:
        return ParseResult(reason=Rejection.DELIMITER_IN_VALUE)
    return ParseResult(command=Save(key, value))


def _parse_key_only(payload: str, factory: type[Load] | type[Delete]) -> ParseResult:
    reason = _check_key(payload)
    if reason is not None:
        return ParseResult(reason=reason)
    return ParseResult(command=factory(payload))


def parse(line: str) -> ParseResult:
    """Parse ``line`` and say why it was rejected if it was."""

    for verb in (Save.verb, Load.verb, Delete.verb):
        prefix = verb + " "
        if not line.startswith(prefix):
            continue
        payload = line[len(prefix) :].strip(BLANKS)
        if verb == Save.verb:
            return _parse_save(payload)
        return _parse_key_only(payload, Load if verb == Load.verb else Delete)
    return ParseResult(reason=Rejection.UNKNOWN_COMMAND)


def parse_command(line: str) -> Command | None:
    """Return the command in ``line`` or ``None`` if it is not actionable."""
    return parse(line).command
