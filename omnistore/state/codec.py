"""Line-oriented ``key:value`` file format.

There is no escaping: keys and values containing the delimiter are never
written and never read back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

DELIMITER = ":"
ENCODING = "utf-8"
# Keeps undecodable bytes intact so a foreign file survives a rewrite.
ERRORS = "surrogateescape"

logger = logging.getLogger(__name__)


def is_valid_entry(key: str, value: str) -> bool:
    return bool(key) and DELIMITER not in key and DELIMITER not in value


def encode(mapping: Mapping[str, str]) -> bytes:
    lines = [
        f"{key}{DELIMITER}{value}\n"
        for key, value in mapping.items()
        if is_valid_entry(key, value)
    ]
    return "".join(lines).encode(ENCODING, ERRORS)


def decode(data: bytes) -> dict[str, str]:
    """Parse ``data`` into a mapping, dropping malformed lines.

    Each line is split at its first delimiter. Lines with no delimiter, an
    empty key, or a value that still holds a delimiter are skipped. A later
    duplicate key replaces an earlier one.
    """

    mapping: dict[str, str] = {}
    skipped = 0
    for line in data.decode(ENCODING, ERRORS).split("\n"):
        if not line:
            continue
        key, sep, value = line.partition(DELIMITER)
        if not sep or not is_valid_entry(key, value):
            skipped += 1
            continue
        mapping[key] = value
    if skipped:
        logger.debug(
            "decode_skipped_lines",
            extra={"event_type": "decode_skipped_lines", "entries": skipped},
        )
    return mapping
