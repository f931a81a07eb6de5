from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path

from ..errors import ErrorCategory, Outcome, Rejection
from ..metrics import entries, save_ms, write_failures_total, writes_total
from .codec import DELIMITER, decode, encode

logger = logging.getLogger(__name__)


def check_entry(key: str, value: str) -> Rejection | None:
    """Return why ``key``/``value`` may not be stored, or ``None``."""

    if not key:
        return Rejection.EMPTY_KEY
    if DELIMITER in key:
        return Rejection.DELIMITER_IN_KEY
    if DELIMITER in value:
        return Rejection.DELIMITER_IN_VALUE
    return None


class Store:
    """In-memory key/value map mirrored to a flat file.

    Every successful mutation rewrites the whole file before returning, so
    the file always holds the last committed state. Unreadable or unwritable
    files are never raised to the caller: a failed load leaves the map as it
    was and a failed save leaves the file as it was.

    All operations are serialized on a re-entrant lock. :meth:`open` performs
    the initial load and sets :attr:`ready`; command handling should wait on
    it so nothing is applied before the file has been read.
    """

    def __init__(self, path: str | os.PathLike[str], *, atomic: bool = True) -> None:
        self.path = Path(path)
        self.atomic = atomic
        self.ready = threading.Event()
        self._data: dict[str, str] = {}
        self._lock = threading.RLock()

    # Lifecycle ---------------------------------------------------------------

    def open(self) -> None:
        """Load the backing file, or create it empty, then signal readiness."""

        with self._lock:
            if self.path.exists():
                self.load()
            else:
                self.save()
            self.ready.set()
        logger.info(
            "store_ready",
            extra={"event_type": "store_ready", "path": str(self.path), "entries": len(self)},
        )

    def wait_ready(self, timeout: float | None = None) -> bool:
        return self.ready.wait(timeout)

    # Persistence -------------------------------------------------------------

    def load(self, path: str | os.PathLike[str] | None = None) -> bool:
        target = Path(path) if path is not None else self.path
        try:
            data = target.read_bytes()
        except OSError as exc:
            logger.debug(
                "load_unavailable",
                extra={
                    "event_type": "load_unavailable",
                    "path": str(target),
                    "category": ErrorCategory.IO.value,
                },
                exc_info=exc,
            )
            return False
        with self._lock:
            self._data = decode(data)
            entries.set(len(self._data))
        return True

    def save(self, path: str | os.PathLike[str] | None = None) -> bool:
        target = Path(path) if path is not None else self.path
        with self._lock:
            payload = encode(self._data)
            try:
                with save_ms.time() as span:
                    if self.atomic:
                        _replace_atomically(target, payload)
                    else:
                        target.write_bytes(payload)
            except OSError:
                write_failures_total.inc()
                logger.warning(
                    "save_failed",
                    extra={
                        "event_type": "save_failed",
                        "path": str(target),
                        "category": ErrorCategory.IO.value,
                    },
                    exc_info=True,
                )
                return False
            writes_total.inc()
            entries.set(len(self._data))
        logger.debug(
            "saved",
            extra={
                "event_type": "saved",
                "path": str(target),
                "entries": len(self._data),
                "latency_ms": span.ms,
            },
        )
        return True

    # Mapping operations --------------------------------------------------------

    def set(self, key: str, value: str) -> Outcome:
        reason = check_entry(key, value)
        if reason is not None:
            return Outcome.rejected(reason)
        with self._lock:
            self._data[key] = value
            persisted = self.save()
        return Outcome.ok(persisted=persisted)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def delete(self, key: str) -> bool:
        return bool(self.discard(key))

    def discard(self, key: str) -> Outcome:
        """Remove ``key``; the outcome says whether the rewrite succeeded."""

        with self._lock:
            if key not in self._data:
                return Outcome.rejected(Rejection.NOT_FOUND)
            del self._data[key]
            persisted = self.save()
        return Outcome.ok(persisted=persisted)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _replace_atomically(target: Path, payload: bytes) -> None:
    # Write through symlinks and keep the mode readers already rely on.
    target = target.resolve()
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            shutil.copymode(target, tmp_name)
        else:
            os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, target)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
