from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Small bounded pool for fire-and-forget work, deduplicated by key.

    A key stays registered from submission until its unit finishes, so a
    second submission for the same key is rejected rather than queued.
    Submissions are also rejected once `max_pending` keys are in flight.
    Exceptions raised by a unit are logged and never re-raised.
    """

    def __init__(self, max_workers: int = 2, max_pending: int = 16) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, max_workers), thread_name_prefix="docinbox-bg"
        )
        self._max_pending = max(1, max_pending)
        self._pending: set[str] = set()
        self._lock = threading.Lock()

    def submit(self, key: str, fn: Callable[..., object], *args: object) -> Future | None:
        with self._lock:
            if key in self._pending:
                return None
            if len(self._pending) >= self._max_pending:
                logger.warning("background queue full, dropping %s", key)
                return None
            self._pending.add(key)
        try:
            return self._executor.submit(self._run, key, fn, *args)
        except RuntimeError:
            # executor already shut down
            with self._lock:
                self._pending.discard(key)
            logger.warning("background runner closed, dropping %s", key)
            return None

    def is_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, key: str, fn: Callable[..., object], *args: object) -> object:
        try:
            return fn(*args)
        except Exception:
            logger.exception("background unit %s failed", key)
            return None
        finally:
            with self._lock:
                self._pending.discard(key)
