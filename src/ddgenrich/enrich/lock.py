from __future__ import annotations

import os
import re
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from .. import config as cfg
from ..core.errors import LockTimeoutError

try:
    import fcntl
except ImportError:  # pragma: no cover - non-POSIX platforms
    fcntl = None  # type: ignore[assignment]

_POLL_S = 0.05


class ProcessLock:
    """
    Named exclusive locks within one process (threads). Enough for a single
    worker process; use FileLock when several processes share a store.
    """

    def __init__(self, cancel: Optional[threading.Event] = None) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}
        self._cancel = cancel

    def _named(self, resource_name: str) -> threading.Lock:
        with self._guard:
            lk = self._locks.get(resource_name)
            if lk is None:
                lk = self._locks[resource_name] = threading.Lock()
            return lk

    @contextmanager
    def acquire(self, resource_name: str, timeout_s: float) -> Iterator[None]:
        lk = self._named(resource_name)
        deadline = time.monotonic() + max(0.0, timeout_s)
        while True:
            if self._cancel is not None and self._cancel.is_set():
                raise LockTimeoutError(resource_name, timeout_s, "cancelled")
            remaining = deadline - time.monotonic()
            if lk.acquire(timeout=max(0.0, min(_POLL_S, remaining))):
                break
            if remaining <= 0:
                raise LockTimeoutError(resource_name, timeout_s)
        try:
            yield
        finally:
            lk.release()


class FileLock:
    """
    Cross-process exclusive lock on `<lock_dir>/<resource>.lock` (flock).
    Threads of one process also exclude each other, since every acquisition
    opens its own descriptor.
    """

    def __init__(
        self,
        lock_dir: Optional[Path] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self.lock_dir = Path(lock_dir or cfg.LOCK_DIR)
        self._cancel = cancel

    def path_for(self, resource_name: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", resource_name) or "lock"
        return self.lock_dir / f"{safe}.lock"

    @contextmanager
    def acquire(self, resource_name: str, timeout_s: float) -> Iterator[None]:
        if fcntl is None:  # pragma: no cover - non-POSIX platforms
            raise RuntimeError("File locking is not supported on this platform.")

        lock_path = self.path_for(resource_name)
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(str(lock_path), os.O_CREAT | os.O_RDWR)
        start = time.monotonic()

        try:
            while True:
                try:
                    fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                    break
                except BlockingIOError:
                    if self._cancel is not None and self._cancel.is_set():
                        raise LockTimeoutError(
                            resource_name, timeout_s, "cancelled"
                        )
                    if (time.monotonic() - start) >= timeout_s:
                        raise LockTimeoutError(
                            resource_name, timeout_s, f"lock file {lock_path}"
                        )
                    time.sleep(_POLL_S)
        except BaseException:
            os.close(fd)
            raise

        try:
            os.ftruncate(fd, 0)
            os.write(fd, str(os.getpid()).encode("ascii", errors="ignore"))
            yield
        finally:
            try:
                fcntl.flock(fd, fcntl.LOCK_UN)
            finally:
                os.close(fd)
