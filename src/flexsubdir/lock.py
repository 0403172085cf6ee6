"""Per-identifier advisory locks backed by files under the lock root."""

from __future__ import annotations

import fcntl
import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

from .config import PluginConfig
from .errors import LockUnavailableError

log = logging.getLogger(__name__)


class LockManager:
    """Serializes shared-mount critical sections across processes.

    Lock files are never removed: unlinking one while another process is
    blocked on it would let a third process lock a fresh inode and enter the
    critical section concurrently.
    """

    def __init__(self, config: PluginConfig) -> None:
        self.config = config

    def _open(self, identifier: str) -> int:
        path = self.config.lock_path(identifier)
        try:
            os.makedirs(self.config.lock_root, exist_ok=True)
            return os.open(path, os.O_RDWR | os.O_CREAT | os.O_CLOEXEC, 0o644)
        except OSError as exc:
            raise LockUnavailableError(f"cannot open lock file {path}: {exc}") from exc

    @contextmanager
    def hold(self, identifier: str) -> Iterator[None]:
        fd = self._open(identifier)
        start = time.monotonic()
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
        except OSError as exc:
            os.close(fd)
            raise LockUnavailableError(f"cannot lock {identifier}: {exc}") from exc
        log.debug(
            "lock acquired identifier=%s waited_ms=%d",
            identifier,
            int((time.monotonic() - start) * 1000),
        )
        try:
            yield
        finally:
            # Release before close: a mount helper spawned inside the
            # critical section may still share the open file description.
            try:
                fcntl.flock(fd, fcntl.LOCK_UN)
            finally:
                os.close(fd)
            log.debug("lock released identifier=%s", identifier)
