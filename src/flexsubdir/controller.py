"""Shared mount lifecycle: init, mount and unmount handlers."""

from __future__ import annotations

import logging
import os

from .config import PluginConfig
from .errors import (
    CleanupError,
    MalformedRequestError,
    PluginError,
    SetupError,
    VerificationError,
)
from .lock import LockManager
from .mount_table import MountTable
from .mounter import Mounter
from .naming import identifier_for
from .payload import MountRequest
from .result import Capabilities, Result

log = logging.getLogger(__name__)


def init_plugin(config: PluginConfig) -> Result:
    """Create the mount and lock roots and report fixed capabilities."""
    problems = []
    for path in (config.mount_root, config.lock_root):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            problems.append(f"cannot create {path}: {exc}")
    if problems:
        raise SetupError("; ".join(problems))
    return Result.success("initialized", Capabilities(attach=False, selinux_relabel=False))


class MountController:
    def __init__(
        self,
        config: PluginConfig,
        locks: LockManager,
        table: MountTable,
        mounter: Mounter,
    ) -> None:
        self.config = config
        self.locks = locks
        self.table = table
        self.mounter = mounter

    def _describe(self, request: MountRequest, shared_path: str, source: str) -> str:
        return (
            f"server={request.primary} backups={':'.join(request.backups)} "
            f"volume={request.volume} shared={shared_path} "
            f"source={source} target={request.target}"
        )

    @staticmethod
    def _bind_source(shared_path: str, subdir: str) -> str:
        # The subdirectory is always relative to the volume root.
        source = os.path.normpath(os.path.join(shared_path, subdir.lstrip("/")))
        if source != shared_path and not source.startswith(shared_path + os.sep):
            raise MalformedRequestError(f"dir {subdir!r} resolves outside {shared_path}")
        return source

    @staticmethod
    def _discard_dir(path: str) -> None:
        try:
            os.rmdir(path)
        except OSError as exc:
            log.warning("could not remove %s after failed mount: %s", path, exc)

    def mount(self, request: MountRequest) -> Result:
        identifier = identifier_for(request.primary, request.volume)
        shared_path = os.path.normpath(self.config.shared_mount_path(identifier))
        try:
            source = self._bind_source(shared_path, request.subdir)
        except MalformedRequestError as exc:
            details = self._describe(request, shared_path, request.subdir)
            log.error("mount rejected %s: %s", details, exc)
            return Result.failure(f"mount rejected ({exc}): {details}")
        details = self._describe(request, shared_path, source)

        try:
            with self.locks.hold(identifier):
                if not self.table.is_mount_point(shared_path):
                    log.info("mounting shared volume %s at %s", identifier, shared_path)
                    os.makedirs(shared_path, exist_ok=True)
                    try:
                        self.mounter.mount_volume(
                            request.primary, request.volume, request.backups, shared_path
                        )
                    except PluginError:
                        self._discard_dir(shared_path)
                        raise
                else:
                    log.debug("shared volume %s already mounted", identifier)
                os.makedirs(request.target, exist_ok=True)
                self.mounter.bind(source, request.target)
        except (PluginError, OSError) as exc:
            log.error("mount failed %s: %s", details, exc)
            return Result.failure(f"mount failed ({exc}): {details}")

        if not self.table.is_mount_point(request.target):
            err = VerificationError(f"{request.target} is not a mount point")
            log.error("mount not verified %s: %s", details, err)
            return Result.failure(f"mount not verified ({err}): {details}")
        return Result.success(f"mounted {details}")


class UnmountController:
    def __init__(
        self,
        config: PluginConfig,
        locks: LockManager,
        table: MountTable,
        mounter: Mounter,
    ) -> None:
        self.config = config
        self.locks = locks
        self.table = table
        self.mounter = mounter

    def unmount(self, target: str) -> Result:
        if not self.table.is_mount_point(target):
            return Result.success(f"{target} was not mounted")

        # The bind row disappears with the unmount, so read it first.
        device = self.table.device_backing(target)
        try:
            self.mounter.unmount(target)
        except PluginError as exc:
            log.error("unmount of %s failed: %s", target, exc)
            return Result.failure(f"unmount of {target} failed: {exc}")

        try:
            self._release_shared(device)
        except (PluginError, OSError) as exc:
            log.warning("cleanup after unmounting %s failed: %s", target, exc)
        return Result.success(f"unmounted {target}")

    def _release_shared(self, device: str | None) -> None:
        if not device:
            return
        shared_path = self.table.mountpoint_of_device_under(device, self.config.mount_root)
        if shared_path is None:
            log.debug("no shared mount for %s under %s", device, self.config.mount_root)
            return
        identifier = os.path.basename(shared_path)
        with self.locks.hold(identifier):
            if not self.table.is_mount_point(shared_path):
                log.debug("shared mount %s already torn down", shared_path)
                return
            remaining = self.table.count_entries_for_device(device)
            # The shared mount's own row is part of the count.
            if remaining > 1:
                log.info("shared mount %s still has %d bind(s)", identifier, remaining - 1)
                return
            log.info("tearing down shared mount %s", shared_path)
            try:
                self.mounter.unmount(shared_path)
                os.rmdir(shared_path)
            except (PluginError, OSError) as exc:
                raise CleanupError(f"teardown of {shared_path} failed: {exc}") from exc
