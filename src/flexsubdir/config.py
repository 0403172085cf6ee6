"""Shared config defaults for the flexsubdir volume plugin."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

# Environment variable for each PluginConfig field.
ENV_VARS = {
    "mount_root": "FLEXSUBDIR_MOUNT_ROOT",
    "lock_root": "FLEXSUBDIR_LOCK_ROOT",
    "fs_type": "FLEXSUBDIR_FS_TYPE",
    "backup_option": "FLEXSUBDIR_BACKUP_OPTION",
    "mounts_file": "FLEXSUBDIR_MOUNTS_FILE",
    "mount_bin": "FLEXSUBDIR_MOUNT_BIN",
    "umount_bin": "FLEXSUBDIR_UMOUNT_BIN",
    "log_file": "FLEXSUBDIR_LOG_FILE",
    "debug": "FLEXSUBDIR_DEBUG",
}


@dataclass(frozen=True)
class PluginConfig:
    mount_root: str = "/var/lib/flexsubdir/mounts"
    lock_root: str = "/var/lib/flexsubdir/locks"
    fs_type: str = "glusterfs"
    backup_option: str = "backup-volfile-servers"
    mounts_file: str = "/proc/mounts"
    mount_bin: str = "mount"
    umount_bin: str = "umount"
    log_file: str | None = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PluginConfig":
        """Build a config, overriding defaults with ``FLEXSUBDIR_*`` variables.

        ``environ`` defaults to ``os.environ``; unset or empty variables keep
        the built-in default.
        """
        if environ is None:
            environ = os.environ
        values: dict = {}
        for field in fields(cls):
            raw = environ.get(ENV_VARS[field.name])
            if not raw:
                continue
            values[field.name] = raw == "1" if field.name == "debug" else raw
        return cls(**values)

    def shared_mount_path(self, identifier: str) -> str:
        return os.path.join(self.mount_root, identifier)

    def lock_path(self, identifier: str) -> str:
        return os.path.join(self.lock_root, f"{identifier}.lock")
