"""Thin wrappers around the mount/umount helpers."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from .config import PluginConfig
from .errors import MountCommandError

log = logging.getLogger(__name__)


class CommandRunner:
    def run(self, cmd: Sequence[str]) -> None:
        log.info("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(list(cmd), capture_output=True, text=True)
        except OSError as exc:
            raise MountCommandError(cmd, 127, str(exc)) from exc
        if proc.returncode != 0:
            raise MountCommandError(cmd, proc.returncode, proc.stderr or "")


class Mounter:
    def __init__(self, config: PluginConfig, runner: CommandRunner | None = None) -> None:
        self.config = config
        self.runner = runner or CommandRunner()

    def volume_command(
        self, primary: str, volume: str, backups: Sequence[str], path: str
    ) -> list[str]:
        cmd = [self.config.mount_bin, "-t", self.config.fs_type]
        if backups:
            cmd += ["-o", f"{self.config.backup_option}={':'.join(backups)}"]
        return [*cmd, f"{primary}:/{volume}", path]

    def mount_volume(self, primary: str, volume: str, backups: Sequence[str], path: str) -> None:
        self.runner.run(self.volume_command(primary, volume, backups, path))

    def bind(self, source: str, target: str) -> None:
        self.runner.run([self.config.mount_bin, "--bind", source, target])

    def unmount(self, path: str) -> None:
        self.runner.run([self.config.umount_bin, path])
