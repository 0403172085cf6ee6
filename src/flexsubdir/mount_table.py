"""Read-only queries over the node's live mount table."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Protocol


@dataclass(frozen=True)
class MountEntry:
    device: str
    target: str


class MountSource(Protocol):
    def entries(self) -> list[MountEntry]: ...


def _decode(token: str) -> str:
    # /proc/mounts escapes whitespace and backslashes as octal sequences.
    return (
        token.replace("\\040", " ")
        .replace("\\011", "\t")
        .replace("\\012", "\n")
        .replace("\\134", "\\")
    )


def parse_mounts(lines: Iterable[str]) -> list[MountEntry]:
    entries = []
    for line in lines:
        parts = line.split()
        if len(parts) < 2:
            continue
        entries.append(MountEntry(device=_decode(parts[0]), target=_decode(parts[1])))
    return entries


class ProcMounts:
    """Mount table read fresh from a ``/proc/mounts`` style file on every query."""

    def __init__(self, path: str = "/proc/mounts") -> None:
        self.path = path

    def entries(self) -> list[MountEntry]:
        with open(self.path, "r", encoding="utf-8") as mounts:
            return parse_mounts(mounts)


def _norm(path: str) -> str:
    return os.path.normpath(path)


class MountTable:
    def __init__(self, source: MountSource) -> None:
        self.source = source

    def is_mount_point(self, path: str) -> bool:
        path = _norm(path)
        return any(_norm(e.target) == path for e in self.source.entries())

    def device_backing(self, path: str) -> str | None:
        path = _norm(path)
        found = None
        # Later rows shadow earlier ones mounted on the same target.
        for entry in self.source.entries():
            if _norm(entry.target) == path:
                found = entry.device
        return found

    def mountpoint_of_device_under(self, device: str, root: str) -> str | None:
        root = _norm(root)
        for entry in self.source.entries():
            if entry.device == device and os.path.dirname(_norm(entry.target)) == root:
                return _norm(entry.target)
        return None

    def count_entries_for_device(self, device: str) -> int:
        return sum(1 for e in self.source.entries() if e.device == device)
