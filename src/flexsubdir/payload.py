"""Decoding of the orchestrator's JSON mount options."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from .errors import MalformedRequestError

SERVER_SPLIT = re.compile(r"[:,]")


@dataclass(frozen=True)
class MountRequest:
    target: str
    servers: tuple[str, ...]
    volume: str
    subdir: str

    @property
    def primary(self) -> str:
        return self.servers[0] if self.servers else ""

    @property
    def backups(self) -> tuple[str, ...]:
        return self.servers[1:]


def split_servers(cluster: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in SERVER_SPLIT.split(cluster) if s.strip())


def extract_field(payload: Any, dotted_key: str) -> str:
    """Look up ``dotted_key`` in ``payload`` and return it as a string.

    A key containing dots is first tried literally (the orchestrator uses
    keys such as ``kubernetes.io/pod.name``), then walked one segment at a
    time through nested objects. Anything missing yields ``""``.
    """
    if not isinstance(payload, dict):
        return ""
    if dotted_key in payload:
        value = payload[dotted_key]
    else:
        head, sep, rest = dotted_key.partition(".")
        if not sep or head not in payload:
            return ""
        return extract_field(payload[head], rest)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def parse_mount_request(target: str, raw: str) -> MountRequest:
    try:
        payload = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise MalformedRequestError(f"mount options are not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedRequestError("mount options must be a JSON object")
    return MountRequest(
        target=target,
        servers=split_servers(extract_field(payload, "cluster")),
        volume=extract_field(payload, "volume"),
        subdir=extract_field(payload, "dir"),
    )
