"""Stable names for shared mounts."""

from __future__ import annotations

SEPARATOR = "-"
ESCAPE = "_"

# Every character that could confuse the join or the filesystem is written
# as ESCAPE plus a code, so SEPARATOR never occurs inside an encoded part.
_ESCAPES = {
    ESCAPE: ESCAPE + ESCAPE,
    SEPARATOR: ESCAPE + "d",
    "/": ESCAPE + "s",
    "\\": ESCAPE + "b",
    "\0": ESCAPE + "0",
}


def _encode(part: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in part)


def identifier_for(primary_server: str, volume: str) -> str:
    """Return the directory and lock name for ``primary_server``/``volume``.

    The unmount path recovers this name from the shared mount's basename, so
    it must only ever depend on its two inputs, and distinct inputs must
    never share a name: ``s1``/``vol1`` gives ``s1-vol1`` while
    ``gluster-1``/``data`` gives ``gluster_d1-data``.
    """
    return f"{_encode(primary_server)}{SEPARATOR}{_encode(volume)}"
