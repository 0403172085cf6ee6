"""Error taxonomy for plugin operations.

Every error collapses to a Failure result at the command boundary; the
classes exist so the controllers can tell the stages apart in logs.
"""

from __future__ import annotations

from typing import Sequence


class PluginError(RuntimeError):
    pass


class SetupError(PluginError):
    """Required plugin directories could not be created."""


class MalformedRequestError(PluginError):
    """The orchestrator payload could not be decoded."""


class LockUnavailableError(PluginError):
    """The advisory lock primitive could not be invoked at all."""


class MountCommandError(PluginError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"{' '.join(self.argv)} exited {returncode}{detail}")


class VerificationError(PluginError):
    """The mount table does not show the state the operation should have produced."""


class CleanupError(PluginError):
    """Shared mount teardown failed after the bind was already removed."""
