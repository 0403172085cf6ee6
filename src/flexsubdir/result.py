"""Result objects printed back to the orchestrator."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass


class Status(str, enum.Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"
    NOT_SUPPORTED = "Not supported"


@dataclass(frozen=True)
class Capabilities:
    attach: bool = False
    selinux_relabel: bool = False

    def to_dict(self) -> dict:
        return {"attach": self.attach, "selinuxRelabel": self.selinux_relabel}


@dataclass(frozen=True)
class Result:
    status: Status
    message: str
    capabilities: Capabilities | None = None

    @classmethod
    def success(cls, message: str, capabilities: Capabilities | None = None) -> "Result":
        return cls(Status.SUCCESS, message, capabilities)

    @classmethod
    def failure(cls, message: str) -> "Result":
        return cls(Status.FAILURE, message)

    @classmethod
    def not_supported(cls, message: str) -> "Result":
        return cls(Status.NOT_SUPPORTED, message)

    @property
    def exit_code(self) -> int:
        return 1 if self.status is Status.FAILURE else 0

    def to_dict(self) -> dict:
        payload = {"status": self.status.value, "message": self.message}
        if self.capabilities is not None:
            payload["capabilities"] = self.capabilities.to_dict()
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
