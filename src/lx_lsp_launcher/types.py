"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

StatusKind = Enum('StatusKind', ['NONE', 'CHECKING_FOR_UPDATE', 'DOWNLOADING', 'FAILED'])


@dataclass(frozen=True)
class InstallationStatus:
    """Installation status reported to an observer"""
    kind: StatusKind
    message: str | None = None

    @classmethod
    def failed(cls, message: str) -> "InstallationStatus":
        return cls(kind=StatusKind.FAILED, message=message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.name.lower(), "message": self.message}


NO_STATUS = InstallationStatus(StatusKind.NONE)
CHECKING_FOR_UPDATE = InstallationStatus(StatusKind.CHECKING_FOR_UPDATE)
DOWNLOADING = InstallationStatus(StatusKind.DOWNLOADING)


class CommandResult(NamedTuple):
    """Exit status and captured output of a finished process"""
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class PlatformInfo:
    """Platform-specific names, fixed for the process lifetime"""
    system: str
    binary_name: str
    lookup_command: str


@dataclass(frozen=True)
class LaunchCommand:
    """How the host should start the language server"""
    command: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"command": self.command, "args": list(self.args), "env": dict(self.env)}
