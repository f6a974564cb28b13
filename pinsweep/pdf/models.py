from dataclasses import dataclass
from enum import Enum


class ProtectionStatus(str, Enum):
    NOT_PROTECTED = "not_protected"
    PROTECTED = "protected"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class ProtectionCheck:
    """Outcome of asking whether a document needs a passcode to open."""

    status: ProtectionStatus
    reason: str = ""

    @classmethod
    def not_protected(cls) -> "ProtectionCheck":
        return cls(ProtectionStatus.NOT_PROTECTED)

    @classmethod
    def protected(cls) -> "ProtectionCheck":
        return cls(ProtectionStatus.PROTECTED)

    @classmethod
    def unreadable(cls, reason: str) -> "ProtectionCheck":
        return cls(ProtectionStatus.UNREADABLE, reason)
