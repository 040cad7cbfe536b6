from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import ErrorCode, ErrorKind
from ..schedules.strategies.base import StatusDecision
from ..verification.gate import GateResult
from .model import AttendanceSession


@dataclass(frozen=True)
class AttendanceError:
    """A rejected transition. Routine business outcome, returned rather than raised."""

    code: ErrorCode
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ErrorKind:
        return self.code.kind

    def to_dict(self) -> dict:
        return {"code": self.code.value, "kind": self.kind.value, "message": self.message, "details": dict(self.details)}


@dataclass(frozen=True)
class AttendanceResult:
    session: Optional[AttendanceSession] = None
    error: Optional[AttendanceError] = None
    verification: Optional[GateResult] = None
    decision: Optional[StatusDecision] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls,
        session: AttendanceSession,
        *,
        verification: Optional[GateResult] = None,
        decision: Optional[StatusDecision] = None,
    ) -> "AttendanceResult":
        return cls(session=session, verification=verification, decision=decision)

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        *,
        session: Optional[AttendanceSession] = None,
        verification: Optional[GateResult] = None,
        **details: Any,
    ) -> "AttendanceResult":
        return cls(session=session, error=AttendanceError(code, message, details), verification=verification)
