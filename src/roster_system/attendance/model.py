from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one status mark for a (date, student) pair."""

    status: AttendanceStatus
    timestamp: str

    def to_wire(self) -> dict[str, str]:
        return {"status": self.status.value, "timestamp": self.timestamp}

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "AttendanceEntry":
        return cls(status=AttendanceStatus(data["status"]), timestamp=str(data.get("timestamp") or ""))


# date -> student id -> entry
AttendanceBook = Dict[date, Dict[str, AttendanceEntry]]


@dataclass(frozen=True)
class HistoryItem:
    date: date
    status: AttendanceStatus

    def to_dict(self) -> dict[str, str]:
        return {"date": self.date.strftime("%Y-%m-%d"), "status": self.status.value}


@dataclass(frozen=True)
class DaySummary:
    """Counts for one date across the current roster."""

    present: int
    absent: int
    late: int
    unmarked: int
