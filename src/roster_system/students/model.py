from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError

# Python attribute -> key used in the persisted/exported JSON.
PROFILE_FIELDS: dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "grade": "grade",
    "phone": "phone",
    "date_of_birth": "dateOfBirth",
    "address": "address",
    "parent_name": "parentName",
    "parent_phone": "parentPhone",
}
_WIRE_TO_ATTR = {wire: attr for attr, wire in PROFILE_FIELDS.items()}


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Accept both ``firstName`` and ``first_name`` style keys."""
    out: dict[str, Any] = {}
    for key, value in data.items():
        out[_WIRE_TO_ATTR.get(key, key)] = value
    return out


@dataclass(frozen=True)
class StudentData:
    """Profile fields supplied when a student is created."""

    first_name: str
    last_name: str
    email: str
    grade: str
    phone: Optional[str] = None
    date_of_birth: str = ""
    address: str = ""
    parent_name: str = ""
    parent_phone: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StudentData":
        values = _normalize_keys(data)
        unknown = set(values) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown student field(s): {', '.join(sorted(unknown))}")
        return cls(
            first_name=str(values.get("first_name") or ""),
            last_name=str(values.get("last_name") or ""),
            email=str(values.get("email") or ""),
            grade=str(values.get("grade") or ""),
            phone=values.get("phone") or None,
            date_of_birth=str(values.get("date_of_birth") or ""),
            address=str(values.get("address") or ""),
            parent_name=str(values.get("parent_name") or ""),
            parent_phone=str(values.get("parent_phone") or ""),
        )

    def to_wire(self) -> dict[str, Any]:
        return {wire: getattr(self, attr) for attr, wire in PROFILE_FIELDS.items()}


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster.

    ``extra`` keeps keys found in stored data that this model does not know
    about, so a load/save cycle never drops them. It is a read-only view and
    is left out of the hash.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    grade: str
    created_at: str
    phone: Optional[str] = None
    date_of_birth: str = ""
    address: str = ""
    parent_name: str = ""
    parent_phone: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def create(cls, data: StudentData, *, student_id: str, created_at: str) -> "Student":
        return cls(id=student_id, created_at=created_at, **asdict(data))

    def profile(self) -> StudentData:
        return StudentData(**{attr: getattr(self, attr) for attr in PROFILE_FIELDS})

    def to_wire(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        out.update(self.profile().to_wire())
        out["createdAt"] = self.created_at
        out.update(self.extra)
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Student":
        known = {"id", "createdAt", *PROFILE_FIELDS.values()}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(
            id=str(data["id"]),
            first_name=str(data.get("firstName") or ""),
            last_name=str(data.get("lastName") or ""),
            email=str(data.get("email") or ""),
            grade=str(data.get("grade") or ""),
            created_at=str(data.get("createdAt") or ""),
            phone=data.get("phone"),
            date_of_birth=str(data.get("dateOfBirth") or ""),
            address=str(data.get("address") or ""),
            parent_name=str(data.get("parentName") or ""),
            parent_phone=str(data.get("parentPhone") or ""),
            extra=extra,
        )


@dataclass(frozen=True)
class StudentUpdate:
    """Partial update: every attribute left as ``None`` is kept as-is."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    grade: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StudentUpdate":
        values = _normalize_keys(data)
        allowed = {f.name for f in fields(cls)}
        unknown = set(values) - allowed
        if unknown:
            raise ValidationError(f"Unknown student field(s): {', '.join(sorted(unknown))}")
        return cls(**{k: (None if v is None else str(v)) for k, v in values.items()})

    def changes(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def to_wire(self) -> dict[str, str]:
        return {PROFILE_FIELDS[k]: v for k, v in self.changes().items()}

    def apply(self, student: Student) -> Student:
        return replace(student, **self.changes())
