from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_optional_date, to_iso, today_local
from ..core.constants import DEFAULT_CONTRACT_TYPE, DEFAULT_INTERN_LEVEL
from ..core.enums import ContractType, InternLevel, ProfileType
from ..core.exceptions import ValidationError

# Form field name (as used by the client and in error mappings) -> snapshot attribute.
PAYLOAD_FIELDS = {
    "name": "name",
    "email": "email",
    "password": "password",
    "position": "position",
    "profileType": "profile_type",
    "teamIds": "team_ids",
    "phone": "phone",
    "birthDate": "birth_date",
    "joinDate": "join_date",
    "profileImage": "profile_image",
    "reportsTo": "reports_to",
    "departmentId": "department_id",
    "trackId": "track_id",
    "positionId": "position_id",
    "internLevel": "intern_level",
    "contractType": "contract_type",
}


@dataclass(frozen=True)
class FormSnapshot:
    """Working state of the user registration form.

    Never persisted: it only becomes a user through `RegistrationService.submit`.
    """

    name: str = ""
    email: str = ""
    password: str = ""
    position: str = ""
    profile_type: Optional[ProfileType] = ProfileType.REGULAR
    team_ids: tuple[str, ...] = ()
    phone: str = ""
    birth_date: Optional[date] = None
    join_date: Optional[date] = field(default_factory=today_local)
    profile_image: Optional[str] = None
    reports_to: str = ""
    department_id: str = ""
    track_id: str = ""
    position_id: str = ""
    intern_level: Optional[InternLevel] = DEFAULT_INTERN_LEVEL
    contract_type: ContractType = DEFAULT_CONTRACT_TYPE

    def with_changes(self, **changes: Any) -> "FormSnapshot":
        return replace(self, **changes)

    @classmethod
    def blank(cls) -> "FormSnapshot":
        """A snapshot with every field cleared, including the usual defaults."""
        return cls(profile_type=None, join_date=None, intern_level=None)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FormSnapshot":
        """Build a snapshot from the camelCase JSON sent by the client.

        Missing keys keep their defaults; malformed values raise a field-scoped
        `ValidationError`.
        """
        errors: dict[str, str] = {}
        values: dict[str, Any] = {}

        for key, attr in PAYLOAD_FIELDS.items():
            if key not in payload:
                continue
            try:
                values[attr] = coerce_field(attr, payload[key])
            except (TypeError, ValueError):
                errors[key] = "Valor inválido"

        if errors:
            raise ValidationError("Dados do formulário inválidos", errors)
        return cls(**values)

    def to_payload(self, *, include_password: bool = False) -> dict:
        out = {
            "name": self.name,
            "email": self.email,
            "position": self.position,
            "profileType": self.profile_type.value if self.profile_type else "",
            "teamIds": list(self.team_ids),
            "phone": self.phone,
            "birthDate": to_iso(self.birth_date) or "",
            "joinDate": to_iso(self.join_date) or "",
            "profileImage": self.profile_image,
            "reportsTo": self.reports_to,
            "departmentId": self.department_id,
            "trackId": self.track_id,
            "positionId": self.position_id,
            "internLevel": self.intern_level.value if self.intern_level else "",
            "contractType": self.contract_type.value,
        }
        if include_password:
            out["password"] = self.password
        return out


def coerce_field(attr: str, value: Any) -> Any:
    """Convert a raw client value into the type stored on the snapshot."""
    if attr in ("birth_date", "join_date"):
        return parse_optional_date(value)
    if attr == "profile_type":
        return ProfileType(value) if value else None
    if attr == "contract_type":
        return ContractType(value) if value else DEFAULT_CONTRACT_TYPE
    if attr == "intern_level":
        return InternLevel(value) if value else None
    if attr == "team_ids":
        if value is None:
            return ()
        if isinstance(value, (str, bytes)):
            raise TypeError("teamIds must be a list")
        return tuple(dict.fromkeys(str(v) for v in value))
    if attr == "profile_image":
        return value or None
    return "" if value is None else str(value)
