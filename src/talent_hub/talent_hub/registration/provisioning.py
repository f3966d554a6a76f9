from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Protocol

from ..common.datetime_utils import parse_optional_date, to_iso
from ..core.constants import DEFAULT_CONTRACT_TYPE, DEFAULT_INTERN_LEVEL
from ..core.enums import ContractType, InternLevel, ProfileType
from ..users.model import User
from .form import FormSnapshot


@dataclass(frozen=True)
class ProvisioningRequest:
    """Normalized registration data handed to the account provisioner.

    Absent optional values are explicit `None`s. `is_leader` / `is_director`
    only exist in `to_payload()`, derived from `profile_type`.
    """

    email: str
    password: str
    name: str
    position: str
    profile_type: ProfileType
    intern_level: InternLevel
    contract_type: ContractType
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    join_date: Optional[date] = None
    profile_image: Optional[str] = None
    reports_to: Optional[str] = None
    department_id: Optional[str] = None
    track_id: Optional[str] = None
    position_id: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: FormSnapshot, *, position: Optional[str] = None) -> "ProvisioningRequest":
        label = position if position is not None else snapshot.position
        return cls(
            email=snapshot.email.strip().lower(),
            password=snapshot.password,
            name=snapshot.name.strip(),
            position=(label or "").strip(),
            profile_type=snapshot.profile_type or ProfileType.REGULAR,
            intern_level=snapshot.intern_level or DEFAULT_INTERN_LEVEL,
            contract_type=snapshot.contract_type or DEFAULT_CONTRACT_TYPE,
            phone=snapshot.phone or None,
            birth_date=snapshot.birth_date,
            join_date=snapshot.join_date,
            profile_image=snapshot.profile_image or None,
            reports_to=snapshot.reports_to or None,
            department_id=snapshot.department_id or None,
            track_id=snapshot.track_id or None,
            position_id=snapshot.position_id or None,
        )

    def to_payload(self) -> dict:
        return {
            "email": self.email,
            "password": self.password,
            "name": self.name,
            "position": self.position,
            "is_leader": self.profile_type.is_leader,
            "is_director": self.profile_type.is_director,
            "phone": self.phone,
            "birth_date": to_iso(self.birth_date),
            "join_date": to_iso(self.join_date),
            "profile_image": self.profile_image,
            "reports_to": self.reports_to,
            "department_id": self.department_id,
            "track_id": self.track_id,
            "position_id": self.position_id,
            "intern_level": self.intern_level.value,
            "contract_type": self.contract_type.value,
        }


class AccountProvisioner(Protocol):
    """Creates a login-capable identity plus its profile.

    Implementations must not open or replace a session for the caller: the
    admin registering someone stays logged in as themselves.
    """

    def create_user_with_auth(self, request: ProvisioningRequest) -> User:
        raise NotImplementedError

    def delete_user(self, user_id: str) -> None:
        raise NotImplementedError


def user_from_payload(data: Mapping[str, Any]) -> User:
    """Build a `User` from the backend's snake_case JSON representation."""
    return User(
        user_id=str(data["id"]),
        name=data.get("name") or "",
        email=data.get("email") or "",
        position=data.get("position") or "",
        profile_type=ProfileType.from_flags(
            is_leader=bool(data.get("is_leader")),
            is_director=bool(data.get("is_director")),
        ),
        intern_level=InternLevel(data.get("intern_level") or DEFAULT_INTERN_LEVEL.value),
        contract_type=ContractType(data.get("contract_type") or DEFAULT_CONTRACT_TYPE.value),
        phone=data.get("phone"),
        birth_date=parse_optional_date(data.get("birth_date")),
        join_date=parse_optional_date(data.get("join_date")),
        profile_image=data.get("profile_image"),
        reports_to=_opt_str(data.get("reports_to")),
        department_id=_opt_str(data.get("department_id")),
        track_id=_opt_str(data.get("track_id")),
        position_id=_opt_str(data.get("position_id")),
        is_active=bool(data.get("active", True)),
    )


def user_to_payload(user: User) -> dict:
    return {
        "id": user.user_id,
        "name": user.name,
        "email": user.email,
        "position": user.position,
        "is_leader": user.is_leader,
        "is_director": user.is_director,
        "phone": user.phone,
        "birth_date": to_iso(user.birth_date),
        "join_date": to_iso(user.join_date),
        "reports_to": user.reports_to,
        "department_id": user.department_id,
        "track_id": user.track_id,
        "position_id": user.position_id,
        "intern_level": user.intern_level.value,
        "contract_type": user.contract_type.value,
        "active": user.is_active,
    }


def _opt_str(value: Any) -> Optional[str]:
    return None if value in (None, "") else str(value)
