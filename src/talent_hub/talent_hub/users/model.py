from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ContractType, InternLevel, ProfileType


@dataclass(frozen=True)
class User:
    """Domain entity: a registered collaborator.

    Note: the password never lives here; it only travels inside the provisioning request.
    """

    user_id: str
    name: str
    email: str
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
    is_active: bool = True

    @property
    def is_leader(self) -> bool:
        return self.profile_type.is_leader

    @property
    def is_director(self) -> bool:
        return self.profile_type.is_director


@dataclass(frozen=True)
class UserSummary:
    """Read-model used to offer `reports_to` candidates."""

    user_id: str
    name: str
    position: str
    profile_type: ProfileType

    @property
    def is_leader(self) -> bool:
        return self.profile_type.is_leader

    @property
    def is_director(self) -> bool:
        return self.profile_type.is_director

    @property
    def display_label(self) -> str:
        label = f"{self.name} - {self.position}"
        if self.is_director:
            return f"{label} (Diretor)"
        if self.is_leader:
            return f"{label} (Líder)"
        return label
