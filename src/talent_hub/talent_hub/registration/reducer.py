"""Registration form transitions.

`reduce(state, event, reference)` is the only way the form changes. Every
transition ends by re-running the cascade resolver, so a stale downstream
selection can never survive an upstream change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, Union

from ..common.validators import format_phone
from ..core.enums import ProfileType
from ..organization.model import Track, TrackPosition
from ..users.model import UserSummary
from .form import PAYLOAD_FIELDS, FormSnapshot, coerce_field
from .resolver import apply_resets, is_eligible_supervisor, position_label, resolve


class ReferenceView(Protocol):
    @property
    def tracks(self) -> Sequence[Track]: ...

    @property
    def positions(self) -> Sequence[TrackPosition]: ...

    @property
    def users(self) -> Sequence[UserSummary]: ...


@dataclass(frozen=True)
class DepartmentSelected:
    department_id: str


@dataclass(frozen=True)
class TrackSelected:
    track_id: str


@dataclass(frozen=True)
class PositionSelected:
    position_id: str


@dataclass(frozen=True)
class ProfileTypeChanged:
    profile_type: Optional[ProfileType]


@dataclass(frozen=True)
class TeamToggled:
    team_id: str


@dataclass(frozen=True)
class FieldChanged:
    """Plain edit of any form field, keyed by its client name (e.g. `birthDate`)."""

    field: str
    value: Any


@dataclass(frozen=True)
class ReferenceDataChanged:
    """Reference lists were (re)loaded; only the cascade is re-evaluated."""


FormEvent = Union[
    DepartmentSelected,
    TrackSelected,
    PositionSelected,
    ProfileTypeChanged,
    TeamToggled,
    FieldChanged,
    ReferenceDataChanged,
]


def reduce(state: FormSnapshot, event: FormEvent, reference: ReferenceView) -> FormSnapshot:
    if isinstance(event, DepartmentSelected):
        state = state.with_changes(department_id=event.department_id or "")
    elif isinstance(event, TrackSelected):
        state = state.with_changes(track_id=event.track_id or "")
    elif isinstance(event, PositionSelected):
        state = state.with_changes(position_id=event.position_id or "")
    elif isinstance(event, ProfileTypeChanged):
        state = _change_profile_type(state, event.profile_type, reference)
    elif isinstance(event, TeamToggled):
        state = _toggle_team(state, event.team_id)
    elif isinstance(event, FieldChanged):
        state = _change_field(state, event.field, event.value, reference)
    elif isinstance(event, ReferenceDataChanged):
        pass
    else:
        raise TypeError(f"Unsupported form event: {event!r}")

    return _cascade(state, reference)


def _cascade(state: FormSnapshot, reference: ReferenceView) -> FormSnapshot:
    state = apply_resets(state, resolve(reference.tracks, reference.positions, state))
    if state.position_id:
        label = position_label(reference.positions, state.position_id)
        if label is not None and label != state.position:
            state = state.with_changes(position=label)
    return state


def _change_profile_type(
    state: FormSnapshot, profile_type: Optional[ProfileType], reference: ReferenceView
) -> FormSnapshot:
    if profile_type is None:
        return state.with_changes(profile_type=None, reports_to="")

    profile_type = ProfileType(profile_type)
    if profile_type is ProfileType.DIRECTOR:
        return state.with_changes(profile_type=profile_type, team_ids=(), reports_to="")

    reports_to = state.reports_to
    if reports_to and not is_eligible_supervisor(reference.users, profile_type, reports_to):
        reports_to = ""
    return state.with_changes(profile_type=profile_type, reports_to=reports_to)


def _toggle_team(state: FormSnapshot, team_id: str) -> FormSnapshot:
    if state.profile_type is ProfileType.DIRECTOR:
        return state
    if team_id in state.team_ids:
        return state.with_changes(team_ids=tuple(t for t in state.team_ids if t != team_id))
    return state.with_changes(team_ids=state.team_ids + (team_id,))


def _change_field(state: FormSnapshot, field: str, value: Any, reference: ReferenceView) -> FormSnapshot:
    attr = PAYLOAD_FIELDS.get(field)
    if attr is None:
        raise KeyError(f"Unknown form field: {field}")
    if attr == "profile_type":
        return _change_profile_type(state, coerce_field(attr, value), reference)
    if attr == "phone":
        return state.with_changes(phone=format_phone(value or ""))
    return state.with_changes(**{attr: coerce_field(attr, value)})
