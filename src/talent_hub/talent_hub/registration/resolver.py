from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import DEFAULT_INTERN_LEVEL
from ..core.enums import ProfileType
from ..organization.model import Track, TrackPosition
from ..users.model import UserSummary
from .form import FormSnapshot

TRACK_RESETS = frozenset({"track_id", "position_id", "intern_level"})
POSITION_RESETS = frozenset({"position_id", "intern_level"})


@dataclass(frozen=True)
class Resolution:
    """Valid choices for each cascade level plus the fields that must go back to defaults."""

    filtered_tracks: tuple[Track, ...]
    filtered_positions: tuple[TrackPosition, ...]
    resets: frozenset[str]


def resolve(
    all_tracks: Iterable[Track],
    all_positions: Iterable[TrackPosition],
    snapshot: FormSnapshot,
) -> Resolution:
    """Derive the department -> track -> position cascade for `snapshot`.

    A selection missing from its filtered candidate set invalidates itself and
    everything below it. No department (or no track) yields empty candidate
    sets, never an error.
    """
    resets: set[str] = set()

    if snapshot.department_id:
        tracks = tuple(t for t in all_tracks if t.department_id == snapshot.department_id)
    else:
        tracks = ()

    track_id = snapshot.track_id
    if not any(t.track_id == track_id for t in tracks):
        resets |= TRACK_RESETS
        track_id = ""

    if track_id:
        positions = tuple(p for p in all_positions if p.track_id == track_id)
    else:
        positions = ()

    if not any(p.link_id == snapshot.position_id for p in positions):
        resets |= POSITION_RESETS

    return Resolution(filtered_tracks=tracks, filtered_positions=positions, resets=frozenset(resets))


def apply_resets(snapshot: FormSnapshot, resolution: Resolution) -> FormSnapshot:
    changes: dict = {}
    if "track_id" in resolution.resets and snapshot.track_id:
        changes["track_id"] = ""
    if "position_id" in resolution.resets and snapshot.position_id:
        changes["position_id"] = ""
        changes["position"] = ""
    if "intern_level" in resolution.resets and snapshot.intern_level != DEFAULT_INTERN_LEVEL:
        changes["intern_level"] = DEFAULT_INTERN_LEVEL
    return snapshot.with_changes(**changes) if changes else snapshot


def position_label(all_positions: Iterable[TrackPosition], position_id: str) -> Optional[str]:
    """Display label for a selected track position, or None when it is unknown."""
    if not position_id:
        return None
    for link in all_positions:
        if link.link_id == position_id:
            return link.label
    return None


def supervisor_candidates(users: Sequence[UserSummary], profile_type: Optional[ProfileType]) -> list[UserSummary]:
    """Users a collaborator of `profile_type` may report to.

    regular -> leaders or directors; leader -> directors; directors report to nobody.
    """
    if profile_type is ProfileType.REGULAR:
        return [u for u in users if u.is_leader or u.is_director]
    if profile_type is ProfileType.LEADER:
        return [u for u in users if u.is_director]
    return []


def is_eligible_supervisor(users: Sequence[UserSummary], profile_type: Optional[ProfileType], user_id: str) -> bool:
    return any(u.user_id == user_id for u in supervisor_candidates(users, profile_type))
