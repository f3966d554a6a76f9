from __future__ import annotations

from typing import Protocol, Sequence

from .model import Department, JobPosition, Team, Track, TrackPosition


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError


class TrackRepository(Protocol):
    """Career tracks, ordered by name."""

    def list_all(self) -> Sequence[Track]:
        raise NotImplementedError


class TrackPositionRepository(Protocol):
    """Track/position links, ordered by `order_index`, without the joined position."""

    def list_all(self) -> Sequence[TrackPosition]:
        raise NotImplementedError


class JobPositionRepository(Protocol):
    def get_by_ids(self, position_ids: Sequence[str]) -> Sequence[JobPosition]:
        raise NotImplementedError


class TeamRepository(Protocol):
    def list_all(self) -> Sequence[Team]:
        raise NotImplementedError


class TeamMembershipRepository(Protocol):
    def add_members(self, *, user_id: str, team_ids: Sequence[str]) -> int:
        raise NotImplementedError
