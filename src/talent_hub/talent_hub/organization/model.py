from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    """Root of the department -> track -> position cascade."""

    department_id: str
    name: str


@dataclass(frozen=True)
class Track:
    """Career path inside exactly one department."""

    track_id: str
    name: str
    department_id: str
    description: Optional[str] = None


@dataclass(frozen=True)
class JobPosition:
    """Global catalog entry referenced by track positions."""

    position_id: str
    name: str
    code: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class TrackPosition:
    """Ordered link between a track and a job position.

    `position` is joined at load time from the job position catalog and may be
    missing when the catalog lookup failed.
    """

    link_id: str
    track_id: str
    position_id: str
    order_index: int
    class_id: Optional[str] = None
    base_salary: float = 0.0
    active: bool = True
    position: Optional[JobPosition] = None

    @property
    def label(self) -> str:
        if self.position and self.position.name:
            return self.position.name
        return self.position_id


@dataclass(frozen=True)
class Team:
    team_id: str
    name: str
    department_id: Optional[str] = None
