from __future__ import annotations

from enum import Enum


class ProfileType(str, Enum):
    """Profile classification of a collaborator.

    The `is_leader` / `is_director` flags stored by the backend are projections
    of this value and are only derived at the persistence/API boundary.
    """

    REGULAR = "regular"
    LEADER = "leader"
    DIRECTOR = "director"

    @property
    def is_leader(self) -> bool:
        return self is not ProfileType.REGULAR

    @property
    def is_director(self) -> bool:
        return self is ProfileType.DIRECTOR

    @classmethod
    def from_flags(cls, *, is_leader: bool, is_director: bool) -> "ProfileType":
        if is_director:
            return cls.DIRECTOR
        if is_leader:
            return cls.LEADER
        return cls.REGULAR


class ContractType(str, Enum):
    CLT = "CLT"
    PJ = "PJ"


class InternLevel(str, Enum):
    """Seniority level inside a position."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class ActionItemStatus(str, Enum):
    """Progress of a development plan item (1 = not started, 5 = done)."""

    NOT_STARTED = "1"
    STARTED = "2"
    IN_PROGRESS = "3"
    ALMOST_DONE = "4"
    DONE = "5"


class PlanHorizon(str, Enum):
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


class CycleStatus(str, Enum):
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"


class EvaluationType(str, Enum):
    SELF = "self"
    LEADER = "leader"
