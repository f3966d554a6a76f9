from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import CycleStatus, EvaluationType


@dataclass(frozen=True)
class CompetencyScore:
    """One scored competency of a self or leader evaluation."""

    name: str
    category: str
    score: Optional[float] = None


@dataclass(frozen=True)
class EvaluationCycle:
    cycle_id: str
    name: str
    start_date: date
    end_date: date
    status: CycleStatus = CycleStatus.DRAFT

    @property
    def is_open(self) -> bool:
        return self.status is CycleStatus.OPEN


@dataclass(frozen=True)
class Evaluation:
    """A saved self or leader evaluation of one employee in one cycle.

    `potential_score` only exists on leader evaluations.
    """

    evaluation_id: Optional[str]
    cycle_id: str
    employee_id: str
    evaluator_id: str
    evaluation_type: EvaluationType
    competencies: tuple[CompetencyScore, ...]
    final_score: float
    potential_score: Optional[float] = None
    feedback: Optional[str] = None


@dataclass(frozen=True)
class NineBoxEntry:
    employee_id: str
    performance: float
    potential: float
    position: str
