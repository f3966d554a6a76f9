from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import CycleStatus, EvaluationType
from .model import Evaluation, EvaluationCycle


class EvaluationCycleRepository(Protocol):
    def list_all(self) -> Sequence[EvaluationCycle]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, cycle_id: str) -> Optional[EvaluationCycle]:
        raise NotImplementedError

    def get_open(self) -> Optional[EvaluationCycle]:
        raise NotImplementedError

    def create(self, *, name: str, start_date: date, end_date: date) -> EvaluationCycle:
        raise NotImplementedError

    def set_status(self, cycle_id: str, status: CycleStatus) -> bool:
        raise NotImplementedError


class EvaluationRepository(Protocol):
    def exists(self, *, cycle_id: str, employee_id: str, evaluation_type: EvaluationType) -> bool:
        raise NotImplementedError

    def create(self, evaluation: Evaluation) -> Evaluation:
        """Persist `evaluation` with its competencies; returns it with its new id."""

        raise NotImplementedError

    def list_for_employee(self, *, employee_id: str, cycle_id: Optional[str] = None) -> Sequence[Evaluation]:
        raise NotImplementedError

    def list_for_cycle(self, *, cycle_id: str, evaluation_type: EvaluationType) -> Sequence[Evaluation]:
        raise NotImplementedError
