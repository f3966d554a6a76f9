from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import MAX_SCORE, MIN_SCORE
from ..core.enums import CycleStatus, EvaluationType
from ..core.exceptions import NotFoundError, ValidationError
from .model import CompetencyScore, Evaluation, EvaluationCycle, NineBoxEntry
from .repository import EvaluationCycleRepository, EvaluationRepository
from .scoring import calculate_final_score, nine_box_position

logger = logging.getLogger(__name__)


class EvaluationService:
    """Evaluation cycles and the self / leader evaluations saved inside them.

    Only one cycle is open at a time; evaluations can only be saved while
    their cycle is open, and only once per employee and evaluation type.
    """

    def __init__(self, cycles: EvaluationCycleRepository, evaluations: EvaluationRepository):
        self._cycles = cycles
        self._evaluations = evaluations

    # Cycles

    def list_cycles(self) -> Sequence[EvaluationCycle]:
        return self._cycles.list_all()

    def current_cycle(self) -> Optional[EvaluationCycle]:
        return self._cycles.get_open()

    def create_cycle(self, *, name: str, start_date: Optional[date], end_date: Optional[date]) -> EvaluationCycle:
        name = require_non_empty(name, "Nome do ciclo")
        if not start_date or not end_date:
            raise ValidationError("Informe as datas de início e fim do ciclo")
        if end_date < start_date:
            raise ValidationError("A data final deve ser posterior à data inicial")
        cycle = self._cycles.create(name=name, start_date=start_date, end_date=end_date)
        logger.info("Created evaluation cycle %s (%s)", cycle.cycle_id, cycle.name)
        return cycle

    def open_cycle(self, cycle_id: str) -> EvaluationCycle:
        cycle = self._get_cycle(cycle_id)
        if cycle.status is not CycleStatus.DRAFT:
            raise ValidationError("Apenas ciclos em rascunho podem ser abertos")
        current = self._cycles.get_open()
        if current and current.cycle_id != cycle.cycle_id:
            raise ValidationError(f"Já existe um ciclo aberto: {current.name}")
        return self._set_status(cycle, CycleStatus.OPEN)

    def close_cycle(self, cycle_id: str) -> EvaluationCycle:
        cycle = self._get_cycle(cycle_id)
        if not cycle.is_open:
            raise ValidationError("Apenas ciclos abertos podem ser encerrados")
        return self._set_status(cycle, CycleStatus.CLOSED)

    def _get_cycle(self, cycle_id: str) -> EvaluationCycle:
        cycle = self._cycles.get_by_id(cycle_id)
        if not cycle:
            raise NotFoundError("Ciclo não encontrado")
        return cycle

    def _set_status(self, cycle: EvaluationCycle, status: CycleStatus) -> EvaluationCycle:
        if not self._cycles.set_status(cycle.cycle_id, status):
            raise NotFoundError("Ciclo não encontrado")
        logger.info("Evaluation cycle %s: %s -> %s", cycle.cycle_id, cycle.status.value, status.value)
        return replace(cycle, status=status)

    # Evaluations

    def save_self_evaluation(
        self, *, cycle_id: str, employee_id: str, competencies: Sequence[CompetencyScore]
    ) -> Evaluation:
        return self._save(
            cycle_id=cycle_id,
            employee_id=employee_id,
            evaluator_id=employee_id,
            evaluation_type=EvaluationType.SELF,
            competencies=competencies,
        )

    def save_leader_evaluation(
        self,
        *,
        cycle_id: str,
        employee_id: str,
        evaluator_id: str,
        competencies: Sequence[CompetencyScore],
        potential_score: Optional[float],
        feedback: Optional[str] = None,
    ) -> Evaluation:
        if not evaluator_id:
            raise ValidationError("Avaliador é obrigatório")
        if evaluator_id == employee_id:
            raise ValidationError("O líder não pode avaliar a si mesmo")
        _check_score(potential_score, "Potencial")
        return self._save(
            cycle_id=cycle_id,
            employee_id=employee_id,
            evaluator_id=evaluator_id,
            evaluation_type=EvaluationType.LEADER,
            competencies=competencies,
            potential_score=float(potential_score),
            feedback=(feedback or "").strip() or None,
        )

    def _save(
        self,
        *,
        cycle_id: str,
        employee_id: str,
        evaluator_id: str,
        evaluation_type: EvaluationType,
        competencies: Sequence[CompetencyScore],
        potential_score: Optional[float] = None,
        feedback: Optional[str] = None,
    ) -> Evaluation:
        if not employee_id:
            raise ValidationError("Selecione um colaborador")
        cycle = self._get_cycle(cycle_id)
        if not cycle.is_open:
            raise ValidationError("O ciclo de avaliação não está aberto")
        if not competencies:
            raise ValidationError("Avalie pelo menos uma competência")
        for competency in competencies:
            _check_score(competency.score, competency.name)

        if self._evaluations.exists(cycle_id=cycle_id, employee_id=employee_id, evaluation_type=evaluation_type):
            raise ValidationError("Avaliação já realizada neste ciclo")

        saved = self._evaluations.create(
            Evaluation(
                evaluation_id=None,
                cycle_id=cycle_id,
                employee_id=employee_id,
                evaluator_id=evaluator_id,
                evaluation_type=evaluation_type,
                competencies=tuple(competencies),
                final_score=calculate_final_score(competencies),
                potential_score=potential_score,
                feedback=feedback,
            )
        )
        logger.info(
            "Saved %s evaluation %s for employee %s in cycle %s",
            evaluation_type.value,
            saved.evaluation_id,
            employee_id,
            cycle_id,
        )
        return saved

    def employee_evaluations(self, employee_id: str, *, cycle_id: Optional[str] = None) -> Sequence[Evaluation]:
        return self._evaluations.list_for_employee(employee_id=employee_id, cycle_id=cycle_id)

    def nine_box(self, cycle_id: str) -> list[NineBoxEntry]:
        """Nine-box placement of every employee with a leader evaluation in the cycle."""
        self._get_cycle(cycle_id)
        entries = []
        for evaluation in self._evaluations.list_for_cycle(cycle_id=cycle_id, evaluation_type=EvaluationType.LEADER):
            potential = evaluation.potential_score or 0.0
            entries.append(
                NineBoxEntry(
                    employee_id=evaluation.employee_id,
                    performance=evaluation.final_score,
                    potential=potential,
                    position=nine_box_position(evaluation.final_score, potential),
                )
            )
        return entries


def _check_score(score: Optional[float], label: str) -> None:
    if score is None:
        raise ValidationError(f"Nota obrigatória: {label}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(f"Nota inválida para {label} (de {MIN_SCORE} a {MAX_SCORE})")
