from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import CycleStatus, EvaluationType
from src.talent_hub.talent_hub.core.exceptions import NotFoundError, ValidationError
from src.talent_hub.talent_hub.evaluations.model import CompetencyScore

SCORES = [
    CompetencyScore(name="Comunicação", category="behavioral", score=4),
    CompetencyScore(name="Python", category="technical", score=5),
]


def test_current_cycle_is_the_open_one(evaluation_service):
    assert evaluation_service.current_cycle().cycle_id == "cyc-2025"
    assert [c.cycle_id for c in evaluation_service.list_cycles()] == ["cyc-2025", "cyc-2024"]


def test_create_cycle_starts_as_draft(evaluation_service):
    cycle = evaluation_service.create_cycle(name="  Ciclo 2026 ", start_date=date(2026, 1, 1), end_date=date(2026, 6, 30))
    assert cycle.name == "Ciclo 2026"
    assert cycle.status is CycleStatus.DRAFT


def test_create_cycle_requires_ordered_dates(evaluation_service):
    with pytest.raises(ValidationError, match="posterior"):
        evaluation_service.create_cycle(name="Ciclo", start_date=date(2026, 6, 1), end_date=date(2026, 1, 1))
    with pytest.raises(ValidationError, match="Informe as datas"):
        evaluation_service.create_cycle(name="Ciclo", start_date=None, end_date=date(2026, 1, 1))


def test_only_one_cycle_can_be_open(evaluation_service):
    draft = evaluation_service.create_cycle(name="Ciclo 2026", start_date=date(2026, 1, 1), end_date=date(2026, 12, 31))
    with pytest.raises(ValidationError, match="Já existe um ciclo aberto: Ciclo 2025"):
        evaluation_service.open_cycle(draft.cycle_id)

    evaluation_service.close_cycle("cyc-2025")
    opened = evaluation_service.open_cycle(draft.cycle_id)
    assert opened.is_open
    assert evaluation_service.current_cycle().cycle_id == draft.cycle_id


def test_closed_cycle_cannot_be_reopened(evaluation_service):
    with pytest.raises(ValidationError, match="rascunho"):
        evaluation_service.open_cycle("cyc-2024")
    with pytest.raises(ValidationError, match="Apenas ciclos abertos"):
        evaluation_service.close_cycle("cyc-2024")


def test_unknown_cycle_is_not_found(evaluation_service):
    with pytest.raises(NotFoundError):
        evaluation_service.close_cycle("nope")
    with pytest.raises(NotFoundError):
        evaluation_service.nine_box("nope")


def test_self_evaluation_is_saved_once_per_cycle(evaluation_service):
    saved = evaluation_service.save_self_evaluation(cycle_id="cyc-2025", employee_id="usr-1", competencies=SCORES)
    assert saved.evaluation_id
    assert saved.evaluator_id == "usr-1"
    assert saved.evaluation_type is EvaluationType.SELF
    assert saved.final_score == 4.5

    with pytest.raises(ValidationError, match="já realizada"):
        evaluation_service.save_self_evaluation(cycle_id="cyc-2025", employee_id="usr-1", competencies=SCORES)


def test_evaluation_needs_an_open_cycle(evaluation_service):
    with pytest.raises(ValidationError, match="não está aberto"):
        evaluation_service.save_self_evaluation(cycle_id="cyc-2024", employee_id="usr-1", competencies=SCORES)


@pytest.mark.parametrize(
    "competencies, message",
    [
        ([], "pelo menos uma competência"),
        ([CompetencyScore(name="Python", category="technical")], "Nota obrigatória: Python"),
        ([CompetencyScore(name="Python", category="technical", score=6)], "Nota inválida para Python"),
        ([CompetencyScore(name="Python", category="technical", score=0)], "Nota inválida para Python"),
    ],
)
def test_competency_scores_are_checked(evaluation_service, evaluations, competencies, message):
    with pytest.raises(ValidationError, match=message):
        evaluation_service.save_self_evaluation(cycle_id="cyc-2025", employee_id="usr-1", competencies=competencies)
    assert evaluations.items == []


def test_leader_cannot_evaluate_themselves(evaluation_service):
    with pytest.raises(ValidationError, match="a si mesmo"):
        evaluation_service.save_leader_evaluation(
            cycle_id="cyc-2025", employee_id="usr-1", evaluator_id="usr-1", competencies=SCORES, potential_score=4
        )


def test_leader_evaluation_requires_potential(evaluation_service):
    with pytest.raises(ValidationError, match="Nota obrigatória: Potencial"):
        evaluation_service.save_leader_evaluation(
            cycle_id="cyc-2025", employee_id="usr-1", evaluator_id="usr-lead", competencies=SCORES, potential_score=None
        )


def test_nine_box_uses_leader_evaluations(evaluation_service):
    evaluation_service.save_self_evaluation(cycle_id="cyc-2025", employee_id="usr-1", competencies=SCORES)
    saved = evaluation_service.save_leader_evaluation(
        cycle_id="cyc-2025",
        employee_id="usr-1",
        evaluator_id="usr-lead",
        competencies=SCORES,
        potential_score=5,
        feedback="   ",
    )
    assert saved.feedback is None

    entries = evaluation_service.nine_box("cyc-2025")
    assert len(entries) == 1
    assert entries[0].employee_id == "usr-1"
    assert entries[0].position == "Estrela"
    assert [e.evaluation_type for e in evaluation_service.employee_evaluations("usr-1")] == [
        EvaluationType.SELF,
        EvaluationType.LEADER,
    ]
