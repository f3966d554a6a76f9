import pytest

from src.talent_hub.talent_hub.evaluations.model import CompetencyScore
from src.talent_hub.talent_hub.evaluations.scoring import (
    UNCLASSIFIED,
    calculate_category_score,
    calculate_final_score,
    nine_box_position,
    score_band,
)

COMPETENCIES = [
    CompetencyScore(name="Comunicação", category="behavioral", score=4),
    CompetencyScore(name="Trabalho em equipe", category="behavioral", score=5),
    CompetencyScore(name="Python", category="technical", score=3),
    CompetencyScore(name="Arquitetura", category="technical", score=None),
]


def test_category_score_counts_unscored_as_zero():
    assert calculate_category_score(COMPETENCIES, "behavioral") == 4.5
    assert calculate_category_score(COMPETENCIES, "technical") == 1.5


def test_category_without_competencies_scores_zero():
    assert calculate_category_score(COMPETENCIES, "organizational") == 0.0


def test_final_score_is_rounded():
    assert calculate_final_score(COMPETENCIES) == 3.0
    assert calculate_final_score(COMPETENCIES[:3]) == 4.0
    thirds = [CompetencyScore("a", "x", 1), CompetencyScore("b", "x", 2), CompetencyScore("c", "x", 2)]
    assert calculate_final_score(thirds) == 1.67
    assert calculate_final_score([]) == 0.0


@pytest.mark.parametrize("score, band", [(1, "low"), (2, "low"), (2.5, "medium"), (3, "medium"), (3.01, "high"), (5, "high")])
def test_score_band(score, band):
    assert score_band(score) == band


def test_nine_box_position():
    assert nine_box_position(5, 5) == "Estrela"
    assert nine_box_position(1, 1) == "Questionável"
    assert nine_box_position(1, 5) == "Enigma"
    assert nine_box_position(3, 3) == "Mantenedor"
    assert UNCLASSIFIED == "Não classificado"
