from __future__ import annotations

from typing import Sequence

from .model import CompetencyScore

NINE_BOX_LABELS = {
    ("low", "low"): "Questionável",
    ("low", "medium"): "Novo/Desenvolvimento",
    ("low", "high"): "Enigma",
    ("medium", "low"): "Eficaz",
    ("medium", "medium"): "Mantenedor",
    ("medium", "high"): "Forte Performance",
    ("high", "low"): "Especialista",
    ("high", "medium"): "Alto Performance",
    ("high", "high"): "Estrela",
}
UNCLASSIFIED = "Não classificado"


def _mean(competencies: Sequence[CompetencyScore]) -> float:
    if not competencies:
        return 0.0
    total = sum(c.score or 0 for c in competencies)
    return round(total / len(competencies), 2)


def calculate_category_score(competencies: Sequence[CompetencyScore], category: str) -> float:
    """Average score of one category; unscored competencies count as zero."""
    return _mean([c for c in competencies if c.category == category])


def calculate_final_score(competencies: Sequence[CompetencyScore]) -> float:
    return _mean(competencies)


def score_band(score: float) -> str:
    if score <= 2:
        return "low"
    if score <= 3:
        return "medium"
    return "high"


def nine_box_position(performance: float, potential: float) -> str:
    """Nine-box cell for a performance/potential pair on the 1-5 scale."""
    return NINE_BOX_LABELS.get((score_band(performance), score_band(potential)), UNCLASSIFIED)
