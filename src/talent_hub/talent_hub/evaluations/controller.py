from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date, to_iso
from ..core.exceptions import ValidationError
from ..container import Container
from .model import CompetencyScore, Evaluation, EvaluationCycle
from .scoring import calculate_category_score, calculate_final_score, nine_box_position


def _cycle_to_json(cycle: EvaluationCycle) -> dict:
    return {
        "id": cycle.cycle_id,
        "name": cycle.name,
        "startDate": to_iso(cycle.start_date),
        "endDate": to_iso(cycle.end_date),
        "status": cycle.status.value,
    }


def _evaluation_to_json(evaluation: Evaluation) -> dict:
    return {
        "id": evaluation.evaluation_id,
        "cycleId": evaluation.cycle_id,
        "employeeId": evaluation.employee_id,
        "evaluatorId": evaluation.evaluator_id,
        "type": evaluation.evaluation_type.value,
        "competencies": [{"name": c.name, "category": c.category, "score": c.score} for c in evaluation.competencies],
        "finalScore": evaluation.final_score,
        "potentialScore": evaluation.potential_score,
        "feedback": evaluation.feedback,
    }


def _score(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError("Nota inválida")


def _competencies_from_json(items: Any) -> list[CompetencyScore]:
    if not isinstance(items, list):
        raise ValidationError("Competências inválidas")
    out = []
    for item in items:
        if not isinstance(item, dict) or not str(item.get("name") or "").strip():
            raise ValidationError("Competências inválidas")
        out.append(
            CompetencyScore(
                name=str(item["name"]).strip(),
                category=str(item.get("category") or ""),
                score=_score(item.get("score")),
            )
        )
    return out


def _date(value: Any, label: str):
    try:
        return parse_optional_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Data inválida: {label}")


def register(app: Flask, container: Container) -> None:
    service = container.evaluation_service

    def _json_body() -> dict:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Corpo da requisição inválido")
        return body

    @app.route("/api/evaluations/cycles", methods=["GET"], endpoint="evaluation_cycles")
    def evaluation_cycles():
        return jsonify({"success": True, "cycles": [_cycle_to_json(c) for c in service.list_cycles()]})

    @app.route("/api/evaluations/cycles/current", methods=["GET"], endpoint="evaluation_current_cycle")
    def evaluation_current_cycle():
        cycle = service.current_cycle()
        return jsonify({"success": True, "cycle": _cycle_to_json(cycle) if cycle else None})

    @app.route("/api/evaluations/cycles", methods=["POST"], endpoint="evaluation_create_cycle")
    def evaluation_create_cycle():
        body = _json_body()
        cycle = service.create_cycle(
            name=str(body.get("name") or ""),
            start_date=_date(body.get("startDate"), "início"),
            end_date=_date(body.get("endDate"), "fim"),
        )
        return jsonify({"success": True, "cycle": _cycle_to_json(cycle)}), 201

    @app.route("/api/evaluations/cycles/<cycle_id>/open", methods=["PUT"], endpoint="evaluation_open_cycle")
    def evaluation_open_cycle(cycle_id: str):
        return jsonify({"success": True, "cycle": _cycle_to_json(service.open_cycle(cycle_id))})

    @app.route("/api/evaluations/cycles/<cycle_id>/close", methods=["PUT"], endpoint="evaluation_close_cycle")
    def evaluation_close_cycle(cycle_id: str):
        return jsonify({"success": True, "cycle": _cycle_to_json(service.close_cycle(cycle_id))})

    @app.route("/api/evaluations/cycles/<cycle_id>/nine-box", methods=["GET"], endpoint="evaluation_nine_box")
    def evaluation_nine_box(cycle_id: str):
        entries = service.nine_box(cycle_id)
        return jsonify(
            {
                "success": True,
                "entries": [
                    {
                        "employeeId": e.employee_id,
                        "performance": e.performance,
                        "potential": e.potential,
                        "position": e.position,
                    }
                    for e in entries
                ],
            }
        )

    @app.route("/api/evaluations/employee/<employee_id>", methods=["GET"], endpoint="evaluation_employee")
    def evaluation_employee(employee_id: str):
        items = service.employee_evaluations(employee_id, cycle_id=request.args.get("cycleId") or None)
        return jsonify({"success": True, "evaluations": [_evaluation_to_json(e) for e in items]})

    @app.route("/api/evaluations/self", methods=["POST"], endpoint="evaluation_save_self")
    def evaluation_save_self():
        body = _json_body()
        saved = service.save_self_evaluation(
            cycle_id=str(body.get("cycleId") or ""),
            employee_id=str(body.get("employeeId") or ""),
            competencies=_competencies_from_json(body.get("competencies")),
        )
        return jsonify({"success": True, "evaluation": _evaluation_to_json(saved)}), 201

    @app.route("/api/evaluations/leader", methods=["POST"], endpoint="evaluation_save_leader")
    def evaluation_save_leader():
        body = _json_body()
        saved = service.save_leader_evaluation(
            cycle_id=str(body.get("cycleId") or ""),
            employee_id=str(body.get("employeeId") or ""),
            evaluator_id=str(body.get("evaluatorId") or ""),
            competencies=_competencies_from_json(body.get("competencies")),
            potential_score=_score(body.get("potentialScore")),
            feedback=str(body.get("feedback") or ""),
        )
        return jsonify({"success": True, "evaluation": _evaluation_to_json(saved)}), 201

    @app.route("/api/evaluations/score", methods=["POST"], endpoint="evaluation_score")
    def evaluation_score():
        """Scores for a draft evaluation; nothing is saved."""
        body = _json_body()
        competencies = _competencies_from_json(body.get("competencies"))
        final_score = calculate_final_score(competencies)
        potential = _score(body.get("potentialScore"))
        categories = dict.fromkeys(c.category for c in competencies)
        return jsonify(
            {
                "success": True,
                "finalScore": final_score,
                "categories": {name: calculate_category_score(competencies, name) for name in categories},
                "nineBox": nine_box_position(final_score, potential) if potential is not None else None,
            }
        )
