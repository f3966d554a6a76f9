from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..core.enums import ActionItemStatus, PlanHorizon
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ActionItem, ActionPlan
from .service import progress, validate_for_save

# JSON key -> ActionItem attribute
ITEM_FIELDS = {
    "competency": "competency",
    "schedule": "schedule",
    "howToDevelop": "how_to_develop",
    "expectedResults": "expected_results",
    "note": "note",
}


def plan_to_json(plan: ActionPlan) -> dict:
    return {
        "id": plan.plan_id,
        "employeeId": plan.employee_id,
        "employeeName": plan.employee_name,
        "position": plan.position,
        "department": plan.department,
        "period": plan.period,
        "items": {
            horizon.value: [
                {"id": item.item_id, "status": item.status.value, **{k: getattr(item, a) for k, a in ITEM_FIELDS.items()}}
                for item in plan.items_for(horizon)
            ]
            for horizon in PlanHorizon
        },
        "progress": progress(plan),
    }


def plan_from_json(data: Any) -> ActionPlan:
    if not isinstance(data, dict):
        raise ValidationError("Plano inválido")
    raw_items = data.get("items") or {}
    if not isinstance(raw_items, dict):
        raise ValidationError("Itens do plano inválidos")

    items = {}
    try:
        for horizon in PlanHorizon:
            items[horizon] = tuple(_item_from_json(i) for i in raw_items.get(horizon.value) or ())
    except (AttributeError, TypeError, ValueError, KeyError):
        raise ValidationError("Itens do plano inválidos")

    return ActionPlan(
        plan_id=str(data["id"]) if data.get("id") else None,
        employee_id=str(data["employeeId"]) if data.get("employeeId") else None,
        employee_name=str(data.get("employeeName") or ""),
        position=str(data.get("position") or ""),
        department=str(data.get("department") or ""),
        period=str(data.get("period") or ""),
        items=items,
    )


def _item_from_json(data: dict) -> ActionItem:
    if not data.get("id"):
        raise KeyError("id")
    return ActionItem(
        item_id=str(data["id"]),
        status=ActionItemStatus(str(data.get("status") or ActionItemStatus.NOT_STARTED.value)),
        **{attr: str(data.get(key) or "") for key, attr in ITEM_FIELDS.items()},
    )


def register(app: Flask, container: Container) -> None:
    service = container.development_service

    @app.route("/api/development/plans/<employee_id>", methods=["GET"], endpoint="development_plan")
    def development_plan(employee_id: str):
        return jsonify({"success": True, "plan": plan_to_json(service.plan_for(employee_id))})

    @app.route("/api/development/plans/validate", methods=["POST"], endpoint="development_validate")
    def development_validate():
        plan = plan_from_json(request.get_json(silent=True))
        validate_for_save(plan)
        return jsonify({"success": True, "progress": progress(plan)})

    @app.route("/api/development/plans", methods=["POST"], endpoint="development_save")
    def development_save():
        saved = service.save(plan_from_json(request.get_json(silent=True)))
        return jsonify({"success": True, "message": "PDI salvo com sucesso!", "plan": plan_to_json(saved)}), 201
