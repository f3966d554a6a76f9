"""Individual development plan (PDI) editing rules.

The module-level functions are pure: they return a new `ActionPlan` and
never mutate the one they receive.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Optional

from ..common.datetime_utils import today_local
from ..core.enums import ActionItemStatus, PlanHorizon
from ..core.exceptions import NotFoundError, ValidationError
from ..organization.repository import DepartmentRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import ActionItem, ActionPlan
from .repository import ActionPlanRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"competency", "schedule", "how_to_develop", "expected_results", "status", "note"}


def default_period(today: Optional[date] = None) -> str:
    year = (today or today_local()).year
    return f"{year}-{year + 1}"


def start_plan(employee: User, *, department_name: str = "", today: Optional[date] = None) -> ActionPlan:
    return ActionPlan(
        employee_id=employee.user_id,
        employee_name=employee.name,
        position=employee.position,
        department=department_name,
        period=default_period(today),
    )


def _with_items(plan: ActionPlan, horizon: PlanHorizon, items: tuple[ActionItem, ...]) -> ActionPlan:
    new_items = dict(plan.items)
    new_items[horizon] = items
    return replace(plan, items=new_items)


def add_item(plan: ActionPlan, horizon: PlanHorizon, *, item_id: Optional[str] = None) -> ActionPlan:
    item = ActionItem(item_id=item_id or uuid.uuid4().hex)
    return _with_items(plan, horizon, plan.items_for(horizon) + (item,))


def remove_item(plan: ActionPlan, horizon: PlanHorizon, item_id: str) -> ActionPlan:
    return _with_items(plan, horizon, tuple(i for i in plan.items_for(horizon) if i.item_id != item_id))


def update_item(plan: ActionPlan, horizon: PlanHorizon, item_id: str, field_name: str, value: Any) -> ActionPlan:
    if field_name not in EDITABLE_FIELDS:
        raise ValidationError(f"Campo inválido: {field_name}")
    if field_name == "status":
        value = ActionItemStatus(value)
    items = tuple(
        replace(i, **{field_name: value}) if i.item_id == item_id else i for i in plan.items_for(horizon)
    )
    return _with_items(plan, horizon, items)


def progress(plan: ActionPlan) -> float:
    """Share (0-100) of plan items already marked as done."""
    items = plan.all_items
    if not items:
        return 0.0
    done = sum(1 for i in items if i.status is ActionItemStatus.DONE)
    return done / len(items) * 100


def validate_for_save(plan: ActionPlan) -> None:
    if not plan.employee_id:
        raise ValidationError("Selecione um colaborador")
    if not plan.all_items:
        raise ValidationError("Adicione pelo menos um item de desenvolvimento")


class DevelopmentPlanService:
    """Load and save individual development plans.

    The plan editing rules above stay pure; this class only adds the
    employee lookup and persistence around them.
    """

    def __init__(
        self,
        plans: ActionPlanRepository,
        users: UserRepository,
        departments: DepartmentRepository,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._plans = plans
        self._users = users
        self._departments = departments
        self._clock = clock

    def plan_for(self, employee_id: str) -> ActionPlan:
        """The employee's latest saved plan, or a new empty one."""
        employee = self._get_employee(employee_id)
        saved = self._plans.get_latest_for_employee(employee.user_id)
        if saved:
            return saved
        return start_plan(employee, department_name=self._department_name(employee), today=self._clock())

    def save(self, plan: ActionPlan) -> ActionPlan:
        validate_for_save(plan)
        self._get_employee(plan.employee_id)
        saved = self._plans.save(plan)
        logger.info("Saved development plan %s for employee %s", saved.plan_id, saved.employee_id)
        return saved

    def _get_employee(self, employee_id: Optional[str]) -> User:
        employee = self._users.get_by_id(employee_id) if employee_id else None
        if not employee:
            raise NotFoundError("Colaborador não encontrado")
        return employee

    def _department_name(self, employee: User) -> str:
        if not employee.department_id:
            return ""
        for department in self._departments.list_all():
            if department.department_id == employee.department_id:
                return department.name
        return ""
