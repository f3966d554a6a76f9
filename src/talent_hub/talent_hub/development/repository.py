from __future__ import annotations

from typing import Optional, Protocol

from .model import ActionPlan


class ActionPlanRepository(Protocol):
    def get_latest_for_employee(self, employee_id: str) -> Optional[ActionPlan]:
        raise NotImplementedError

    def save(self, plan: ActionPlan) -> ActionPlan:
        """Insert a new plan or replace the items of an existing one; returns it with its id."""

        raise NotImplementedError
