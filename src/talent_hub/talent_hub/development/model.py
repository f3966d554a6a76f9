from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import ActionItemStatus, PlanHorizon


@dataclass(frozen=True)
class ActionItem:
    """One development action of an individual development plan (PDI)."""

    item_id: str
    competency: str = ""
    schedule: str = ""
    how_to_develop: str = ""
    expected_results: str = ""
    status: ActionItemStatus = ActionItemStatus.NOT_STARTED
    note: str = ""


@dataclass(frozen=True)
class ActionPlan:
    """Individual development plan (PDI) of one employee for one period."""

    employee_id: Optional[str] = None
    plan_id: Optional[str] = None
    employee_name: str = ""
    position: str = ""
    department: str = ""
    period: str = ""
    items: dict[PlanHorizon, tuple[ActionItem, ...]] = field(
        default_factory=lambda: {horizon: () for horizon in PlanHorizon}
    )

    def items_for(self, horizon: PlanHorizon) -> tuple[ActionItem, ...]:
        return self.items.get(horizon, ())

    @property
    def all_items(self) -> tuple[ActionItem, ...]:
        return tuple(item for horizon in PlanHorizon for item in self.items_for(horizon))
