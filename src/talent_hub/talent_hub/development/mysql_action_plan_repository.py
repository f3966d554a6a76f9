from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Optional

from ..core.enums import ActionItemStatus, PlanHorizon
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActionItem, ActionPlan
from .repository import ActionPlanRepository


class MySQLActionPlanRepository(ActionPlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_employee(self, employee_id: str) -> Optional[ActionPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, employee_name, position, department, period
                FROM action_plans
                WHERE employee_id=%s
                ORDER BY updated_at DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                """
                SELECT id, horizon, competency, schedule, how_to_develop, expected_results, status, note
                FROM action_plan_items
                WHERE plan_id=%s
                ORDER BY position_index
                """,
                (row["id"],),
            )
            items: dict[PlanHorizon, tuple[ActionItem, ...]] = {horizon: () for horizon in PlanHorizon}
            for r in fetchall(cur):
                horizon = PlanHorizon(r["horizon"])
                items[horizon] = items[horizon] + (
                    ActionItem(
                        item_id=str(r["id"]),
                        competency=r.get("competency") or "",
                        schedule=r.get("schedule") or "",
                        how_to_develop=r.get("how_to_develop") or "",
                        expected_results=r.get("expected_results") or "",
                        status=ActionItemStatus(str(r.get("status") or ActionItemStatus.NOT_STARTED.value)),
                        note=r.get("note") or "",
                    ),
                )

        return ActionPlan(
            plan_id=str(row["id"]),
            employee_id=str(row["employee_id"]),
            employee_name=row.get("employee_name") or "",
            position=row.get("position") or "",
            department=row.get("department") or "",
            period=row.get("period") or "",
            items=items,
        )

    def save(self, plan: ActionPlan) -> ActionPlan:
        saved = plan if plan.plan_id else replace(plan, plan_id=str(uuid.uuid4()))
        header = (saved.employee_id, saved.employee_name, saved.position, saved.department, saved.period)

        # Header and items are replaced together in one transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM action_plans WHERE id=%s", (saved.plan_id,))
            exists = fetchone(cur) is not None
            if exists:
                cur.execute(
                    """
                    UPDATE action_plans
                    SET employee_id=%s, employee_name=%s, position=%s, department=%s, period=%s,
                        updated_at=CURRENT_TIMESTAMP
                    WHERE id=%s
                    """,
                    (*header, saved.plan_id),
                )
                cur.execute("DELETE FROM action_plan_items WHERE plan_id=%s", (saved.plan_id,))
            else:
                cur.execute(
                    """
                    INSERT INTO action_plans(id, employee_id, employee_name, position, department, period)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (saved.plan_id, *header),
                )

            rows = [
                (
                    item.item_id,
                    saved.plan_id,
                    horizon.value,
                    index,
                    item.competency,
                    item.schedule,
                    item.how_to_develop,
                    item.expected_results,
                    item.status.value,
                    item.note,
                )
                for horizon in PlanHorizon
                for index, item in enumerate(saved.items_for(horizon))
            ]
            if rows:
                cur.executemany(
                    """
                    INSERT INTO action_plan_items(
                        id, plan_id, horizon, position_index, competency, schedule,
                        how_to_develop, expected_results, status, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    rows,
                )
        return saved
