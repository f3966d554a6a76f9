from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import CycleStatus, EvaluationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, in_placeholders
from .model import CompetencyScore, Evaluation, EvaluationCycle
from .repository import EvaluationCycleRepository, EvaluationRepository


def _row_to_cycle(r: dict) -> EvaluationCycle:
    return EvaluationCycle(
        cycle_id=str(r["id"]),
        name=r["name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=CycleStatus(r["status"]),
    )


class MySQLEvaluationCycleRepository(EvaluationCycleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[EvaluationCycle]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, start_date, end_date, status FROM evaluation_cycles ORDER BY start_date DESC")
            return [_row_to_cycle(r) for r in fetchall(cur)]

    def get_by_id(self, cycle_id: str) -> Optional[EvaluationCycle]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, start_date, end_date, status FROM evaluation_cycles WHERE id=%s", (cycle_id,))
            row = fetchone(cur)
            return _row_to_cycle(row) if row else None

    def get_open(self) -> Optional[EvaluationCycle]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, start_date, end_date, status
                FROM evaluation_cycles
                WHERE status='open'
                ORDER BY start_date DESC
                LIMIT 1
                """
            )
            row = fetchone(cur)
            return _row_to_cycle(row) if row else None

    def create(self, *, name: str, start_date: date, end_date: date) -> EvaluationCycle:
        cycle = EvaluationCycle(cycle_id=str(uuid.uuid4()), name=name, start_date=start_date, end_date=end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO evaluation_cycles(id, name, start_date, end_date, status) VALUES(%s,%s,%s,%s,%s)",
                (cycle.cycle_id, cycle.name, cycle.start_date, cycle.end_date, cycle.status.value),
            )
        return cycle

    def set_status(self, cycle_id: str, status: CycleStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE evaluation_cycles SET status=%s WHERE id=%s", (status.value, cycle_id))
            return cur.rowcount > 0


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, *, cycle_id: str, employee_id: str, evaluation_type: EvaluationType) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM evaluations WHERE cycle_id=%s AND employee_id=%s AND evaluation_type=%s LIMIT 1",
                (cycle_id, employee_id, evaluation_type.value),
            )
            return fetchone(cur) is not None

    def create(self, evaluation: Evaluation) -> Evaluation:
        saved = replace(evaluation, evaluation_id=str(uuid.uuid4()))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO evaluations(
                    id, cycle_id, employee_id, evaluator_id, evaluation_type,
                    final_score, potential_score, feedback
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    saved.evaluation_id,
                    saved.cycle_id,
                    saved.employee_id,
                    saved.evaluator_id,
                    saved.evaluation_type.value,
                    saved.final_score,
                    saved.potential_score,
                    saved.feedback,
                ),
            )
            cur.executemany(
                """
                INSERT INTO evaluation_competencies(evaluation_id, position_index, name, category, score)
                VALUES(%s,%s,%s,%s,%s)
                """,
                [(saved.evaluation_id, i, c.name, c.category, c.score) for i, c in enumerate(saved.competencies)],
            )
        return saved

    def list_for_employee(self, *, employee_id: str, cycle_id: Optional[str] = None) -> Sequence[Evaluation]:
        sql = "SELECT * FROM evaluations WHERE employee_id=%s"
        params: list = [employee_id]
        if cycle_id:
            sql += " AND cycle_id=%s"
            params.append(cycle_id)
        return self._query(sql + " ORDER BY created_at", params)

    def list_for_cycle(self, *, cycle_id: str, evaluation_type: EvaluationType) -> Sequence[Evaluation]:
        return self._query(
            "SELECT * FROM evaluations WHERE cycle_id=%s AND evaluation_type=%s ORDER BY created_at",
            [cycle_id, evaluation_type.value],
        )

    def _query(self, sql: str, params: list) -> list[Evaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [str(r["id"]) for r in rows]
            cur.execute(
                f"""
                SELECT evaluation_id, name, category, score
                FROM evaluation_competencies
                WHERE evaluation_id IN ({in_placeholders(ids)})
                ORDER BY position_index
                """,
                tuple(ids),
            )
            competencies: dict[str, list[CompetencyScore]] = {}
            for c in fetchall(cur):
                score = None if c.get("score") is None else as_float(c["score"])
                competencies.setdefault(str(c["evaluation_id"]), []).append(
                    CompetencyScore(name=c["name"], category=c["category"], score=score)
                )

        return [
            Evaluation(
                evaluation_id=str(r["id"]),
                cycle_id=str(r["cycle_id"]),
                employee_id=str(r["employee_id"]),
                evaluator_id=str(r["evaluator_id"]),
                evaluation_type=EvaluationType(r["evaluation_type"]),
                competencies=tuple(competencies.get(str(r["id"]), ())),
                final_score=as_float(r.get("final_score")),
                potential_score=None if r.get("potential_score") is None else as_float(r["potential_score"]),
                feedback=r.get("feedback"),
            )
            for r in rows
        ]
