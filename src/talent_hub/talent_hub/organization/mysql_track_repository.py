from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, as_str_id, db_cursor, fetchall, in_placeholders
from .model import JobPosition, Track, TrackPosition
from .repository import JobPositionRepository, TrackPositionRepository, TrackRepository


class MySQLTrackRepository(TrackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Track]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description, department_id FROM career_tracks ORDER BY name")
            rows = fetchall(cur)
            return [
                Track(
                    track_id=str(r["id"]),
                    name=r["name"],
                    department_id=str(r["department_id"]),
                    description=r.get("description"),
                )
                for r in rows
            ]


class MySQLTrackPositionRepository(TrackPositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TrackPosition]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, track_id, position_id, class_id, base_salary, order_index, active
                FROM track_positions
                ORDER BY order_index
                """
            )
            rows = fetchall(cur)
            return [
                TrackPosition(
                    link_id=str(r["id"]),
                    track_id=str(r["track_id"]),
                    position_id=str(r["position_id"]),
                    order_index=int(r.get("order_index") or 0),
                    class_id=as_str_id(r.get("class_id")),
                    base_salary=as_float(r.get("base_salary")),
                    active=bool(r.get("active", True)),
                )
                for r in rows
            ]


class MySQLJobPositionRepository(JobPositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_ids(self, position_ids: Sequence[str]) -> Sequence[JobPosition]:
        ids = list(dict.fromkeys(position_ids))
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, name, code, description FROM job_positions WHERE id IN ({in_placeholders(ids)})",
                tuple(ids),
            )
            rows = fetchall(cur)
            return [
                JobPosition(
                    position_id=str(r["id"]),
                    name=r["name"],
                    code=r.get("code"),
                    description=r.get("description"),
                )
                for r in rows
            ]
