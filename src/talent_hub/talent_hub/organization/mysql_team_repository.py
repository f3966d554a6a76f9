from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_str_id, db_cursor, fetchall
from .model import Team
from .repository import TeamMembershipRepository, TeamRepository


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, department_id FROM teams ORDER BY name")
            rows = fetchall(cur)
            return [
                Team(team_id=str(r["id"]), name=r["name"], department_id=as_str_id(r.get("department_id")))
                for r in rows
            ]


class MySQLTeamMembershipRepository(TeamMembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_members(self, *, user_id: str, team_ids: Sequence[str]) -> int:
        rows = [(team_id, user_id) for team_id in dict.fromkeys(team_ids)]
        if not rows:
            return 0
        # All rows go in one transaction: either every membership exists or none.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany("INSERT INTO team_members(team_id, user_id) VALUES(%s,%s)", rows)
            return len(rows)
