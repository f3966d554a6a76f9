from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ContractType, InternLevel, ProfileType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_str_id, db_cursor, fetchall, fetchone
from .model import User, UserSummary
from .repository import UserRepository


def row_to_user(row: dict) -> User:
    return User(
        user_id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        position=row.get("position") or "",
        profile_type=ProfileType.from_flags(
            is_leader=bool(row.get("is_leader")),
            is_director=bool(row.get("is_director")),
        ),
        intern_level=InternLevel(row.get("intern_level") or InternLevel.A.value),
        contract_type=ContractType(row.get("contract_type") or ContractType.CLT.value),
        phone=row.get("phone"),
        birth_date=row.get("birth_date"),
        join_date=row.get("join_date"),
        profile_image=row.get("profile_image"),
        reports_to=as_str_id(row.get("reports_to")),
        department_id=as_str_id(row.get("department_id")),
        track_id=as_str_id(row.get("track_id")),
        position_id=as_str_id(row.get("position_id")),
        is_active=bool(row.get("active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, position, is_leader, is_director, phone, birth_date, join_date,
                       profile_image, reports_to, department_id, track_id, position_id,
                       intern_level, contract_type, active
                FROM users
                WHERE id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return row_to_user(row) if row else None

    def list_summaries(self) -> Sequence[UserSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, position, is_leader, is_director
                FROM users
                WHERE active=1
                ORDER BY name
                """
            )
            rows = fetchall(cur)
            return [
                UserSummary(
                    user_id=str(r["id"]),
                    name=r["name"],
                    position=r.get("position") or "",
                    profile_type=ProfileType.from_flags(
                        is_leader=bool(r.get("is_leader")),
                        is_director=bool(r.get("is_director")),
                    ),
                )
                for r in rows
            ]
