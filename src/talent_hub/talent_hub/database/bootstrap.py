from __future__ import annotations

import re
import uuid
from contextlib import closing
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

# (name, email, password, position, is_leader, is_director)
DEMO_USERS = (
    ("Diretora Demo", "diretora@talenthub.local", "diretora123", "Diretora de Pessoas", True, True),
    ("Líder Demo", "lider@talenthub.local", "lider123", "Líder de Engenharia", True, False),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the SQL file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on `;`, ignoring semicolons inside quoted strings and `--` comment lines."""
    buf: list[str] = []
    quote = ""
    escape = False

    for line in sql.splitlines(keepends=True):
        if not quote and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif quote:
                if ch == quote:
                    quote = ""
            elif ch in ("'", '"'):
                quote = ch
            elif ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_settings(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    with closing(_connect(target)) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_settings(db_config)
    with closing(_connect(target, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or refresh the password of) the demo director and leader accounts."""
    target = DBConfig.from_settings(db_config)
    with closing(_connect(target)) as conn:
        cur = conn.cursor(dictionary=True)
        for name, email, password, position, is_leader, is_director in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM auth_identities WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute("UPDATE auth_identities SET password_hash=%s WHERE id=%s", (password_hash, existing["id"]))
                continue

            user_id = str(uuid.uuid4())
            cur.execute(
                "INSERT INTO auth_identities(id, email, password_hash) VALUES(%s,%s,%s)",
                (user_id, email, password_hash),
            )
            cur.execute(
                """
                INSERT INTO users(id, name, email, position, is_leader, is_director, join_date, intern_level, contract_type)
                VALUES(%s,%s,%s,%s,%s,%s,CURDATE(),'A','CLT')
                """,
                (user_id, name, email, position, int(is_leader), int(is_director)),
            )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_settings(db_config)
    with closing(_connect(target)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
