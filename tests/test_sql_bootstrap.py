from pathlib import Path

import pytest

from src.talent_hub.talent_hub.database.bootstrap import iter_sql_statements
from src.talent_hub.talent_hub.database.mysql_base import in_placeholders

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def test_statements_split_on_semicolons_outside_quotes():
    sql = """
    -- comment; with semicolon
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("it\\'s; fine");
    SELECT 1
    """
    statements = list(iter_sql_statements(sql))
    assert statements == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("it\\\'s; fine")',
        "SELECT 1",
    ]


def test_schema_creates_every_table():
    sql = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
    created = " ".join(s for s in iter_sql_statements(sql) if s.upper().startswith("CREATE TABLE"))
    for table in (
        "departments",
        "career_tracks",
        "job_positions",
        "track_positions",
        "teams",
        "auth_identities",
        "users",
        "team_members",
        "evaluation_cycles",
        "evaluations",
        "evaluation_competencies",
        "action_plans",
        "action_plan_items",
    ):
        assert table in created


def test_in_placeholders():
    assert in_placeholders(["a", "b", "c"]) == "%s,%s,%s"
    with pytest.raises(ValueError):
        in_placeholders([])
