from pathlib import Path

from batch_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_splits_into_create_table_statements():
    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))))

    assert len(statements) == 4
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert "uq_member_day" in statements[-1]


def test_semicolons_inside_quotes_do_not_split():
    sql = "INSERT INTO t VALUES ('a;b');\n-- note; ignored\nSELECT 1;"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_trailing_statement_without_semicolon_is_kept():
    assert list(iter_sql_statements("SELECT 1;\nSELECT 2")) == ["SELECT 1", "SELECT 2"]


def test_database_selection_lines_are_removed():
    sql = "CREATE DATABASE IF NOT EXISTS other;\nUSE other;\nCREATE TABLE x (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE x (id INT)"]
