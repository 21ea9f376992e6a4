from src.attendly.attendly.database.bootstrap import SCHEMA_PATH, _iter_sql_statements, _strip_create_db_and_use


def test_schema_file_defines_records_table():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    assert not any(s.upper().startswith(("CREATE DATABASE", "USE ")) for s in statements)
    assert any("CREATE TABLE IF NOT EXISTS records" in s for s in statements)


def test_splitter_ignores_semicolons_inside_quotes():
    statements = list(_iter_sql_statements("INSERT INTO t VALUES ('a;b'); SELECT 1;"))

    assert statements == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]
