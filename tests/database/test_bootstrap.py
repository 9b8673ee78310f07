import mysql.connector

from src.church_attendance.church_attendance.database.bootstrap import _connect, _iter_sql_statements, _strip_create_db_and_use
from src.church_attendance.church_attendance.database.connection import DBConfig


def test_splitter_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- demo members; two rows
    INSERT INTO members(member_id, name, department) VALUES('a', '김;철수', '청년부');
    INSERT INTO members(member_id, name, department) VALUES('b', 'O\\'Neil', "유년부");
    """

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 2
    assert "'김;철수'" in statements[0]
    assert statements[1].endswith('"유년부")')


def test_strip_create_database_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS church;\nUSE church;\nCREATE TABLE t (id INT);\n"

    assert _strip_create_db_and_use(sql).strip() == "CREATE TABLE t (id INT);"


def test_bootstrap_connects_through_connection_factory(monkeypatch):
    calls = []
    monkeypatch.setattr(mysql.connector, "connect", lambda **kwargs: calls.append(kwargs) or object())
    target = DBConfig.from_dict({"host": "db", "port": 3307, "user": "u", "password": "p", "database": "church"})

    _connect(target, with_database=False)
    _connect(target)

    assert calls[0] == {"host": "db", "port": 3307, "user": "u", "password": "p", "use_pure": True}
    assert calls[1]["database"] == "church"
    assert calls[1]["use_pure"] is True
