from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT account_id, email, password_hash FROM auth_accounts WHERE account_id=%s",
                (account_id,),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT account_id, email, password_hash FROM auth_accounts WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def create(self, *, account_id: str, email: str, password_hash: str) -> Account:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO auth_accounts(account_id, email, password_hash) VALUES(%s,%s,%s)",
                (account_id, email, password_hash),
            )
        return Account(account_id=account_id, email=email, password_hash=password_hash)


def _to_account(row: dict) -> Account:
    return Account(
        account_id=str(row["account_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
    )
