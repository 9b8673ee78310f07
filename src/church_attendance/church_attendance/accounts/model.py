from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """Login identity (email + password hash). Profile data lives in profiles."""

    account_id: str
    email: str
    password_hash: str
