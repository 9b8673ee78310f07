from __future__ import annotations

import re

from ..core.exceptions import ValidationError

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def require_non_empty(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_min_length(value: str, message: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(message)
    return value


def require_username(value: str) -> str:
    username = require_non_empty(value, "아이디를 입력해주세요.")
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("아이디는 영문, 숫자, 언더스코어(_), 하이픈(-)만 사용할 수 있습니다.")
    return username.lower()


def split_departments(value: str) -> list[str]:
    """'청년부, 유년부,,' -> ['청년부', '유년부']"""
    return [d.strip() for d in (value or "").split(",") if d.strip()]
