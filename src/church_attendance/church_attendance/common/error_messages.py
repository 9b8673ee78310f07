"""Translate credential-provider / database error text into Korean UI messages.

Provider messages are matched by keyword (case-insensitive). Anything not
recognised is passed through unchanged.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_SECONDS_RE = re.compile(r"(\d+)\s*seconds?", re.IGNORECASE)


@dataclass(frozen=True)
class TranslatedError:
    message: str
    cooldown_seconds: Optional[int] = None


def extract_cooldown_seconds(message: str) -> Optional[int]:
    match = _SECONDS_RE.search(message or "")
    if not match:
        return None
    seconds = int(match.group(1))
    return seconds or None


def translate_provider_error(message: str) -> TranslatedError:
    raw = message or ""
    lower = raw.lower()

    if "for security purposes" in lower or "rate limit" in lower:
        seconds = extract_cooldown_seconds(raw)
        if seconds:
            return TranslatedError(f"보안을 위해 {seconds}초 후에 다시 시도해주세요. 잠시만 기다려주세요.", seconds)
        return TranslatedError("보안을 위해 잠시 후에 다시 시도해주세요.")

    if "invalid login credentials" in lower or "wrong password" in lower:
        return TranslatedError("아이디 또는 비밀번호가 올바르지 않습니다.")

    if "email not confirmed" in lower or "email confirmation" in lower:
        return TranslatedError("이메일 인증이 완료되지 않았습니다. 이메일을 확인해주세요.")

    if "user not found" in lower:
        return TranslatedError("등록되지 않은 아이디입니다.")

    if any(k in lower for k in ("user already registered", "already exists", "duplicate key", "duplicate entry", "unique constraint")):
        return TranslatedError("이미 등록된 이메일입니다. 로그인을 시도해주세요.")

    if "invalid email" in lower or "email format" in lower:
        return TranslatedError("올바른 이메일 형식이 아닙니다.")

    if "password" in lower and "weak" in lower:
        return TranslatedError("비밀번호가 너무 약합니다. 더 강한 비밀번호를 사용해주세요.")

    if "password" in lower and ("length" in lower or "at least" in lower):
        return TranslatedError("비밀번호는 최소 6자 이상이어야 합니다.")

    if "foreign key" in lower or "constraint" in lower:
        return TranslatedError("데이터베이스 제약 조건 오류가 발생했습니다. 관리자에게 문의해주세요.")

    if "null value" in lower or "not null" in lower or "cannot be null" in lower:
        return TranslatedError("필수 정보가 누락되었습니다. 모든 필드를 입력해주세요.")

    if "network" in lower or "connection" in lower:
        return TranslatedError("네트워크 연결 오류가 발생했습니다. 인터넷 연결을 확인하고 다시 시도해주세요.")

    return TranslatedError(raw)
