from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Member:
    """교인: 출석 체크 대상 (로그인 계정이 없어도 됨)."""

    member_id: str
    name: str
    department: str
