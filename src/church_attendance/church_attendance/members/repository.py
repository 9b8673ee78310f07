from __future__ import annotations

from typing import Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    def list_by_department(self, department: str) -> Sequence[Member]:
        """Members of one department ordered by name."""

        raise NotImplementedError
