from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Profile


class ProfileRepository(Protocol):
    """Profile 저장소 인터페이스.

    서비스 계층은 구체 DB가 아니라 이 인터페이스에 의존한다.
    """

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Profile]:
        raise NotImplementedError

    def insert(self, profile: Profile) -> Profile:
        raise NotImplementedError

    def update(self, profile: Profile) -> bool:
        raise NotImplementedError

    def set_approved(self, profile_id: str, *, approved: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, profile_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Profile]:
        """All profiles ordered by full_name, nulls last."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
