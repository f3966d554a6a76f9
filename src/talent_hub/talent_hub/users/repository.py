from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User, UserSummary


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_summaries(self) -> Sequence[UserSummary]:
        raise NotImplementedError
