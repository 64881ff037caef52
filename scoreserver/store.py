from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from scoreclient.models import User


@dataclass
class UserRecord:
    id: str
    score: float
    created_at: float
    updated_at: float

    def view(self) -> User:
        return User(id=self.id, score=self.score)


class UserStore:
    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def get(self, user_id: str) -> Optional[User]:
        rec = self._users.get(user_id)
        return rec.view() if rec is not None else None

    def upsert(self, user_id: str, score: float) -> tuple[User, bool]:
        """Store ``score`` for ``user_id``. The flag is True when the user was created."""
        now = time.time()
        rec = self._users.get(user_id)
        if rec is None:
            rec = UserRecord(id=user_id, score=score, created_at=now, updated_at=now)
            self._users[user_id] = rec
            return rec.view(), True

        rec.score = score
        rec.updated_at = now
        return rec.view(), False

    def clear(self) -> int:
        n = len(self._users)
        self._users.clear()
        return n

    def __len__(self) -> int:
        return len(self._users)
