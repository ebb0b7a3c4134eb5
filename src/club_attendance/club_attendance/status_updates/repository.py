from __future__ import annotations

from datetime import date
from typing import Protocol


class StatusUpdateRepository(Protocol):
    def insert_pending(self, *, member_id: int, day: date) -> bool:
        """Insert ``is_updated = false`` for ``(member_id, day)`` unless present.

        Returns True when inserted, False when the row already existed.
        """

        raise NotImplementedError
