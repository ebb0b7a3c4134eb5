from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StatusUpdateRecord:
    """Whether a member sent their status update on a given date."""

    member_id: int
    date: date
    is_updated: bool = False
    update_id: Optional[int] = None
