from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Member:
    """Domain entity: a club member as listed by the member directory.

    Read-only for this package; the directory owns it.
    """

    member_id: int
    name: str
    year: int
    email: Optional[str] = None
