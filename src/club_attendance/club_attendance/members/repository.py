from __future__ import annotations

from typing import Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Read-only source of the current roster.

    Note: services depend on this interface, never on a concrete database.
    """

    def fetch_all(self) -> Sequence[Member]:
        raise NotImplementedError
