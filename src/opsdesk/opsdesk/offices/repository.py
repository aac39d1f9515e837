from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Office


class OfficeRepository(Protocol):
    def get_by_id(self, office_id: str) -> Optional[Office]:
        raise NotImplementedError

    def list_offices(self, *, active_only: bool = True) -> Sequence[Office]:
        raise NotImplementedError

    def upsert(self, office: Office) -> None:
        raise NotImplementedError
