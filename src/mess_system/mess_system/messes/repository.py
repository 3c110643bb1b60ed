from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Mess, MessUpdate


class MessRepository(Protocol):
    def get_by_id(self, mess_id: int) -> Optional[Mess]:
        raise NotImplementedError

    def create(
        self,
        *,
        owner_id: int,
        name: str,
        location: str,
        description: Optional[str],
        veg_available: bool,
        nonveg_available: bool,
    ) -> int:
        raise NotImplementedError

    def update(self, mess_id: int, changes: MessUpdate) -> bool:
        raise NotImplementedError

    def list_active(self) -> Sequence[Mess]:
        """Active messes, newest first."""
        raise NotImplementedError

    def list_by_owner(self, owner_id: int) -> Sequence[Mess]:
        raise NotImplementedError
