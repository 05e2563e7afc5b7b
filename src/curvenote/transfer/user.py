"""Accessor binding for Curvenote users (``GET /users/{id}``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from curvenote.models import UserDTO
from curvenote.session import Session
from curvenote.store import ReceiveAction, StoreState, select_user
from curvenote.store.selectors import USERS
from curvenote.transfer.base import EntityAccessor, EntityBinding


class UserBinding(EntityBinding[str, UserDTO]):
    kind = "User"

    def build_url(self, id: str) -> str:
        return f"/users/{id}"

    def normalize(self, id: str, raw: Mapping[str, Any]) -> UserDTO:
        return UserDTO.model_validate({**raw, "id": str(id)})

    def selector(self, state: StoreState, id: str) -> Optional[UserDTO]:
        return select_user(state, id)

    def to_receive_action(self, dto: UserDTO) -> ReceiveAction:
        return ReceiveAction(kind=USERS, id=dto.id, dto=dto)


class User(EntityAccessor[str, UserDTO]):
    """Accessor for a single user.

    Example::

        author = User(session, "u-123").get()
        author.data.display_name
    """

    def __init__(self, session: Session, id: str) -> None:
        super().__init__(session, id, UserBinding())
