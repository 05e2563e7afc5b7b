"""Pure selector functions over a :data:`~curvenote.store.store.StoreState`."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Optional

from curvenote.models import ProjectDTO, UserDTO
from curvenote.store.store import StoreState

USERS = "users"
PROJECTS = "projects"


def select_entity(state: StoreState, kind: str, id: Hashable) -> Optional[Any]:
    """Return the DTO stored under ``(kind, id)``, or ``None``."""
    return state.get(kind, {}).get(id)


def select_user(state: StoreState, id: str) -> Optional[UserDTO]:
    return select_entity(state, USERS, id)


def select_project(state: StoreState, id: str) -> Optional[ProjectDTO]:
    return select_entity(state, PROJECTS, id)
