"""Cache store, receive actions, and the reducer that merges them.

Example::

    store = CacheStore()
    store.dispatch(ReceiveAction(kind="users", id="u1", dto=user))
    select_user(store.get_state(), "u1")  # -> user
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

StoreState = Mapping[str, Mapping[Hashable, Any]]
"""Read-only view of the store: ``kind -> id -> dto``."""


@dataclass(frozen=True)
class ReceiveAction:
    """Record that *dto* was received for entity ``(kind, id)``.

    Attributes:
        kind: Store slot, e.g. ``"users"`` or ``"projects"``.
        id: Entity identifier within the slot.
        dto: The normalised DTO to keep.
    """

    kind: str
    id: Hashable
    dto: Any


def reduce(state: StoreState, action: ReceiveAction) -> StoreState:
    """Return a new state with *action* merged in.

    *state* is never mutated.  A received DTO replaces any earlier entry
    with the same kind and id; other entries are shared with the old state.
    """
    slot = dict(state.get(action.kind, {}))
    slot[action.id] = action.dto
    merged = dict(state)
    merged[action.kind] = MappingProxyType(slot)
    return MappingProxyType(merged)


class CacheStore:
    """Process-wide keyed collection of previously fetched DTOs.

    There is no eviction and no direct mutation path: entries are added with
    :meth:`dispatch` and read through selectors over :meth:`get_state`.
    """

    def __init__(self) -> None:
        self._state: StoreState = MappingProxyType({})

    def get_state(self) -> StoreState:
        """Return the current state snapshot.

        The snapshot is immutable; later dispatches produce a new snapshot
        and leave this one untouched.
        """
        return self._state

    def dispatch(self, action: ReceiveAction) -> ReceiveAction:
        """Merge *action* into the store and return it."""
        self._state = reduce(self._state, action)
        return action

    def __len__(self) -> int:
        return sum(len(slot) for slot in self._state.values())
