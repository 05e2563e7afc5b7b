"""In-memory cache store for fetched entities.

The store is owned by a :class:`~curvenote.session.Session` and shared by
every accessor created against that session.  It is keyed by entity kind,
then by id, and holds normalised DTOs for the lifetime of the process.

* Writes happen only through :meth:`CacheStore.dispatch` of a
  :class:`ReceiveAction`, merged by the pure :func:`reduce` function.
* Reads happen only through selector functions (:func:`select_user`,
  :func:`select_project`) applied to the snapshot from
  :meth:`CacheStore.get_state`.

Entries are never evicted or revalidated.
"""

from curvenote.store.selectors import select_entity, select_project, select_user
from curvenote.store.store import CacheStore, ReceiveAction, StoreState, reduce

__all__ = [
    "CacheStore",
    "ReceiveAction",
    "StoreState",
    "reduce",
    "select_entity",
    "select_project",
    "select_user",
]
