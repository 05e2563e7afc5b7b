"""Get-or-fetch accessors for single remote entities.

An :class:`EntityAccessor` wraps one identified entity (a user, a project,
...) and gives it *fetch-if-absent, else use the cache* semantics against
the session's :class:`~curvenote.store.CacheStore`.  Everything that is
specific to one kind of entity lives in an :class:`EntityBinding`, injected
at construction time:

* :meth:`~EntityBinding.build_url` -- where the entity lives on the API.
* :meth:`~EntityBinding.normalize` -- turn a raw JSON object into the DTO.
* :meth:`~EntityBinding.selector` -- look the entity up in the store.
* :meth:`~EntityBinding.to_receive_action` -- the action that writes a DTO
  back into the store, or ``None`` to deliberately skip the store.

All four are abstract, so a binding that forgets one cannot be
instantiated.

Cache hits are trusted forever: once an entity is in the store, ``get()``
never goes back to the network for it, even if the remote copy changed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Mapping
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from curvenote.exceptions import (
    FetchFailedError,
    InvalidResponseError,
    NotLoadedError,
    UnconfiguredError,
)
from curvenote.session import Session
from curvenote.store import ReceiveAction, StoreState

IdT = TypeVar("IdT", bound=Hashable)
DtoT = TypeVar("DtoT", bound=BaseModel)


class EntityBinding(ABC, Generic[IdT, DtoT]):
    """Everything an accessor needs to know about one kind of entity."""

    kind: str = ""
    """Human-readable entity kind used in log lines and error messages."""

    @abstractmethod
    def build_url(self, id: IdT) -> str:
        """Return the API path (or absolute URL) of entity *id*."""

    @abstractmethod
    def normalize(self, id: IdT, raw: Mapping[str, Any]) -> DtoT:
        """Build the DTO for *id* from a raw JSON object."""

    @abstractmethod
    def selector(self, state: StoreState, id: IdT) -> Optional[DtoT]:
        """Return the cached DTO for *id*, or ``None`` on a miss."""

    @abstractmethod
    def to_receive_action(self, dto: DtoT) -> Optional[ReceiveAction]:
        """Return the action that stores *dto*, or ``None`` to skip the store."""


class EntityAccessor(Generic[IdT, DtoT]):
    """Get-or-fetch wrapper around exactly one remote entity.

    An accessor starts *unloaded*.  A successful :meth:`get`, or assigning
    to :attr:`data`, makes it *loaded*; there is no way back.

    Args:
        session: The session used for network calls and the cache store.
        id: Identifier of the entity.
        binding: The entity-specific behaviour.

    Raises:
        UnconfiguredError: If *binding* is not an :class:`EntityBinding`.

    Example::

        project = EntityAccessor(session, "my-project", ProjectBinding()).get()
        project.data.title
    """

    def __init__(self, session: Session, id: IdT, binding: EntityBinding[IdT, DtoT]) -> None:
        if not isinstance(binding, EntityBinding):
            raise UnconfiguredError(
                f"{type(self).__name__}: an EntityBinding must be supplied, got {binding!r}"
            )
        self.session = session
        self.id = id
        self.binding = binding
        self._data: Optional[DtoT] = None

    @property
    def kind(self) -> str:
        return self.binding.kind

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> DtoT:
        """The loaded DTO.

        Raises:
            NotLoadedError: If neither :meth:`get` nor an assignment has
                succeeded yet.
        """
        if self._data is None:
            raise NotLoadedError(self.kind)
        return self._data

    @data.setter
    def data(self, value: Mapping[str, Any] | DtoT) -> None:
        # The only place accessor state and the shared store are synced.
        raw = value.model_dump() if isinstance(value, BaseModel) else value
        if not isinstance(raw, Mapping):
            raise TypeError(f"{self.kind}: expected a JSON object, got {type(raw).__name__}")
        id = raw.get("id", self.id)
        dto = self.binding.normalize(id, raw)
        action = self.binding.to_receive_action(dto)
        self.id = getattr(dto, "id", id)
        self._data = dto
        if action is not None:
            self.session.store.dispatch(action)

    def get(self) -> EntityAccessor[IdT, DtoT]:
        """Load the entity from the store, or from the API on a miss.

        On any error the accessor keeps whatever state it had before.

        Returns:
            ``self``, so calls can be chained.

        Raises:
            FetchFailedError: If the API answers anything but HTTP 200.
            InvalidResponseError: If a 200 body is not a JSON object or
                fails normalisation.
        """
        url = self.binding.build_url(self.id)
        cached = self.binding.selector(self.session.store.get_state(), self.id)
        if cached is not None:
            self.session.log.debug(f'Loading {self.kind} from cache: "{url}"')
            self.data = cached
            return self

        self.session.log.debug(f'Fetching {self.kind}: "{url}"')
        response = self.session.get(url)
        if response.status != 200:
            raise FetchFailedError(self.kind, url, response.status)
        body = response.body
        if not isinstance(body, Mapping):
            raise InvalidResponseError(
                self.kind, url, f"expected a JSON object, got {type(body).__name__}"
            )
        try:
            self.data = body
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise InvalidResponseError(self.kind, url, f"invalid fields: {fields}") from exc
        return self

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "unloaded"
        return f"<{type(self).__name__} {self.kind} {self.id!r} ({state})>"
