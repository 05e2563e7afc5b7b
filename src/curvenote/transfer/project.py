"""Accessor binding for Curvenote projects (``GET /projects/{id}``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from curvenote.models import ProjectDTO
from curvenote.session import Session
from curvenote.store import ReceiveAction, StoreState, select_project
from curvenote.store.selectors import PROJECTS
from curvenote.transfer.base import EntityAccessor, EntityBinding


class ProjectBinding(EntityBinding[str, ProjectDTO]):
    kind = "Project"

    def build_url(self, id: str) -> str:
        return f"/projects/{id}"

    def normalize(self, id: str, raw: Mapping[str, Any]) -> ProjectDTO:
        return ProjectDTO.model_validate({**raw, "id": str(id)})

    def selector(self, state: StoreState, id: str) -> Optional[ProjectDTO]:
        return select_project(state, id)

    def to_receive_action(self, dto: ProjectDTO) -> ReceiveAction:
        return ReceiveAction(kind=PROJECTS, id=dto.id, dto=dto)


class Project(EntityAccessor[str, ProjectDTO]):
    """Accessor for a single project.

    Projects are requested by id; the API also accepts the project's
    ``name`` in the URL, in which case the loaded accessor's :attr:`id` is
    replaced by the canonical id from the response.
    """

    def __init__(self, session: Session, id: str) -> None:
        super().__init__(session, id, ProjectBinding())

    def site_url(self) -> str:
        """Public URL of the loaded project on the Curvenote site."""
        data = self.data
        return f"{self.session.site_url}/@{data.team}/{data.name}"
