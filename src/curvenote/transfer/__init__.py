"""Get-or-fetch accessors for remote Curvenote entities.

:class:`EntityAccessor` is the generic mechanism; :class:`User` and
:class:`Project` are the concrete accessors built on it.
"""

from curvenote.transfer.base import EntityAccessor, EntityBinding
from curvenote.transfer.project import Project, ProjectBinding
from curvenote.transfer.user import User, UserBinding

__all__ = [
    "EntityAccessor",
    "EntityBinding",
    "Project",
    "ProjectBinding",
    "User",
    "UserBinding",
]
