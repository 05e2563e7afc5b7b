"""Pydantic models shared across curvenote.

**Session models** -- :class:`SessionOptions` overrides the default base
URLs and :class:`SessionResponse` is what :meth:`Session.get` and
:meth:`Session.post` return.

**Entity DTOs** -- :class:`UserDTO` and :class:`ProjectDTO` are the
normalised shapes kept in the cache store. The API returns more fields than
these models declare; unknown keys are preserved (``extra="allow"``) so a
DTO dumped back to JSON loses nothing.

**Configuration** -- :class:`Settings` holds the resolved token and base
URLs, see :func:`curvenote.config.resolve_settings`.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_API_URL = "https://api.curvenote.com"
DEFAULT_SITE_URL = "https://curvenote.com"


# --- Session ---


class SessionOptions(BaseModel):
    """Base URL overrides accepted by :class:`~curvenote.session.Session`."""

    api_url: Optional[str] = Field(default=None, description="Override the API base URL")
    site_url: Optional[str] = Field(default=None, description="Override the site base URL")


class SessionResponse(BaseModel):
    """Status code and parsed body of a single API call.

    ``body`` is the decoded JSON body, the raw text when the body is not
    JSON, or ``None`` for an empty body.
    """

    model_config = ConfigDict(frozen=True)

    status: int
    body: Any = None


# --- Entities ---


def _default_if_null(model: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    # The API sends null for text fields that were never filled in.
    if value is None and info.field_name is not None:
        return model.model_fields[info.field_name].default
    return value


class UserDTO(BaseModel):
    """A Curvenote user as returned by ``GET /users/{id}``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    username: str = ""
    display_name: str = ""
    email: Optional[str] = None
    bio: str = ""

    @field_validator("username", "display_name", "bio", mode="before")
    @classmethod
    def _null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, v, info)


class ProjectDTO(BaseModel):
    """A Curvenote project as returned by ``GET /projects/{id}``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str = ""
    title: str = ""
    description: str = ""
    team: str = ""
    visibility: str = "private"
    created_by: Optional[str] = None
    date_created: Optional[str] = None
    date_modified: Optional[str] = None

    @field_validator("name", "title", "description", "team", "visibility", mode="before")
    @classmethod
    def _null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        return _default_if_null(cls, v, info)


# --- Configuration ---


class Settings(BaseModel):
    """Effective connection settings for a CLI invocation.

    Persisted (without the token, unless the user writes one) at
    ``~/.config/curvenote/config.json``.
    """

    token: Optional[str] = Field(default=None, description="API bearer token")
    api_url: str = Field(default=DEFAULT_API_URL)
    site_url: str = Field(default=DEFAULT_SITE_URL)

    def session_options(self) -> SessionOptions:
        return SessionOptions(api_url=self.api_url, site_url=self.site_url)
