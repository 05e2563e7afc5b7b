"""curvenote -- session and entity-cache layer for the Curvenote API.

The package wraps outbound HTTP calls behind a :class:`~curvenote.session.Session`
that carries the bearer token and client headers, and exposes get-or-fetch
*accessors* for individual remote entities (users, projects) that keep a
process-wide in-memory store in sync.

Typical usage::

    from curvenote.session import Session
    from curvenote.transfer import Project

    session = Session(token)
    project = Project(session, "my-project").get()
    print(project.data.title)

Modules:
    app: Typer application and ``curvenote`` console-script entry point.
    session: Token validation and the HTTP session.
    store: In-memory cache store, receive actions, and selectors.
    transfer: Get-or-fetch accessors for remote entities.
    models: Pydantic DTOs and settings models.
    config: XDG-aware settings resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"
