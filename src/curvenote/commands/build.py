"""The ``curvenote build`` command.

Loads a project through the :class:`~curvenote.transfer.Project` accessor,
then its creator through :class:`~curvenote.transfer.User`, and emits a
JSON build document::

    {
      "project": {...},
      "author": {...} | null,
      "url": "https://curvenote.com/@team/name"
    }

The document goes to stdout, or to ``--output FILE``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from curvenote.config import resolve_settings
from curvenote.exceptions import CurvenoteError
from curvenote.output import debug, error, get_output, info
from curvenote.session import Session
from curvenote.transfer import Project, User


def build_document(session: Session, project_id: str) -> dict[str, Any]:
    """Fetch *project_id* and its creator and return the build document.

    Raises:
        FetchFailedError: If the project, or its creator, cannot be loaded.
    """
    project = Project(session, project_id).get()
    author: Optional[dict[str, Any]] = None
    if project.data.created_by:
        author = User(session, project.data.created_by).get().data.model_dump(mode="json")
    return {
        "project": project.data.model_dump(mode="json"),
        "author": author,
        "url": project.site_url(),
    }


def build_command(
    project_id: str = typer.Argument(..., help="Project id (or name) to build."),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="API token (default: $CURVENOTE_TOKEN)."
    ),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Override the API URL."),
    site_url: Optional[str] = typer.Option(None, "--site-url", help="Override the site URL."),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the build document to a file."
    ),
) -> None:
    """Build the JSON document for a project.

    Args:
        project_id: The project to build.
        token: Bearer token; anonymous access when omitted everywhere.
        api_url: API base URL override.
        site_url: Site base URL override.
        output_file: Destination file; stdout when omitted.

    Raises:
        typer.Exit: With the error's exit code on any curvenote error.

    Example::

        curvenote build my-project
        curvenote -d build my-project -o build.json
    """
    try:
        settings = resolve_settings(token, api_url, site_url)
        debug(f"API: {settings.api_url}")
        with Session(settings.token, settings.session_options()) as session:
            if session.is_anonymous:
                debug("No token configured, requests are anonymous")
            document = build_document(session, project_id)
    except CurvenoteError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if output_file is not None:
        output_file.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        info(f"Wrote {output_file}")
    else:
        get_output().format_response(document)
