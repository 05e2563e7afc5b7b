"""Typer application and CLI entry point for curvenote.

The application has three global flags, ``-v/--version``, ``-d/--debug``
and ``-q/--quiet``, and a single ``build`` sub-command (see
:mod:`curvenote.commands.build`).

:func:`main` is the console-script entry point declared in
``pyproject.toml``.  It installs a SIGINT handler, registers commands and
invokes the Typer app.  Unexpected exceptions are written to a crash log
under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from curvenote import __version__
from curvenote.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="curvenote",
    help="Work with Curvenote projects from the command line.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"curvenote v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Print the current version of curvenote.",
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Log out any errors to the console."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress informational messages on stderr."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~curvenote.output.OutputManager`; with
    ``--debug`` it is verbose, so session and accessor debug lines are
    shown on stderr.  ``--quiet`` hides informational messages;
    warnings and errors are always shown.
    """
    from curvenote.output import OutputManager, set_output

    set_output(OutputManager(quiet=quiet, verbose=debug))


def _register_commands() -> None:
    from curvenote.commands.build import build_command

    app.command("build")(build_command)


_register_commands()


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from curvenote.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text("".join(traceback.format_exception(exc)))
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``curvenote`` console script.

    :class:`~curvenote.exceptions.CurvenoteError` instances exit with the
    error's ``exit_code``; anything else produces a crash log and a generic
    failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from curvenote.exceptions import CurvenoteError
        from curvenote.output import error

        if isinstance(exc, CurvenoteError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
