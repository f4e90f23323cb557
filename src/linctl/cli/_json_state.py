"""Global output mode state for linctl CLI."""

from __future__ import annotations

import sys

import orjson
import typer

_global_json: bool = False
_global_plaintext: bool = False


def set_output_flags(json_output: bool, plaintext: bool) -> None:
    """Set the global JSON and plaintext output flags."""
    global _global_json, _global_plaintext  # noqa: PLW0603
    _global_json = json_output
    _global_plaintext = plaintext


def is_json_output(local_flag: bool = False) -> bool:
    """Check if JSON output is enabled (global or local flag).

    Also syncs the local flag to global state so that ``echo_error``
    outputs JSON when the per-command ``--json`` flag is used.
    """
    global _global_json  # noqa: PLW0603
    if local_flag and not _global_json:
        _global_json = True
    return local_flag or _global_json


def is_plaintext() -> bool:
    """Check if ANSI coloring is disabled via ``--plaintext``."""
    return _global_plaintext


def echo_error(message: str) -> None:
    """Output an error message, formatted as JSON if in JSON mode.

    In JSON mode, outputs ``{"error": "..."}`` to stderr.
    In plain mode, outputs ``Error: ...`` to stderr.
    """
    if _global_json:
        sys.stderr.write(orjson.dumps({"error": message}).decode() + "\n")
    else:
        typer.echo(f"Error: {message}", err=True)
