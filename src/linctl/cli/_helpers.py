"""Shared infrastructure for linctl CLI commands."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from typer.core import TyperGroup

from linctl.api import LinearClient
from linctl.config import get_api_url, get_auth_header

if TYPE_CHECKING:
    from collections.abc import Callable

    import click


def _make_alias(
    source_fn: Callable[..., Any],
    *,
    doc: str,
) -> Callable[..., Any]:
    """Create a CLI command alias by cloning a source function's signature.

    Typer infers CLI parameters from function signatures, so the alias
    shares the source's parameter declarations instead of repeating them.
    """
    sig = inspect.signature(source_fn)

    def wrapper(**kwargs: Any) -> Any:
        return source_fn(**kwargs)

    wrapper.__signature__ = sig  # type: ignore[attr-defined]
    wrapper.__doc__ = doc
    wrapper.__module__ = source_fn.__module__
    # Copy string annotations so typing.get_type_hints() resolves them
    # correctly (required when using `from __future__ import annotations`).
    wrapper.__annotations__ = dict(source_fn.__annotations__)
    return wrapper


class SortedGroup(TyperGroup):
    """Typer group that lists commands in alphabetical order."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return commands sorted alphabetically."""
        return sorted(super().list_commands(ctx))


def get_client(config: dict[str, Any]) -> LinearClient:
    """Create an API client from config and environment.

    Raises:
        AuthenticationError: If no credentials are configured
    """
    return LinearClient(get_auth_header(config), base_url=get_api_url(config))
