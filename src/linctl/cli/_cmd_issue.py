"""Issue commands for linctl CLI."""

from __future__ import annotations

import typer

from linctl.api import AuthenticationError, LinearError
from linctl.config import get_default_depth, load_config
from linctl.render import render_event, render_json
from linctl.walker import GraphWalker

from ._helpers import SortedGroup, _make_alias, get_client
from ._json_state import echo_error, is_json_output, is_plaintext

# Sub-app for 'linctl issue' subcommands
issue_app = typer.Typer(
    help="Work with Linear issues.",
    no_args_is_help=True,
    cls=SortedGroup,
)

_TREE_DOC = """\
Display issue dependency tree.

Shows parent, sub-issues, blocks, blocked-by, related and duplicate issues
in a hierarchical view, recursively up to --depth levels. Issues already
shown elsewhere in the tree are marked [circular] and not expanded again.

Examples:
  linctl issue tree LIN-123
  linctl issue tree LIN-123 --depth 2
  linctl issue tree LIN-123 --json
"""


def _tree_impl(
    issue_id: str = typer.Argument(..., help="Issue identifier (e.g. LIN-123) or id"),
    depth: int | None = typer.Option(
        None,
        "--depth",
        "-d",
        min=0,
        help="Maximum recursion depth [default: 3]",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON tree"),
) -> None:
    try:
        json_mode = is_json_output(json_output)
        config = load_config()
        max_depth = depth if depth is not None else get_default_depth(config)

        try:
            client = get_client(config)
        except AuthenticationError as e:
            echo_error(str(e))
            raise typer.Exit(1)

        try:
            try:
                root = client.get_issue(issue_id)
            except LinearError as e:
                echo_error(f"Failed to fetch issue: {e}")
                raise typer.Exit(1)

            walker = GraphWalker(client, max_depth)
            if json_mode:
                typer.echo(render_json(walker.walk(root)))
            else:
                plaintext = is_plaintext()
                walker.walk_streaming(
                    root,
                    lambda event: typer.echo(render_event(event, plaintext)),
                )
        finally:
            client.close()

    except typer.Exit:
        raise
    except Exception as e:
        echo_error(str(e))
        raise typer.Exit(1)


def register(app: typer.Typer) -> None:
    """Register issue commands."""
    app.add_typer(issue_app, name="issue")

    issue_app.command(name="tree")(_make_alias(_tree_impl, doc=_TREE_DOC))
    issue_app.command(name="deps")(
        _make_alias(
            _tree_impl,
            doc="Display issue dependency tree (alias for 'tree' command).",
        ),
    )
