"""Constants for linctl."""

from __future__ import annotations

# Linear GraphQL endpoint
LINEAR_API_URL = "https://api.linear.app/graphql"

# Request timeout in seconds
DEFAULT_TIMEOUT = 30.0

# Default recursion depth for `issue tree`
DEFAULT_TREE_DEPTH = 3

# Config locations
CONFIG_DIRNAME = "linctl"
CONFIG_FILENAME = "config.toml"
LEGACY_AUTH_FILENAME = ".linctl-auth.json"

# Environment overrides
API_KEY_ENV = "LINEAR_API_KEY"
API_URL_ENV = "LINEAR_API_URL"
CONFIG_PATH_ENV = "LINCTL_CONFIG"

# Tree connectors
BRANCH = "├──"
LAST_BRANCH = "└──"
PIPE_INDENT = "│   "
SPACE_INDENT = "    "

CIRCULAR_MARK = " [circular]"

# Color mappings for CLI display, keyed by Linear workflow state type
STATE_COLORS: dict[str, dict[str, object]] = {
    "triage": {"fg": "magenta"},
    "backlog": {"fg": "white", "dim": True},
    "unstarted": {"fg": "white"},
    "started": {"fg": "yellow"},
    "completed": {"fg": "green"},
    "canceled": {"fg": "red"},
}
DEFAULT_STATE_COLOR: dict[str, object] = {"fg": "white"}

IDENTIFIER_COLOR = "cyan"
SECTION_LABEL_COLOR = "magenta"
