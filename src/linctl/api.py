"""Linear GraphQL API client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
import orjson

from linctl._version import version as _linctl_version
from linctl.constants import DEFAULT_TIMEOUT, LINEAR_API_URL
from linctl.models import dict_to_issue

if TYPE_CHECKING:
    from types import TracebackType

    from linctl.models import Issue

logger = logging.getLogger(__name__)

# Only the fields the dependency tree needs; nested stubs stay shallow.
ISSUE_TREE_QUERY = """
query IssueTree($id: String!) {
  issue(id: $id) {
    id
    identifier
    title
    state { name type }
    parent {
      id
      identifier
      title
      state { name type }
    }
    children {
      nodes {
        id
        identifier
        title
        state { name type }
      }
    }
    relations {
      nodes {
        id
        type
        relatedIssue {
          id
          identifier
          title
          state { name type }
        }
      }
    }
  }
}
"""


class LinearError(Exception):
    """Base error for failed Linear API operations."""


class LinearAPIError(LinearError):
    """The HTTP request failed or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Create the error, remembering the HTTP status if there was one."""
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(LinearAPIError):
    """Credentials are missing or were rejected."""


class GraphQLError(LinearError):
    """The API answered with GraphQL errors."""

    def __init__(self, messages: list[str]) -> None:
        """Create the error from the messages of the ``errors`` array."""
        super().__init__("GraphQL errors: " + "; ".join(messages))
        self.messages = messages


class IssueNotFoundError(LinearError):
    """No issue matches the requested identifier."""

    def __init__(self, identifier: str) -> None:
        """Create the error for *identifier*."""
        super().__init__(f"Issue not found: {identifier}")
        self.identifier = identifier


class LinearClient:
    """Blocking client for the Linear GraphQL API."""

    def __init__(
        self,
        auth_header: str,
        base_url: str = LINEAR_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client.

        Args:
            auth_header: Value for the Authorization header (API key or
                ``Bearer <token>``)
            base_url: GraphQL endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url
        self._http = httpx.Client(
            headers={
                "Authorization": auth_header,
                "Content-Type": "application/json",
                "User-Agent": f"linctl/{_linctl_version}",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> LinearClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            AuthenticationError: On HTTP 401/403
            LinearAPIError: On transport errors, other non-200 responses or
                an unparsable or malformed body
            GraphQLError: If the response carries GraphQL errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self._http.post(self.base_url, content=orjson.dumps(payload))
        except httpx.HTTPError as e:
            msg = f"Request failed: {e}"
            raise LinearAPIError(msg) from e

        remaining = response.headers.get("X-RateLimit-Requests-Remaining")
        if remaining is not None:
            logger.debug("Linear rate limit: %s requests remaining", remaining)

        if response.status_code in (401, 403):
            msg = f"Authentication failed with status {response.status_code}"
            raise AuthenticationError(msg, status_code=response.status_code)
        if response.status_code != 200:
            msg = (
                f"API request failed with status {response.status_code}: "
                f"{response.text}"
            )
            raise LinearAPIError(msg, status_code=response.status_code)

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            msg = f"Failed to parse response: {e}"
            raise LinearAPIError(msg, status_code=response.status_code) from e

        if not isinstance(body, dict):
            msg = f"Unexpected response body: {response.text}"
            raise LinearAPIError(msg, status_code=response.status_code)

        errors = body.get("errors") or []
        if not isinstance(errors, list):
            errors = [errors]
        if errors:
            raise GraphQLError(
                [
                    str(err.get("message", err)) if isinstance(err, dict) else str(err)
                    for err in errors
                ],
            )

        data = body.get("data") or {}
        if not isinstance(data, dict):
            msg = f"Unexpected data in response: {data!r}"
            raise LinearAPIError(msg, status_code=response.status_code)
        return data

    def get_issue(self, identifier: str) -> Issue:
        """Fetch an issue with its parent, sub-issues and relations.

        Args:
            identifier: Issue identifier (e.g. ``LIN-123``) or id

        Raises:
            IssueNotFoundError: If the API returns no issue
            LinearAPIError: If the issue payload is malformed
            LinearError: If the request fails
        """
        logger.debug("Fetching issue %s", identifier)
        data = self.execute(ISSUE_TREE_QUERY, {"id": identifier})
        issue_data = data.get("issue")
        if not issue_data:
            raise IssueNotFoundError(identifier)
        try:
            return dict_to_issue(issue_data)
        except (AttributeError, KeyError, TypeError) as e:
            msg = f"Malformed issue payload for {identifier}: {e!r}"
            raise LinearAPIError(msg) from e
