from __future__ import annotations

import logging

from github import Auth, Github, GithubException, UnknownObjectException

from ghreview_core.errors import NotFound, TransportError

logger = logging.getLogger(__name__)


class GithubGraphQL:
    """Executes GraphQL documents through PyGithub's authenticated requester.

    ``execute`` returns the ``data`` member of the response. GraphQL-level
    errors surface as exceptions, never as partial data.
    """

    def __init__(self, token: str, api_url: str = "https://api.github.com"):
        self._gh = Github(auth=Auth.Token(token), base_url=api_url)

    def execute(self, document: str, variables: dict | None = None) -> dict:
        try:
            _, payload = self._gh.requester.graphql_query(document, variables or {})
        except UnknownObjectException as e:
            logger.debug("GraphQL request returned not found: %s", e.status)
            raise NotFound(_describe(e)) from e
        except GithubException as e:
            logger.debug("GraphQL request failed with HTTP %s", e.status)
            raise TransportError(_describe(e)) from e
        return (payload or {}).get("data") or {}


def _describe(exc: GithubException) -> str:
    data = exc.data if isinstance(exc.data, dict) else {}
    errors = data.get("errors") or []
    messages = [err.get("message", "") for err in errors if isinstance(err, dict) and err.get("message")]
    if messages:
        return "; ".join(messages)
    if exc.message:
        return exc.message
    return data.get("message") or f"HTTP {exc.status}"
