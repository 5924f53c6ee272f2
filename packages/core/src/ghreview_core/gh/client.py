"""Typed review operations over the GitHub GraphQL API.

Each public method checks its local preconditions before touching the
network, issues exactly one GraphQL document, and returns normalized
records from ``ghreview_core.models``. Transport failures are re-raised
with the operation name prepended; there is no retry.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from ghreview_core.errors import AuthError, GhReviewError, NoPendingReview, NotFound, ValidationError
from ghreview_core.gh import queries
from ghreview_core.models import (
    AddedThread,
    AllComments,
    CreatedReview,
    DiscussionComment,
    PendingReview,
    PRReference,
    ReviewComment,
    ReviewIdentity,
    StatefulReviewComment,
    Thread,
    ThreadComment,
    Threads,
)

logger = logging.getLogger(__name__)

REVIEW_ID_PREFIX = "PRR_"
COMMENT_ID_PREFIX = "PRRC_"

DEFAULT_PENDING_PAGE = 20
DEFAULT_LIMIT = 100

REVIEW_STATES = ("pending", "approved", "changes_requested", "commented")
# PullRequestReviewState values that survive local normalization; DISMISSED would
# normalize to "submitted" and never match its own filter.
_SERVER_REVIEW_STATES = {"PENDING", "APPROVED", "CHANGES_REQUESTED", "COMMENTED"}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class GraphQLTransport(Protocol):
    def execute(self, document: str, variables: dict | None = None) -> dict: ...


def normalize_review_state(state: str | None) -> str:
    """Map a remote review state onto the lowercase canonical set, else ``submitted``."""
    lowered = (state or "").strip().lower()
    return lowered if lowered in REVIEW_STATES else "submitted"


# ---------------------------------------------------------------------------
# Decode helpers: GraphQL nullability means any level may be null or absent.
# ---------------------------------------------------------------------------


def _obj(data: dict | None, *path: str) -> dict:
    for key in path:
        data = (data or {}).get(key)
    return data if isinstance(data, dict) else {}


def _nodes(connection: dict) -> list[dict]:
    return [n for n in (connection.get("nodes") or []) if isinstance(n, dict)]


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _login(node: dict) -> str:
    return _text(_obj(node, "author").get("login"))


def _line(node: dict) -> int:
    """Live line, else the original line for outdated positions, else 0."""
    if node.get("line") is not None:
        return int(node["line"])
    if node.get("originalLine") is not None:
        return int(node["originalLine"])
    return 0


def _timestamp(value: str | None) -> datetime:
    if not value:
        return _EPOCH
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH


def _require_id(value: str, prefix: str, what: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{what} ID required")
    if not value.startswith(prefix):
        raise ValidationError(f"invalid {what} ID {value!r}: expected GraphQL node ID")
    return value


class ReviewClient:
    def __init__(self, transport: GraphQLTransport):
        self._transport = transport

    def _execute(self, operation: str, document: str, variables: dict | None = None) -> dict:
        logger.debug("GraphQL %s %s", operation, variables or {})
        try:
            return self._transport.execute(document, variables) or {}
        except GhReviewError as e:
            raise type(e)(f"{operation}: {e}") from e

    @staticmethod
    def _pr_variables(pr: PRReference) -> dict:
        return {"owner": pr.owner, "name": pr.repo, "number": pr.number}

    # ------------------------------------------------------------------ #
    # Queries                                                             #
    # ------------------------------------------------------------------ #

    def resolve_pr(self, pr: PRReference) -> ReviewIdentity:
        data = self._execute("resolve PR", queries.RESOLVE_PR, self._pr_variables(pr))
        node = _obj(data, "repository", "pullRequest")
        node_id = _text(node.get("id"))
        head_oid = _text(node.get("headRefOid"))
        if not node_id or not head_oid:
            raise NotFound(f"PR {pr} not found or missing metadata")
        return ReviewIdentity(node_id=node_id, head_oid=head_oid)

    def viewer_login(self) -> str:
        data = self._execute("get viewer login", queries.VIEWER_LOGIN)
        login = _text(_obj(data, "viewer").get("login"))
        if not login:
            raise AuthError("viewer login unavailable")
        return login

    def pending_reviews(self, pr: PRReference, reviewer: str = "", first: int = 0) -> list[PendingReview]:
        """Pending reviews on ``pr`` authored by ``reviewer`` (default: the viewer)."""
        first = first if first > 0 else DEFAULT_PENDING_PAGE
        reviewer = (reviewer or "").strip() or self.viewer_login()

        data = self._execute(
            "query pending reviews", queries.PENDING_REVIEWS, {**self._pr_variables(pr), "first": first}
        )

        results = []
        for node in _nodes(_obj(data, "repository", "pullRequest", "reviews")):
            review_id = _text(node.get("id"))
            if not review_id:
                continue
            author = _login(node)
            if author.casefold() != reviewer.casefold():
                continue

            comment_conn = _obj(node, "comments")
            comments = [
                ReviewComment(
                    id=_text(c.get("id")),
                    path=c.get("path") or "",
                    line=_line(c),
                    start_line=c.get("startLine"),
                    body=c.get("body") or "",
                    outdated=bool(c.get("outdated")),
                    author=author,
                )
                for c in _nodes(comment_conn)
                if _text(c.get("id"))
            ]
            results.append(
                PendingReview(
                    id=review_id,
                    state=_text(node.get("state")).upper(),
                    url=node.get("url") or "",
                    updated_at=_timestamp(node.get("updatedAt")),
                    author=author,
                    comments=comments,
                    total_count=int(comment_conn.get("totalCount") or 0),
                )
            )
        return results

    def latest_pending_review(self, pr: PRReference, reviewer: str = "") -> PendingReview:
        reviews = self.pending_reviews(pr, reviewer=reviewer)
        if not reviews:
            raise NoPendingReview(f"no pending review found on {pr}")

        latest = reviews[0]
        for review in reviews[1:]:
            if review.updated_at > latest.updated_at:
                latest = review
        return latest

    def all_pr_comments(self, pr: PRReference, limit: int = 0, states: list[str] | None = None) -> AllComments:
        """Review comments (tagged with their review's state) plus PR discussion comments."""
        limit = limit if limit > 0 else DEFAULT_LIMIT
        variables = {**self._pr_variables(pr), "limit": limit}

        server_states = [s.strip().upper() for s in (states or []) if s.strip().upper() in _SERVER_REVIEW_STATES]
        if server_states:
            document = queries.ALL_PR_COMMENTS_BY_STATE
            variables["states"] = server_states
        else:
            document = queries.ALL_PR_COMMENTS

        data = self._execute("query all PR comments", document, variables)
        pull = _obj(data, "repository", "pullRequest")
        reviews = _obj(pull, "reviews")
        discussion = _obj(pull, "comments")

        review_comments = []
        for review in _nodes(reviews):
            state = normalize_review_state(review.get("state"))
            review_author = _login(review)
            for c in _nodes(_obj(review, "comments")):
                comment_id = _text(c.get("id"))
                if not comment_id:
                    continue
                review_comments.append(
                    StatefulReviewComment(
                        id=comment_id,
                        path=c.get("path") or "",
                        line=_line(c),
                        start_line=c.get("startLine"),
                        body=c.get("body") or "",
                        outdated=bool(c.get("outdated")),
                        author=_login(c) or review_author,
                        state=state,
                    )
                )

        discussion_comments = [
            DiscussionComment(
                id=_text(c.get("id")),
                body=c.get("body") or "",
                author=_login(c),
                created_at=_timestamp(c.get("createdAt")),
            )
            for c in _nodes(discussion)
            if _text(c.get("id"))
        ]

        truncated = int(reviews.get("totalCount") or 0) > limit or int(discussion.get("totalCount") or 0) > limit
        return AllComments(
            review_comments=review_comments,
            discussion_comments=discussion_comments,
            truncated=truncated,
        )

    def review_threads(
        self,
        pr: PRReference,
        limit: int = 0,
        unresolved_only: bool = False,
        states: list[str] | None = None,
    ) -> Threads:
        limit = limit if limit > 0 else DEFAULT_LIMIT
        wanted = {s.strip().casefold() for s in (states or []) if s.strip()}

        data = self._execute(
            "query review threads", queries.REVIEW_THREADS, {**self._pr_variables(pr), "limit": limit}
        )
        connection = _obj(data, "repository", "pullRequest", "reviewThreads")

        threads = []
        for node in _nodes(connection):
            thread_id = _text(node.get("id"))
            if not thread_id:
                continue
            is_resolved = bool(node.get("isResolved"))
            if unresolved_only and is_resolved:
                continue

            raw_comments = _nodes(_obj(node, "comments"))
            # A thread takes the state of the review that opened it.
            state = ""
            if raw_comments:
                state = normalize_review_state(_obj(raw_comments[0], "pullRequestReview").get("state"))
            if wanted and state.casefold() not in wanted:
                continue

            threads.append(
                Thread(
                    id=thread_id,
                    path=node.get("path") or "",
                    line=_line(node),
                    is_resolved=is_resolved,
                    state=state,
                    comments=[
                        ThreadComment(id=_text(c.get("id")), body=c.get("body") or "", author=_login(c))
                        for c in raw_comments
                        if _text(c.get("id"))
                    ],
                )
            )

        return Threads(threads=threads, truncated=int(connection.get("totalCount") or 0) > limit)

    # ------------------------------------------------------------------ #
    # Mutations                                                           #
    # ------------------------------------------------------------------ #

    def create_review(self, pr_node_id: str, commit_oid: str = "") -> CreatedReview:
        pr_node_id = (pr_node_id or "").strip()
        if not pr_node_id:
            raise ValidationError("PR node ID required")

        mutation_input = {"pullRequestId": pr_node_id}
        commit_oid = (commit_oid or "").strip()
        if commit_oid:
            mutation_input["commitOID"] = commit_oid

        data = self._execute("create review", queries.CREATE_REVIEW, {"input": mutation_input})
        review = _obj(data, "addPullRequestReview", "pullRequestReview")
        review_id = _text(review.get("id"))
        if not review_id:
            raise NotFound("create review returned empty ID")
        return CreatedReview(id=review_id, state=review.get("state") or "")

    def add_thread(
        self,
        review_id: str,
        path: str,
        line: int,
        body: str,
        side: str = "",
        start_line: int | None = None,
        start_side: str | None = None,
    ) -> AddedThread:
        review_id = _require_id(review_id, REVIEW_ID_PREFIX, "review")
        path = (path or "").strip()
        if not path:
            raise ValidationError("path required")
        if line is None or line <= 0:
            raise ValidationError("line must be positive")
        body = (body or "").strip()
        if not body:
            raise ValidationError("body required")
        side = (side or "").strip().upper() or "RIGHT"

        mutation_input = {
            "pullRequestReviewId": review_id,
            "path": path,
            "line": line,
            "side": side,
            "body": body,
        }
        if start_line is not None:
            mutation_input["startLine"] = start_line
        if start_side is not None:
            mutation_input["startSide"] = start_side.strip().upper()

        data = self._execute("add thread", queries.ADD_THREAD, {"input": mutation_input})
        thread = _obj(data, "addPullRequestReviewThread", "thread")
        thread_id = _text(thread.get("id"))
        if not thread_id:
            raise NotFound("add thread returned empty ID")
        return AddedThread(
            thread_id=thread_id,
            path=thread.get("path") or "",
            line=int(thread.get("line") or 0),
            outdated=bool(thread.get("isOutdated")),
        )

    def update_comment(self, comment_id: str, body: str) -> None:
        comment_id = _require_id(comment_id, COMMENT_ID_PREFIX, "comment")
        body = (body or "").strip()
        if not body:
            raise ValidationError("body required")

        self._execute(
            "update comment",
            queries.UPDATE_COMMENT,
            {"input": {"pullRequestReviewCommentId": comment_id, "body": body}},
        )

    def delete_comment(self, comment_id: str) -> None:
        comment_id = _require_id(comment_id, COMMENT_ID_PREFIX, "comment")
        self._execute("delete comment", queries.DELETE_COMMENT, {"input": {"id": comment_id}})

    def submit_review(self, review_id: str, event: str, body: str = "") -> None:
        review_id = _require_id(review_id, REVIEW_ID_PREFIX, "review")
        event = (event or "").strip().upper()
        if not event:
            raise ValidationError("event required")

        mutation_input = {"pullRequestReviewId": review_id, "event": event}
        body = (body or "").strip()
        if body:
            mutation_input["body"] = body

        self._execute("submit review", queries.SUBMIT_REVIEW, {"input": mutation_input})

    def delete_review(self, review_id: str) -> None:
        review_id = _require_id(review_id, REVIEW_ID_PREFIX, "review")
        self._execute("delete review", queries.DELETE_REVIEW, {"input": {"pullRequestReviewId": review_id}})
