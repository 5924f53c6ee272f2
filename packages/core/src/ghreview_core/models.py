"""Typed records returned by the review client.

Every field is already normalized when one of these is built: line numbers
carry the original-line fallback, logins are trimmed, states are canonical.
Nothing downstream re-derives them from raw GraphQL payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class PRReference:
    owner: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class ReviewIdentity:
    """Node IDs needed to open a new review on a pull request."""

    node_id: str
    head_oid: str


@dataclass(frozen=True)
class ReviewComment:
    id: str
    path: str
    line: int
    body: str
    start_line: int | None = None
    outdated: bool = False
    author: str = ""


@dataclass(frozen=True)
class PendingReview:
    id: str
    state: str
    url: str
    updated_at: datetime
    author: str
    comments: list[ReviewComment] = field(default_factory=list)
    total_count: int = 0


@dataclass(frozen=True)
class CreatedReview:
    id: str
    state: str


@dataclass(frozen=True)
class AddedThread:
    thread_id: str
    path: str
    line: int
    outdated: bool = False


@dataclass(frozen=True)
class StatefulReviewComment(ReviewComment):
    """A review comment tagged with the normalized state of its parent review."""

    state: str = "submitted"


@dataclass(frozen=True)
class DiscussionComment:
    """A top-level PR conversation comment, not attached to any file."""

    id: str
    body: str
    author: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class AllComments:
    review_comments: list[StatefulReviewComment] = field(default_factory=list)
    discussion_comments: list[DiscussionComment] = field(default_factory=list)
    truncated: bool = False


@dataclass(frozen=True)
class ThreadComment:
    id: str
    body: str
    author: str


@dataclass(frozen=True)
class Thread:
    id: str
    path: str
    line: int
    is_resolved: bool
    state: str
    comments: list[ThreadComment] = field(default_factory=list)


@dataclass(frozen=True)
class Threads:
    threads: list[Thread] = field(default_factory=list)
    truncated: bool = False
