"""Filter, tail-limit and group a flat list of comments.

Works on any object exposing ``state`` and ``author`` attributes, so the
same pipeline serves review comments, thread comments and discussion
comments once they are mapped to a common shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, TypeVar


class _Filterable(Protocol):
    state: str
    author: str


T = TypeVar("T", bound=_Filterable)


@dataclass(frozen=True)
class FilterCriteria:
    """Requested states are OR-ed; the state and author predicates are AND-ed."""

    states: tuple[str, ...] = ()
    author: str = ""

    @classmethod
    def build(cls, states: Iterable[str] | None = None, author: str | None = None) -> FilterCriteria:
        return cls(
            states=tuple(s.strip() for s in (states or ()) if s and s.strip()),
            author=(author or "").strip(),
        )


def split_states(values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-separated ``--states`` values."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def matches(comment: _Filterable, criteria: FilterCriteria) -> bool:
    if criteria.states:
        state = (comment.state or "").casefold()
        if not any(state == s.casefold() for s in criteria.states):
            return False
    if criteria.author and (comment.author or "").casefold() != criteria.author.casefold():
        return False
    return True


def filter_comments(comments: Iterable[T], criteria: FilterCriteria) -> list[T]:
    return [c for c in comments if matches(c, criteria)]


def tail(comments: Sequence[T], count: int) -> list[T]:
    """Keep the last ``count`` comments; a non-positive count keeps everything."""
    if count <= 0 or len(comments) <= count:
        return list(comments)
    return list(comments[len(comments) - count :])


def group_by_author(comments: Iterable[T], flat: bool = False) -> list[tuple[str, list[T]]]:
    """Partition by author, authors ascending; order within a group is preserved.

    In flat mode a single unlabeled group ("" author) holds every comment.
    """
    comments = list(comments)
    if flat:
        return [("", comments)]

    by_author: dict[str, list[T]] = {}
    for comment in comments:
        by_author.setdefault(comment.author, []).append(comment)
    return [(author, by_author[author]) for author in sorted(by_author)]
