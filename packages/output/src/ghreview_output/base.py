"""Abstract renderer interface.

Table, plain and JSON renderers implement one method per result type.
The set of result types is closed: ``render`` dispatches on the exact
record class and refuses anything else, so a new result type forces every
renderer to grow a matching method.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TextIO

from ghreview_core.errors import UnsupportedResult
from ghreview_output.models import (
    AddResult,
    CommentsResult,
    DeleteResult,
    DiscardResult,
    EditResult,
    NoOpResult,
    Result,
    SubmitResult,
    ViewResult,
)


class Renderer(ABC):
    """Writes one result record to a text stream.

    All three implementations must convey the same facts for the same
    input; they differ only in decoration.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream

    def render(self, result: Result) -> None:
        handlers = {
            CommentsResult: self.render_comments,
            ViewResult: self.render_view,
            AddResult: self.render_add,
            EditResult: self.render_edit,
            DeleteResult: self.render_delete,
            SubmitResult: self.render_submit,
            DiscardResult: self.render_discard,
            NoOpResult: self.render_noop,
        }
        handler = handlers.get(type(result))
        if handler is None:
            raise UnsupportedResult(f"unknown result type: {type(result).__name__}")
        handler(result)

    @abstractmethod
    def render_comments(self, result: CommentsResult) -> None: ...

    @abstractmethod
    def render_view(self, result: ViewResult) -> None: ...

    @abstractmethod
    def render_add(self, result: AddResult) -> None: ...

    @abstractmethod
    def render_edit(self, result: EditResult) -> None: ...

    @abstractmethod
    def render_delete(self, result: DeleteResult) -> None: ...

    @abstractmethod
    def render_submit(self, result: SubmitResult) -> None: ...

    @abstractmethod
    def render_discard(self, result: DiscardResult) -> None: ...

    @abstractmethod
    def render_noop(self, result: NoOpResult) -> None: ...


def location(path: str, line: int) -> str:
    """``path:line``, or just ``path`` when the line is unknown."""
    return f"{path}:{line}" if line > 0 else path


def one_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ")
