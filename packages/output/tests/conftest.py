import pytest

from ghreview_output.models import (
    Comment,
    CommentGroup,
    CommentsResult,
    ViewResult,
    ViewThread,
    ViewThreadComment,
)


@pytest.fixture(autouse=True)
def _no_forced_color(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture
def comments():
    return (
        Comment(id="PRRC_1", path="src/app.py", line=12, body="Use a constant here", state="pending", author="alice"),
        Comment(id="PRRC_2", path="src/app.py", line=0, body="File-level note", state="approved", author="bob"),
        Comment(id="IC_1", path="", line=0, body="Thanks!\nLooks good.", state="discussion", author="alice"),
    )


@pytest.fixture
def grouped_result(comments):
    alice = CommentGroup(author="alice", comments=(comments[0], comments[2]))
    bob = CommentGroup(author="bob", comments=(comments[1],))
    return CommentsResult(pr="octo/widgets#7", groups=(alice, bob))


@pytest.fixture
def flat_result(comments):
    return CommentsResult(pr="octo/widgets#7", groups=(CommentGroup(author="", comments=comments),), include_ids=True)


@pytest.fixture
def view_result():
    return ViewResult(
        pr="octo/widgets#7",
        threads=(
            ViewThread(
                id="PRRT_1",
                path="src/app.py",
                line=12,
                resolved=False,
                comments=(
                    ViewThreadComment(id="PRRC_1", author="alice", body="Why this?"),
                    ViewThreadComment(id="PRRC_2", author="bob", body="Because."),
                ),
            ),
            ViewThread(
                id="PRRT_2",
                path="README.md",
                line=0,
                resolved=True,
                comments=(ViewThreadComment(id="PRRC_3", author="carol", body="Fixed"),),
            ),
        ),
    )
