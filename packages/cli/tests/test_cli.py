"""Tests for the CLI entry point and subcommands."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from ghreview_cli.cli import main
from ghreview_core.errors import NoPendingReview, TransportError
from ghreview_core.gh.client import ReviewClient
from ghreview_core.models import (
    AddedThread,
    AllComments,
    CreatedReview,
    DiscussionComment,
    PendingReview,
    PRReference,
    ReviewIdentity,
    StatefulReviewComment,
    Thread,
    ThreadComment,
    Threads,
)

PR = PRReference("owner", "repo", 123)


def _make_config(github_token="tok", fmt="table", repo=None, limit=100, templates=None):
    return {
        "github_token": github_token,
        "format": fmt,
        "limit": limit,
        "repo": repo,
        "api_url": "https://api.github.com",
        "templates": templates or {},
    }


def _fake_load_config(cfg):
    def load(config_path=".ghreview.yml", cli_overrides=None):
        merged = dict(cfg)
        merged.update({k: v for k, v in (cli_overrides or {}).items() if v is not None})
        return merged

    return load


def _patch_common(mocker, config=None, token="tok"):
    """Patch config loading, token resolution and the review client for most tests."""
    cfg = config or _make_config()
    mocker.patch("ghreview_core.config.load_config", side_effect=_fake_load_config(cfg))
    mocker.patch("ghreview_cli.auth.resolve_github_token", return_value=token)
    mocker.patch("ghreview_core.gh.reference.detect_repository", return_value=None)
    mocker.patch("ghreview_cli.context.GithubGraphQL")
    client = MagicMock(spec=ReviewClient)
    mocker.patch("ghreview_cli.context.ReviewClient", return_value=client)
    return cfg, client


def _pending(review_id="PRR_1"):
    return PendingReview(
        id=review_id,
        state="PENDING",
        url="",
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        author="me",
    )


def _invoke(*args):
    return CliRunner().invoke(main, list(args))


class TestGlobalBehaviour:
    def test_missing_token_is_usage_error(self, mocker):
        _, client = _patch_common(mocker, config=_make_config(github_token=None), token=None)

        result = _invoke("view", "123", "-R", "owner/repo")

        assert result.exit_code == 2
        assert "No GitHub token found" in result.output
        client.review_threads.assert_not_called()

    def test_invalid_reference(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("view", "abc", "-R", "owner/repo")

        assert result.exit_code == 1
        assert "Error: invalid PR reference" in result.output
        client.review_threads.assert_not_called()

    def test_no_repository(self, mocker):
        _patch_common(mocker)

        result = _invoke("view", "123")

        assert result.exit_code == 1
        assert "could not determine repository (use -R owner/repo)" in result.output

    def test_repo_from_config(self, mocker):
        _, client = _patch_common(mocker, config=_make_config(repo="cfg/repo"))
        client.review_threads.return_value = Threads()

        result = _invoke("view", "5")

        assert result.exit_code == 0
        assert client.review_threads.call_args.args[0] == PRReference("cfg", "repo", 5)

    def test_url_beats_repo_flag(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = Threads()

        result = _invoke("view", "https://github.com/owner/repo/pull/123", "-R", "other/thing")

        assert result.exit_code == 0
        assert client.review_threads.call_args.args[0] == PR

    def test_global_options_before_subcommand(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = Threads()

        result = _invoke("-R", "owner/repo", "-f", "json", "view", "123")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"pr": "owner/repo#123", "threads": []}

    def test_invalid_format_rejected(self, mocker):
        _patch_common(mocker)

        result = _invoke("view", "123", "-R", "owner/repo", "-f", "xml")

        assert result.exit_code == 2

    def test_bad_config_is_usage_error(self, mocker):
        mocker.patch("ghreview_core.config.load_config", side_effect=ValueError("'templates' must be a mapping"))
        mocker.patch("ghreview_cli.auth.resolve_github_token", return_value="tok")

        result = _invoke("view", "123")

        assert result.exit_code == 2
        assert "templates" in result.output

    @pytest.mark.parametrize("content", ["format: yaml\n", "limit: lots\n"])
    def test_bad_config_value_stops_before_any_mutation(self, mocker, tmp_path, content):
        cfg = tmp_path / ".ghreview.yml"
        cfg.write_text(content)
        mocker.patch("ghreview_cli.auth.resolve_github_token", return_value="tok")
        mocker.patch("ghreview_cli.context.GithubGraphQL")
        client = MagicMock(spec=ReviewClient)
        mocker.patch("ghreview_cli.context.ReviewClient", return_value=client)

        result = _invoke(
            "--config", str(cfg), "submit", "5", "-R", "owner/repo", "-v", "approve", "--review-id", "PRR_1"
        )

        assert result.exit_code == 2
        assert "Traceback" not in result.output
        client.submit_review.assert_not_called()

    def test_transport_error_reported(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.side_effect = TransportError("query review threads: HTTP 502")

        result = _invoke("view", "123", "-R", "owner/repo")

        assert result.exit_code == 1
        assert "Error: query review threads: HTTP 502" in result.output

    def test_token_from_gh_cli_wins_over_config(self, mocker):
        _patch_common(mocker, config=_make_config(github_token=None), token="from-gh")
        graphql = mocker.patch("ghreview_cli.context.GithubGraphQL")
        mocker.patch("ghreview_cli.context.ReviewClient").return_value.review_threads.return_value = Threads()

        result = _invoke("view", "123", "-R", "owner/repo")

        assert result.exit_code == 0
        assert graphql.call_args.args[0] == "from-gh"


class TestAdd:
    def test_uses_latest_pending_review(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending("PRR_7")
        client.add_thread.return_value = AddedThread(thread_id="PRRT_1", path="src/main.py", line=42)

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "src/main.py", "-l", "42", "-b", "Consider this")

        assert result.exit_code == 0, result.output
        client.create_review.assert_not_called()
        kwargs = client.add_thread.call_args.kwargs
        assert kwargs["review_id"] == "PRR_7"
        assert kwargs["path"] == "src/main.py"
        assert kwargs["line"] == 42
        assert kwargs["body"] == "Consider this"
        assert kwargs["side"] == "RIGHT"
        assert kwargs["start_line"] is None
        assert "✓ Added comment at src/main.py:42" in result.output

    def test_creates_review_when_none_pending(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.side_effect = NoPendingReview("no pending review found on owner/repo#123")
        client.resolve_pr.return_value = ReviewIdentity(node_id="PR_kw1", head_oid="abc123")
        client.create_review.return_value = CreatedReview(id="PRR_new", state="PENDING")

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "3", "-b", "x", "-f", "json")

        assert result.exit_code == 0, result.output
        client.create_review.assert_called_once_with("PR_kw1", "abc123")
        assert client.add_thread.call_args.kwargs["review_id"] == "PRR_new"
        assert json.loads(result.stdout) == {"action": "added", "path": "a.py", "line": 3}

    def test_lookup_failure_does_not_create_review(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.side_effect = TransportError("query pending reviews: timeout")

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "3", "-b", "x")

        assert result.exit_code == 1
        client.create_review.assert_not_called()
        client.add_thread.assert_not_called()

    def test_explicit_review_id_skips_lookup(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke(
            "add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "9", "-b", "x", "--review-id", "PRR_given"
        )

        assert result.exit_code == 0, result.output
        client.latest_pending_review.assert_not_called()
        assert client.add_thread.call_args.kwargs["review_id"] == "PRR_given"

    def test_multi_line_comment(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending()

        result = _invoke(
            "add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "50", "--start-line", "45",
            "--start-side", "left", "-s", "left", "-b", "range",
        )

        assert result.exit_code == 0, result.output
        kwargs = client.add_thread.call_args.kwargs
        assert kwargs["start_line"] == 45
        assert kwargs["start_side"] == "left"
        assert kwargs["side"] == "left"

    def test_template_body(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending()

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "1", "-t", "security")

        assert result.exit_code == 0, result.output
        assert client.add_thread.call_args.kwargs["body"].startswith("**Security Concern**")

    def test_config_template(self, mocker):
        _, client = _patch_common(mocker, config=_make_config(templates={"nit": "Nit: tidy up."}))
        client.latest_pending_review.return_value = _pending()

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "1", "-t", "nit")

        assert result.exit_code == 0, result.output
        assert client.add_thread.call_args.kwargs["body"] == "Nit: tidy up."

    def test_unknown_template(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "1", "-t", "bogus")

        assert result.exit_code == 2
        assert "naming, perf, security, style" in result.output
        client.add_thread.assert_not_called()

    def test_body_required(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", "1")

        assert result.exit_code == 2
        assert "body is required" in result.output
        client.latest_pending_review.assert_not_called()

    @pytest.mark.parametrize("line", ["0", "-4"])
    def test_non_positive_line_rejected_before_network(self, mocker, line):
        _, client = _patch_common(mocker)

        result = _invoke("add", "123", "-R", "owner/repo", "-p", "a.py", "-l", line, "-b", "x")

        assert result.exit_code == 2
        client.latest_pending_review.assert_not_called()
        client.add_thread.assert_not_called()


class TestComments:
    def _all_comments(self, truncated=False):
        return AllComments(
            review_comments=[
                StatefulReviewComment(id="PRRC_1", path="a.py", line=3, body="fix", author="bob", state="pending"),
                StatefulReviewComment(id="PRRC_2", path="b.py", line=0, body="hmm", author="alice", state="approved"),
                StatefulReviewComment(id="PRRC_3", path="a.py", line=8, body="nit", author="bob", state="commented"),
            ],
            discussion_comments=[DiscussionComment(id="IC_1", body="LGTM", author="carol")],
            truncated=truncated,
        )

    def test_grouped_json(self, mocker):
        _, client = _patch_common(mocker)
        client.all_pr_comments.return_value = self._all_comments()

        result = _invoke("comments", "123", "-R", "owner/repo", "-f", "json")

        assert result.exit_code == 0, result.output
        doc = json.loads(result.stdout)
        assert doc["pr"] == "owner/repo#123"
        assert [g["author"] for g in doc["groups"]] == ["alice", "bob", "carol"]
        assert doc["groups"][2]["comments"] == [{"state": "discussion", "body": "LGTM"}]
        assert client.all_pr_comments.call_args.kwargs == {"limit": 100, "states": []}

    def test_states_author_and_tail(self, mocker):
        _, client = _patch_common(mocker)
        client.all_pr_comments.return_value = self._all_comments()

        result = _invoke(
            "comments", "123", "-R", "owner/repo", "--states", "pending,commented", "-a", "BOB",
            "--tail", "1", "--flat", "--ids", "-f", "plain",
        )

        assert result.exit_code == 0, result.output
        assert result.stdout == "commented\tPRRC_3\ta.py:8\tnit\tbob\n"
        assert client.all_pr_comments.call_args.kwargs["states"] == ["pending", "commented"]

    def test_mine_uses_viewer_login(self, mocker):
        _, client = _patch_common(mocker)
        client.viewer_login.return_value = "alice"
        client.all_pr_comments.return_value = self._all_comments()

        result = _invoke("comments", "123", "-R", "owner/repo", "--mine", "-a", "bob", "-f", "plain")

        assert result.exit_code == 0, result.output
        assert result.stdout == "@alice\n\tapproved\tb.py\thmm\n"

    def test_unresolved_reads_threads(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = Threads(
            threads=[
                Thread(
                    id="PRRT_1",
                    path="a.py",
                    line=4,
                    is_resolved=False,
                    state="commented",
                    comments=[ThreadComment(id="PRRC_1", body="why?", author="alice")],
                )
            ]
        )

        result = _invoke("comments", "123", "-R", "owner/repo", "--unresolved", "-f", "plain", "--limit", "10")

        assert result.exit_code == 0, result.output
        assert result.stdout == "@alice\n\tunresolved\ta.py:4\twhy?\n"
        client.all_pr_comments.assert_not_called()
        client.review_threads.assert_called_once_with(PR, limit=10, unresolved_only=True)

    def test_truncation_warning(self, mocker):
        _, client = _patch_common(mocker)
        client.all_pr_comments.return_value = self._all_comments(truncated=True)

        result = _invoke("comments", "123", "-R", "owner/repo")

        assert result.exit_code == 0
        assert "Warning: results may be truncated. Use --limit to fetch more." in result.output

    def test_limit_from_config(self, mocker):
        _, client = _patch_common(mocker, config=_make_config(limit=25))
        client.all_pr_comments.return_value = AllComments()

        result = _invoke("comments", "123", "-R", "owner/repo")

        assert result.exit_code == 0
        assert client.all_pr_comments.call_args.kwargs["limit"] == 25
        assert "No comments found." in result.output


class TestView:
    def _threads(self, truncated=False):
        return Threads(
            threads=[
                Thread(
                    id="PRRT_1",
                    path="src/app.py",
                    line=12,
                    is_resolved=False,
                    state="pending",
                    comments=[
                        ThreadComment(id="PRRC_1", body="Why this?", author="alice"),
                        ThreadComment(id="PRRC_2", body="Because.", author="bob"),
                    ],
                )
            ],
            truncated=truncated,
        )

    def test_table(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = self._threads()

        result = _invoke("view", "123", "-R", "owner/repo")

        assert result.exit_code == 0, result.output
        assert "[unresolved] src/app.py:12" in result.output
        assert "  @alice: Why this?" in result.output

    def test_options_forwarded(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = Threads()

        result = _invoke(
            "view", "123", "-R", "owner/repo", "--unresolved", "--states", "pending", "--states", "approved",
            "--limit", "7",
        )

        assert result.exit_code == 0, result.output
        client.review_threads.assert_called_once_with(
            PR, limit=7, unresolved_only=True, states=["pending", "approved"]
        )

    def test_json_with_ids(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = self._threads()

        result = _invoke("view", "123", "-R", "owner/repo", "--ids", "-f", "json")

        doc = json.loads(result.stdout)
        assert doc["threads"][0]["id"] == "PRRT_1"
        assert doc["threads"][0]["comments"][1] == {"id": "PRRC_2", "author": "bob", "body": "Because."}

    def test_truncation_warning(self, mocker):
        _, client = _patch_common(mocker)
        client.review_threads.return_value = self._threads(truncated=True)

        result = _invoke("view", "123", "-R", "owner/repo")

        assert "Warning: results may be truncated." in result.output


class TestEditDelete:
    def test_edit(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("edit", "123", "-R", "owner/repo", "-c", "PRRC_1", "-b", "Updated", "-f", "plain")

        assert result.exit_code == 0, result.output
        client.update_comment.assert_called_once_with("PRRC_1", "Updated")
        assert result.stdout == "edited\tPRRC_1\n"

    def test_delete(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("delete", "123", "-R", "owner/repo", "-c", "PRRC_1")

        assert result.exit_code == 0, result.output
        client.delete_comment.assert_called_once_with("PRRC_1")
        assert "✓ Deleted comment PRRC_1" in result.output

    def test_delete_requires_comment(self, mocker):
        _patch_common(mocker)

        result = _invoke("delete", "123", "-R", "owner/repo")

        assert result.exit_code == 2

    @pytest.mark.parametrize(
        "args",
        [
            ("edit", "123", "-R", "owner/repo", "-c", "PRR_1", "-b", "x"),
            ("delete", "123", "-R", "owner/repo", "-c", "IC_1"),
        ],
    )
    def test_bad_comment_id_never_reaches_network(self, mocker, args):
        """Real client over a mock transport: validation fails before execute."""
        mocker.patch("ghreview_core.config.load_config", return_value=_make_config())
        mocker.patch("ghreview_cli.auth.resolve_github_token", return_value="tok")
        transport = mocker.patch("ghreview_cli.context.GithubGraphQL").return_value

        result = _invoke(*args)

        assert result.exit_code == 1
        assert "invalid comment ID" in result.output
        transport.execute.assert_not_called()


class TestSubmitDiscard:
    def test_submit_latest_pending(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending("PRR_2")

        result = _invoke("submit", "123", "-R", "owner/repo", "-v", "approve", "-b", "Ship it", "-f", "json")

        assert result.exit_code == 0, result.output
        client.submit_review.assert_called_once_with("PRR_2", "APPROVE", "Ship it")
        assert json.loads(result.stdout) == {"action": "submitted", "verdict": "approve"}

    def test_submit_verdict_case_insensitive(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending()

        result = _invoke("submit", "123", "-R", "owner/repo", "-v", "REQUEST_CHANGES")

        assert result.exit_code == 0, result.output
        assert client.submit_review.call_args.args[1] == "REQUEST_CHANGES"
        assert "✓ Submitted review (request_changes)" in result.output

    def test_submit_unknown_verdict(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("submit", "123", "-R", "owner/repo", "-v", "merge")

        assert result.exit_code == 2
        client.submit_review.assert_not_called()

    def test_submit_without_pending_review(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.side_effect = NoPendingReview("no pending review found on owner/repo#123")

        result = _invoke("submit", "123", "-R", "owner/repo", "-v", "comment")

        assert result.exit_code == 1
        assert "no pending review found on owner/repo#123" in result.output
        client.create_review.assert_not_called()
        client.submit_review.assert_not_called()

    def test_submit_explicit_review_id(self, mocker):
        _, client = _patch_common(mocker)

        result = _invoke("submit", "123", "-R", "owner/repo", "-v", "comment", "--review-id", "PRR_9")

        assert result.exit_code == 0, result.output
        client.latest_pending_review.assert_not_called()
        client.submit_review.assert_called_once_with("PRR_9", "COMMENT", "")

    def test_discard(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.return_value = _pending("PRR_3")

        result = _invoke("discard", "123", "-R", "owner/repo", "-f", "plain")

        assert result.exit_code == 0, result.output
        client.delete_review.assert_called_once_with("PRR_3")
        assert result.stdout == "discarded\tPRR_3\n"

    def test_discard_without_pending_review(self, mocker):
        _, client = _patch_common(mocker)
        client.latest_pending_review.side_effect = NoPendingReview("no pending review found on owner/repo#123")

        result = _invoke("discard", "123", "-R", "owner/repo")

        assert result.exit_code == 1
        client.delete_review.assert_not_called()
