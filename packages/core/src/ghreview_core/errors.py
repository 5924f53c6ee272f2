"""Error hierarchy shared by every ghreview package.

The CLI catches GhReviewError at the command boundary and reports the
message; nothing below the command layer prints or exits.
"""

from __future__ import annotations


class GhReviewError(Exception):
    """Base class for all expected, user-reportable failures."""


class InvalidReference(GhReviewError):
    """The PR argument is not a positive number, #number, or PR URL."""


class RepositoryResolutionError(GhReviewError):
    """No owner/repo could be determined, or the given one is malformed."""


class ValidationError(GhReviewError):
    """A required field is missing or malformed; raised before any network call."""


class NotFound(GhReviewError):
    """The remote entity is absent or came back without its metadata."""


class NoPendingReview(NotFound):
    """The reviewer has no pending review on the pull request."""


class AuthError(GhReviewError):
    """The authenticated user could not be determined."""


class TransportError(GhReviewError):
    """The GraphQL call itself failed."""


class UnsupportedFormat(GhReviewError):
    """Unknown output format name."""


class UnsupportedResult(GhReviewError):
    """A renderer was handed a result type it does not know."""
