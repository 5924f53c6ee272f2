"""Turn a user-supplied PR argument into a fully qualified PRReference.

Accepted forms: ``123``, ``#123``, or a pull request URL such as
``https://github.com/owner/repo/pull/123``. A URL carries its own
owner/repo, which beats any ``--repo`` flag. A bare number takes the flag,
then ``GH_REPO``, then the ``origin`` git remote.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess

from ghreview_core.errors import InvalidReference, RepositoryResolutionError
from ghreview_core.models import PRReference

logger = logging.getLogger(__name__)

# Scheme and host match case-insensitively; owner and repo are kept as typed.
_PR_URL_RE = re.compile(r"(?i:(?:https?://)?(?:www\.)?github\.com)/([^/\s]+)/([^/\s]+)/pull/([0-9]+)")
_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def parse_reference(arg: str) -> tuple[int, str]:
    """Return ``(number, repo_override)``; repo_override is "" unless arg is a URL."""
    arg = (arg or "").strip()

    match = _PR_URL_RE.search(arg)
    if match:
        owner, repo, number = match.groups()
        if int(number) <= 0:
            raise InvalidReference("PR number must be positive")
        return int(number), f"{owner}/{repo}"

    candidate = arg.removeprefix("#")
    # ASCII digits only: int() would also take "1_000" and non-Latin digits.
    if not _NUMBER_RE.fullmatch(candidate):
        raise InvalidReference(f"invalid PR reference {candidate!r}: expected number or URL")
    number = int(candidate)
    if number <= 0:
        raise InvalidReference("PR number must be positive")
    return number, ""


def parse_repo(repo: str) -> tuple[str, str]:
    """Split ``OWNER/REPO`` (optionally ``HOST/OWNER/REPO``) into owner and name."""
    parts = repo.strip().split("/")
    if len(parts) == 3:
        parts = parts[1:]
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise RepositoryResolutionError(f"invalid repository {repo!r}: expected OWNER/REPO")
    return parts[0].strip(), parts[1].strip()


def detect_repository() -> str | None:
    """Best-effort owner/repo from the environment or the origin git remote."""
    from_env = os.environ.get("GH_REPO", "").strip()
    if from_env:
        logger.debug("Using repository from GH_REPO: %s", from_env)
        return from_env

    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None

    url = result.stdout.strip()
    # https://github.com/owner/repo.git  ->  owner/repo
    # git@github.com:owner/repo.git      ->  owner/repo
    if "github.com" not in url:
        return None
    slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
    if slug.count("/") != 1:
        return None
    logger.debug("Detected repository from git remote: %s", slug)
    return slug


def build_reference(number: int, repo: str = "") -> PRReference:
    if number <= 0:
        raise InvalidReference("PR number must be positive")

    repo = (repo or "").strip()
    if not repo:
        detected = detect_repository()
        if not detected:
            raise RepositoryResolutionError("could not determine repository (use -R owner/repo)")
        repo = detected

    owner, name = parse_repo(repo)
    return PRReference(owner=owner, repo=name, number=number)


def resolve_reference(arg: str, repo_flag: str | None = None) -> PRReference:
    """Parse ``arg`` and qualify it: URL repo first, then ``repo_flag``, then ambient context."""
    number, from_url = parse_reference(arg)
    return build_reference(number, from_url or repo_flag or "")
