"""GitHub token resolution with gh CLI fallback.

Resolution order (stops at first success):
  1. GH_TOKEN, then GITHUB_TOKEN environment variables
  2. `gh auth token` (GitHub CLI session, works after `gh auth login`)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_github_token() -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises; callers check for None and emit a UsageError.
    """
    for var in ("GH_TOKEN", "GITHUB_TOKEN"):
        token = os.environ.get(var)
        if token:
            logger.debug("Resolved GitHub token from %s.", var)
            return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh missing or hung: no token from this source.
        logger.debug("gh CLI unavailable for token lookup.")

    return None
