"""GitHub API client for the lookups needed to resolve unreleased versions.

Provides a lightweight REST client for fetching a file at a ref, the commit
SHA of a ref, the head commit of a pull request, and raw files served from
raw.githubusercontent.com.
"""
from __future__ import annotations

import logging
import os
import subprocess
from typing import Dict, Optional

from constants import Constants
from common.http_client import get_json, get_text
from common.errors import LookupFailure
from common.tools import available

logger = logging.getLogger(__name__)


def _gh_token() -> Optional[str]:
    """Read a token from the ``gh`` CLI, prompting for login when needed."""
    if not available(Constants.GH_CLI):
        return None
    status = subprocess.run(  # noqa: S603
        [Constants.GH_CLI, "auth", "status"],
        capture_output=True,
        text=True,
        check=False,
    )
    if status.returncode != 0:
        logger.info("GitHub CLI is not authenticated, starting gh auth login")
        login = subprocess.run([Constants.GH_CLI, "auth", "login"], check=False)  # noqa: S603
        if login.returncode != 0:
            logger.warning("gh auth login failed; continuing unauthenticated")
            return None
    result = subprocess.run(  # noqa: S603
        [Constants.GH_CLI, "auth", "token"],
        capture_output=True,
        text=True,
        check=False,
    )
    token = result.stdout.strip() if result.returncode == 0 else ""
    return token or None


def resolve_token() -> Optional[str]:
    """Get a GitHub token from the environment or the gh CLI.

    Priority:
    1. GITHUB_TOKEN environment variable
    2. ``gh auth token`` (after ``gh auth login`` if not logged in)

    Returns:
        Token string or None to use the API anonymously.
    """
    env_token = os.environ.get(Constants.ENV_GITHUB_TOKEN)
    if env_token and env_token.strip():
        return env_token.strip()
    return _gh_token()


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    The token is looked up lazily, on the first request, so selectors that
    need no lookup never touch credentials.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        repo: Optional[str] = None,
        raw_base_url: Optional[str] = None,
        token: Optional[str] = None,
    ):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for the GitHub API (defaults to Constants.GITHUB_API_BASE)
            repo: ``owner/name`` of the repository queried (defaults to Constants.SCALA_REPO)
            raw_base_url: Base URL for raw community build files
            token: GitHub token (defaults to GITHUB_TOKEN or the gh CLI)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.repo = repo or Constants.SCALA_REPO
        self.raw_base_url = (raw_base_url or Constants.COMMUNITY_BUILD_RAW_BASE).rstrip("/")
        self._token = token
        self._token_resolved = token is not None

    @property
    def token(self) -> Optional[str]:
        if not self._token_resolved:
            self._token = resolve_token()
            self._token_resolved = True
        return self._token

    def _get_headers(self, accept: str = "application/vnd.github+json") -> Dict[str, str]:
        """Get request headers including authorization if a token is available."""
        headers = {"Accept": accept}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_file_contents(self, path: str, ref: str, *, context: str = "file contents") -> str:
        """Fetch the raw contents of ``path`` at ``ref`` (e.g. ``heads/2.13.x``)."""
        url = f"{self.base_url}/repos/{self.repo}/contents/{path}"
        return get_text(
            url,
            context=context,
            headers=self._get_headers(Constants.GITHUB_RAW_MEDIA_TYPE),
            params={"ref": ref},
        )

    def get_commit_sha(self, ref: str, *, context: str = "commit sha") -> str:
        """Fetch the commit SHA a branch, tag or ``pull/N/head`` ref points at."""
        data = get_json(
            f"{self.base_url}/repos/{self.repo}/commits/{ref}",
            context=context,
            headers=self._get_headers(),
        )
        sha = data.get("sha") if isinstance(data, dict) else None
        if not sha:
            raise LookupFailure(context, f"no sha in commit data for {ref}")
        return sha

    def get_pull_head_sha(self, number: str, *, context: str = "pull request head") -> str:
        """Fetch the head commit SHA of pull request ``number``."""
        data = get_json(
            f"{self.base_url}/repos/{self.repo}/pulls/{number}",
            context=context,
            headers=self._get_headers(),
        )
        head = data.get("head") if isinstance(data, dict) else None
        sha = head.get("sha") if isinstance(head, dict) else None
        if not sha:
            raise LookupFailure(context, f"no head sha for pull request {number}")
        return sha

    def get_raw_file(self, branch: str, path: str, *, context: str = "raw file") -> str:
        """Fetch ``path`` from ``branch`` of the community build repository."""
        return get_text(f"{self.raw_base_url}/{branch}/{path}", context=context)
