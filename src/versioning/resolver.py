"""Resolve version selectors to concrete version strings.

Series-latest and explicit selectors resolve locally. Branch heads, nightlies
and pull requests need GitHub lookups; any failed lookup aborts resolution
with a LookupFailure naming the selector being resolved.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from constants import Constants
from common.errors import LookupFailure
from common.logging_utils import extra_context, is_debug_enabled
from repository.github import GitHubClient

from .models import SelectorKind, VersionSelector

logger = logging.getLogger(__name__)

# Matched from the start of the extracted base version, not the requested ref.
_PRERELEASE_RE = re.compile(r"\d+\.\d+\.0")


def _short_sha(sha: str) -> str:
    return sha[:Constants.SHA_ABBREV]


def extract_base_version(manifest: str, key: str = Constants.BASE_VERSION_KEY) -> Optional[str]:
    """Return the first quoted literal after ``key`` in a build manifest."""
    match = re.search(rf'\b{re.escape(key)}\b[^"\n]*"([^"]+)"', manifest)
    return match.group(1) if match else None


def extract_property(text: str, key: str) -> Optional[str]:
    """Return the value assigned to ``key`` in a properties-style file."""
    match = re.search(rf"^[ \t]*{re.escape(key)}[ \t]*[=:][ \t]*(.*?)[ \t\r]*$", text, re.MULTILINE)
    if match and match.group(1):
        return match.group(1)
    return None


def build_suffix(base_version: str) -> str:
    """``-pre`` for x.y.0 style base versions, ``-bin`` for everything else."""
    return "-pre" if _PRERELEASE_RE.match(base_version) else "-bin"


class VersionResolver:
    """Turns a VersionSelector into the version string handed to the launcher."""

    def __init__(self, client: Optional[GitHubClient] = None):
        self._client = client

    @property
    def client(self) -> GitHubClient:
        if self._client is None:
            self._client = GitHubClient()
        return self._client

    def expand(self, selector: VersionSelector) -> VersionSelector:
        """Replace a pull request selector by the explicit snapshot it denotes.

        Other selectors are returned unchanged.
        """
        if selector.kind is not SelectorKind.PULL_REQUEST:
            return selector
        number = selector.value
        context = f"pull request #{number}"
        base = self._suffixed_base_version(f"pull/{number}/head", context)
        sha = self.client.get_pull_head_sha(number, context=context)
        return VersionSelector.explicit(f"{base}-{_short_sha(sha)}-SNAPSHOT")

    def resolve(self, selector: VersionSelector) -> str:
        """Return the concrete version string for ``selector``."""
        selector = self.expand(selector)
        if selector.kind is SelectorKind.SERIES_LATEST:
            # The launcher picks the latest release matching the series.
            version = selector.value + Constants.LATEST_SENTINEL
        elif selector.kind is SelectorKind.EXPLICIT:
            version = selector.value
        elif selector.kind is SelectorKind.BRANCH_HEAD:
            version = self.resolve_branch_head(selector.value)
        elif selector.kind is SelectorKind.BRANCH_NEXT:
            version = self.resolve_branch_next(selector.value)
        else:
            raise ValueError(f"unsupported selector kind: {selector.kind}")

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved %s %s to %s",
                selector.kind.value,
                selector.value,
                version,
                extra=extra_context(
                    event="decision",
                    component="resolver",
                    action="resolve",
                    outcome=version,
                ),
            )
        return version

    def resolve_branch_head(self, branch: str) -> str:
        """``<base>-bin-<sha7>`` (or ``-pre-``) for the tip of ``branch``."""
        ref = f"heads/{branch}"
        context = f"branch head of {branch}"
        base = self._suffixed_base_version(ref, context)
        sha = self.client.get_commit_sha(ref, context=context)
        return f"{base}-{_short_sha(sha)}"

    def resolve_branch_next(self, branch: str) -> str:
        """The nightly version the community build currently tests for ``branch``."""
        context = f"nightly of {branch}"
        text = self.client.get_raw_file(branch, Constants.NIGHTLY_FILE, context=context)
        nightly = extract_property(text, Constants.NIGHTLY_KEY)
        if not nightly:
            raise LookupFailure(context, f"no '{Constants.NIGHTLY_KEY}' entry in {Constants.NIGHTLY_FILE}")
        return nightly

    def _suffixed_base_version(self, ref: str, context: str) -> str:
        manifest = self.client.get_file_contents(Constants.BUILD_MANIFEST_PATH, ref, context=context)
        base_version = extract_base_version(manifest)
        if not base_version:
            raise LookupFailure(
                context, f"no {Constants.BASE_VERSION_KEY} in {Constants.BUILD_MANIFEST_PATH} at {ref}"
            )
        logger.debug("Base version at %s is %s", ref, base_version)
        return base_version + build_suffix(base_version)
