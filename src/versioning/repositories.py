"""Repository and cache directives derived from a resolved version string."""

import re
from typing import List

from constants import Constants

_PR_VALIDATION_RE = re.compile(r"-(?:bin|pre)-.*SNAPSHOT$")
_INTEGRATION_RE = re.compile(r"-(?:bin|pre)-.+$")


def repository_directives(scala_version: str) -> List[str]:
    """Return the launcher directives needed to fetch ``scala_version``.

    The result depends only on the shape of the string and is rebuilt from
    scratch on every call. At most one repository rule applies; the ttl rule
    is evaluated on its own and may be added to any of them.
    """
    directives: List[str] = []
    if _PR_VALIDATION_RE.search(scala_version):
        directives.append(f"-r={Constants.PR_VALIDATION_REPO}")
    elif _INTEGRATION_RE.search(scala_version):
        directives.append(f"-r={Constants.INTEGRATION_REPO}")
    elif scala_version.endswith(Constants.LATEST_SENTINEL):
        # --no-default has to come before the repository it replaces the defaults with
        directives.append(Constants.NO_DEFAULT)
        directives.append(f"-r={Constants.CENTRAL_REPO}")

    if scala_version.endswith("SNAPSHOT") or scala_version.endswith(Constants.LATEST_SENTINEL):
        directives.append(f"--ttl={Constants.SNAPSHOT_TTL}")
    return directives
