"""Data models for version selection and launch configuration."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SelectorKind(Enum):
    """Enum for the ways a user can pick a Scala release."""
    SERIES_LATEST = "series-latest"
    EXPLICIT = "explicit"
    BRANCH_HEAD = "branch-head"
    BRANCH_NEXT = "branch-next"
    PULL_REQUEST = "pull-request"


@dataclass(frozen=True)
class VersionSelector:
    """A user-specified description of which release to run.

    ``value`` is the series (``2.12``), the version string, the branch
    (``2.13.x``) or the pull request number, depending on ``kind``.
    """
    kind: SelectorKind
    value: str

    @classmethod
    def series_latest(cls, series: str) -> "VersionSelector":
        return cls(SelectorKind.SERIES_LATEST, series)

    @classmethod
    def explicit(cls, version: str) -> "VersionSelector":
        return cls(SelectorKind.EXPLICIT, version)

    @classmethod
    def branch_head(cls, branch: str) -> "VersionSelector":
        return cls(SelectorKind.BRANCH_HEAD, branch)

    @classmethod
    def branch_next(cls, branch: str) -> "VersionSelector":
        return cls(SelectorKind.BRANCH_NEXT, branch)

    @classmethod
    def pull_request(cls, number: str) -> "VersionSelector":
        return cls(SelectorKind.PULL_REQUEST, number)


@dataclass
class LaunchConfig:
    """Everything collected from the command line for one invocation."""
    runner: str
    scala_version: Optional[str] = None
    selector: Optional[VersionSelector] = None
    java_opts: List[str] = field(default_factory=list)
    repo_directives: List[str] = field(default_factory=list)
    user_directives: List[str] = field(default_factory=list)
    residual_args: List[str] = field(default_factory=list)
    print_version: bool = False
    verbose: bool = False
    show_help: bool = False

    @property
    def coursier_opts(self) -> List[str]:
        """Derived directives followed by the user's ``-C`` overrides."""
        return self.repo_directives + self.user_directives
