"""Classify command-line tokens into version selectors and option kinds.

Rules are tried top to bottom and the first match wins. Tokens that match
no rule are residual arguments passed through to the launched program.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from constants import Runners

from .models import VersionSelector

_SERIES = r"2\.(?:8|9|1[0-4])"


class TokenKind(Enum):
    """What a single command-line token asks for."""
    SELECTOR = "selector"
    SCALA_VERSION_FLAG = "scala-version"
    SCALA_PR_FLAG = "scala-pr"
    JAVA_OPT = "java-opt"
    COURSIER_OPT = "coursier-opt"
    VERBOSE = "verbose"
    PRINT_VERSION = "print-version"
    HELP = "help"
    RESIDUAL = "residual"


@dataclass(frozen=True)
class Token:
    """A classified token: its kind plus the selector or option text it carries."""
    kind: TokenKind
    text: str
    selector: Optional[VersionSelector] = None

    @property
    def takes_argument(self) -> bool:
        return self.kind in (TokenKind.SCALA_VERSION_FLAG, TokenKind.SCALA_PR_FLAG)


def series_branch(series: str) -> str:
    """Development branch name for a release series, e.g. ``2.13`` -> ``2.13.x``."""
    return f"{series}.x"


def _series_latest(m: re.Match) -> Token:
    return Token(TokenKind.SELECTOR, m.group(0), VersionSelector.series_latest(f"2.{m.group(1)}"))


def _branch_selector(m: re.Match) -> Token:
    branch = series_branch(m.group(1))
    if m.group(2) == "head":
        return Token(TokenKind.SELECTOR, m.group(0), VersionSelector.branch_head(branch))
    return Token(TokenKind.SELECTOR, m.group(0), VersionSelector.branch_next(branch))


def _explicit(m: re.Match) -> Token:
    return Token(TokenKind.SELECTOR, m.group(0), VersionSelector.explicit(m.group(1)))


def _kind(kind: TokenKind, group: int = 0) -> Callable[[re.Match], Token]:
    return lambda m: Token(kind, m.group(group))


_RULES: List[Tuple[re.Pattern, Callable[[re.Match], Token]]] = [
    (re.compile(r"-2(8|9|1[0-3])"), _series_latest),
    (re.compile(rf"-({_SERIES})\.(head|next)"), _branch_selector),
    (re.compile(rf"-({_SERIES}\.\d.*)"), _explicit),
    (re.compile(r"--scala-version"), _kind(TokenKind.SCALA_VERSION_FLAG)),
    (re.compile(r"--scala-pr"), _kind(TokenKind.SCALA_PR_FLAG)),
    (re.compile(r"-D.+"), _kind(TokenKind.JAVA_OPT)),
    (re.compile(r"-J(.+)"), _kind(TokenKind.JAVA_OPT, 1)),
    (re.compile(r"-C(.+)"), _kind(TokenKind.COURSIER_OPT, 1)),
    (re.compile(r"-v"), _kind(TokenKind.VERBOSE)),
    (re.compile(r"--print-scala-version"), _kind(TokenKind.PRINT_VERSION)),
    (re.compile(r"-h|-help"), _kind(TokenKind.HELP)),
]

_VERSION_ARG_RE = re.compile(r"(.+)\.(head|next)")


def classify(token: str, runner: str = Runners.DISPATCHER.value) -> Token:
    """Classify one token; ``runner`` is the identity the program was invoked as.

    ``-h``/``-help`` only request local help under the dispatcher identity;
    otherwise they belong to the launched program.
    """
    for pattern, action in _RULES:
        m = pattern.fullmatch(token)
        if m is None:
            continue
        result = action(m)
        if result.kind is TokenKind.HELP and runner != Runners.DISPATCHER.value:
            break
        return result
    return Token(TokenKind.RESIDUAL, token)


def selector_for_version(value: str) -> VersionSelector:
    """Selector for a ``--scala-version`` value.

    ``2.13.head`` and ``2.13.next`` select the branch; anything else is an
    explicit version.
    """
    m = _VERSION_ARG_RE.fullmatch(value)
    if m is None:
        return VersionSelector.explicit(value)
    if m.group(2) == "head":
        return VersionSelector.branch_head(series_branch(m.group(1)))
    return VersionSelector.branch_next(series_branch(m.group(1)))


def is_flag_shaped(token: str) -> bool:
    return token.startswith("-")
