"""Argument processing for the Scala runners.

The command line is consumed once, left to right. Version-selecting tokens
resolve immediately and re-derive the repository directives; every other
token lands in exactly one of the pass-through lists of the LaunchConfig.
"""

import logging
from typing import Optional, Sequence

from constants import Constants, Runners
from common.errors import MissingArgument
from versioning.classifier import TokenKind, classify, is_flag_shaped, selector_for_version
from versioning.models import LaunchConfig, VersionSelector
from versioning.repositories import repository_directives
from versioning.resolver import VersionResolver

logger = logging.getLogger(__name__)

USAGE = """\
Usage: {runner} [options] [args...]

Runs scala, scalac, scaladoc or scalap for any Scala 2 release, branch head,
nightly or pull request build, fetched and launched with coursier.

Version selection (the last one given wins):
  -28 ... -213               latest release of the 2.8 ... 2.13 series
  -2.13.head                 latest integration build of the 2.13.x branch
  -2.13.next                 current community build nightly of the 2.13.x branch
  -2.13.<version>            that exact version, e.g. -2.13.12 or -2.13.0-RC3
  --scala-version <version>  an explicit version, or <series>.head / <series>.next
  --scala-pr <number>        the snapshot built for a scala/scala pull request

Options:
  -D<key>=<value>            pass a system property to the JVM
  -J<option>                 pass <option> to the JVM
  -C<option>                 pass <option> to coursier
  --print-scala-version      print the selected Scala version and exit
  -v                         echo the launch command to stderr
  -h, -help                  print this message and exit

Everything else is passed through unchanged.

Environment:
  {coursier_env}  coursier executable (default: {coursier})
  {token_env}           GitHub token for .head, .next and --scala-pr lookups
  {config_env}    YAML configuration file (default: {config})
"""


def usage(runner: str = Runners.DISPATCHER.value) -> str:
    return USAGE.format(
        runner=runner,
        coursier_env=Constants.ENV_COURSIER,
        coursier=Constants.COURSIER,
        token_env=Constants.ENV_GITHUB_TOKEN,
        config_env=Constants.ENV_CONFIG,
        config=Constants.DEFAULT_CONFIG_PATH,
    )


def set_version(config: LaunchConfig, selector: VersionSelector, resolver: VersionResolver) -> None:
    """Resolve ``selector`` and rebuild the derived repository directives.

    Pull requests are first expanded to the explicit snapshot version they
    denote, so the directives are derived from that composed string.
    """
    selector = resolver.expand(selector)
    config.selector = selector
    config.scala_version = resolver.resolve(selector)
    config.repo_directives = repository_directives(config.scala_version)
    logger.debug("Scala version set to %s (%s)", config.scala_version, " ".join(config.repo_directives))


def _value_after(argv: Sequence[str], index: int) -> str:
    flag = argv[index]
    if index + 1 >= len(argv) or is_flag_shaped(argv[index + 1]):
        raise MissingArgument(flag)
    return argv[index + 1]


def parse_args(
    argv: Sequence[str],
    runner: str = Runners.SCALA.value,
    resolver: Optional[VersionResolver] = None,
) -> LaunchConfig:
    """Process ``argv`` (without the program name) into a LaunchConfig.

    Raises:
        MissingArgument: A value flag is last or followed by a flag.
        MissingTool, LookupFailure: Resolving a selector failed.
    """
    resolver = resolver or VersionResolver()
    config = LaunchConfig(runner=runner)
    set_version(config, VersionSelector.series_latest(Constants.DEFAULT_SERIES), resolver)

    i = 0
    while i < len(argv):
        token = classify(argv[i], runner)
        if token.kind is TokenKind.SELECTOR:
            set_version(config, token.selector, resolver)
        elif token.kind is TokenKind.SCALA_VERSION_FLAG:
            set_version(config, selector_for_version(_value_after(argv, i)), resolver)
            i += 1
        elif token.kind is TokenKind.SCALA_PR_FLAG:
            set_version(config, VersionSelector.pull_request(_value_after(argv, i)), resolver)
            i += 1
        elif token.kind is TokenKind.JAVA_OPT:
            config.java_opts.append(token.text)
        elif token.kind is TokenKind.COURSIER_OPT:
            config.user_directives.append(token.text)
        elif token.kind is TokenKind.VERBOSE:
            config.verbose = True
        elif token.kind is TokenKind.PRINT_VERSION:
            config.print_version = True
        elif token.kind is TokenKind.HELP:
            config.show_help = True
            return config
        else:
            config.residual_args.append(token.text)
        i += 1
    return config
