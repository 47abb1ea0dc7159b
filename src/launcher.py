"""Build and run the coursier command for a LaunchConfig.

Normal mode launches ``<runner>:<version>`` through ``cs launch``. Print-only
mode reports the selected version, asking coursier to resolve it when the
version is not already concrete.
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import sys
import tempfile
from typing import List, Optional

from constants import Constants, ExitCodes, Runners
from common.errors import LookupFailure
from common.logging_utils import quote_args
from common.tools import require
from versioning.models import LaunchConfig

logger = logging.getLogger(__name__)

_CONCRETE_VERSION_RE = re.compile(r"\d[^.]*\.\d[^.]*\.\d")


def artifact_name(runner: str) -> str:
    """Coursier app name for an invoked identity; the dispatcher runs ``scala``."""
    if runner == Runners.DISPATCHER.value:
        return Runners.SCALA.value
    return runner


def coordinate(config: LaunchConfig) -> str:
    return f"{artifact_name(config.runner)}:{config.scala_version}"


def java_opt_args(java_opts: List[str]) -> List[str]:
    args: List[str] = []
    for opt in java_opts:
        args.extend([Constants.JAVA_OPT_FLAG, opt])
    return args


def build_command(config: LaunchConfig, coursier: Optional[str] = None) -> List[str]:
    """The full launch command: verb, coordinate, JVM and coursier options, ``--``, residual args."""
    return (
        [coursier or Constants.COURSIER, Constants.LAUNCH_VERB, coordinate(config)]
        + java_opt_args(config.java_opts)
        + config.coursier_opts
        + ["--"]
        + config.residual_args
    )


def _echo(command: List[str]) -> None:
    sys.stderr.write(" ".join(quote_args(command)) + "\n")


def launch(config: LaunchConfig) -> int:
    """Run the launch command and return its exit code.

    Raises:
        MissingTool: coursier is not installed.
    """
    coursier = require(Constants.COURSIER, "launching Scala")
    command = build_command(config, coursier)
    if config.verbose:
        _echo(command)
    logger.debug("Running: %s", " ".join(quote_args(command)))
    result = subprocess.run(command, check=False)  # noqa: S603
    return result.returncode


def is_concrete(scala_version: str) -> bool:
    """True for ``X.Y.Z...`` versions that need no resolution to be printed."""
    return _CONCRETE_VERSION_RE.match(scala_version) is not None


def version_from_report(report: dict) -> str:
    """Version of the first dependency in a ``cs fetch --json-output-file`` report."""
    dependencies = report.get("dependencies") or []
    if not dependencies or not isinstance(dependencies[0], dict) or not dependencies[0].get("coord"):
        raise LookupFailure("scala version", "coursier returned no dependencies")
    return dependencies[0]["coord"].rsplit(":", 1)[-1]


def fetch_version(config: LaunchConfig) -> str:
    """Ask coursier which version ``config.scala_version`` currently resolves to.

    Raises:
        MissingTool: coursier is not installed.
        LookupFailure: The fetch failed or its report was unusable.
    """
    coursier = require(Constants.COURSIER, "resolving the Scala version")
    fd, path = tempfile.mkstemp(suffix=".json", prefix="scala-runner-")
    os.close(fd)
    try:
        command = (
            [coursier, Constants.FETCH_VERB, "--json-output-file", path]
            + config.coursier_opts
            + [coordinate(config)]
        )
        if config.verbose:
            _echo(command)
        result = subprocess.run(command, stdout=subprocess.DEVNULL, check=False)  # noqa: S603
        if result.returncode != 0:
            raise LookupFailure("scala version", f"coursier fetch exited with {result.returncode}")
        try:
            with open(path, "r", encoding="utf-8") as fh:
                report = json.load(fh)
        except (OSError, ValueError) as exc:
            raise LookupFailure("scala version", f"unreadable coursier report: {exc}") from exc
    finally:
        try:
            os.unlink(path)
        except OSError:
            logger.debug("Failed to remove temp file: %s", path)
    if not isinstance(report, dict):
        raise LookupFailure("scala version", "unexpected coursier report")
    return version_from_report(report)


def print_version(config: LaunchConfig) -> None:
    if is_concrete(config.scala_version):
        print(config.scala_version)
    else:
        print(fetch_version(config))


def run(config: LaunchConfig) -> int:
    """Execute a LaunchConfig: print the version or launch, returning the exit code."""
    if config.print_version:
        print_version(config)
        return ExitCodes.SUCCESS.value
    return launch(config)
