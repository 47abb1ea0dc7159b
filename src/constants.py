"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FATAL = 1


class Runners(Enum):
    """Program identities the launcher can be invoked as.

    Args:
        Enum (string): Basename of the invoked executable.
    """

    DISPATCHER = "scala-runner"
    SCALA = "scala"
    SCALAC = "scalac"
    SCALADOC = "scaladoc"
    SCALAP = "scalap"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_RUNNERS = [runner.value for runner in Runners]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "SCALA_RUNNER_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Source hosting
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    GH_CLI = "gh"
    SCALA_REPO = "scala/scala"
    BUILD_MANIFEST_PATH = "build.sbt"
    BASE_VERSION_KEY = "baseVersion"
    COMMUNITY_BUILD_RAW_BASE = "https://raw.githubusercontent.com/scala/community-build"
    NIGHTLY_FILE = "nightly.properties"
    NIGHTLY_KEY = "nightly"

    # Repository directives handed to the launch service
    PR_VALIDATION_REPO = "https://scala-ci.typesafe.com/artifactory/scala-pr-validation-snapshots/"
    INTEGRATION_REPO = "https://scala-ci.typesafe.com/artifactory/scala-integration/"
    CENTRAL_REPO = "central"
    NO_DEFAULT = "--no-default"
    SNAPSHOT_TTL = "24h"
    LATEST_SENTINEL = "+"
    SHA_ABBREV = 7
    DEFAULT_SERIES = "2.13"

    # Launch service
    COURSIER = "cs"
    ENV_COURSIER = "SCALA_RUNNER_COURSIER"
    LAUNCH_VERB = "launch"
    FETCH_VERB = "fetch"
    JAVA_OPT_FLAG = "--java-opt"

    # Configuration file
    ENV_CONFIG = "SCALA_RUNNER_CONFIG"
    DEFAULT_CONFIG_PATH = "~/.config/scala-runners/config.yml"
