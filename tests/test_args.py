"""Tests for command-line processing into a LaunchConfig."""

from unittest.mock import MagicMock

import pytest

from args import parse_args, set_version, usage
from common.errors import LookupFailure, MissingArgument
from constants import Constants
from repository.github import GitHubClient
from versioning.models import LaunchConfig, VersionSelector
from versioning.resolver import VersionResolver

PR_REPO = f"-r={Constants.PR_VALIDATION_REPO}"


@pytest.fixture
def client():
    return MagicMock(spec=GitHubClient)


@pytest.fixture
def resolver(client):
    return VersionResolver(client)


def parse(argv, resolver, runner="scala"):
    return parse_args(argv, runner, resolver)


class TestDefaults:
    """No selector on the command line."""

    def test_latest_default_series(self, resolver, client):
        config = parse([], resolver)
        assert config.scala_version == "2.13+"
        assert config.repo_directives == ["--no-default", "-r=central", "--ttl=24h"]
        assert config.residual_args == []
        assert not client.method_calls


class TestSelectors:
    """Version-selecting tokens."""

    def test_series_shorthand(self, resolver):
        config = parse(["-212"], resolver)
        assert config.scala_version == "2.12+"
        assert config.repo_directives == ["--no-default", "-r=central", "--ttl=24h"]

    def test_explicit_release_candidate(self, resolver):
        config = parse(["-2.13.0-RC3"], resolver)
        assert config.scala_version == "2.13.0-RC3"
        assert config.repo_directives == []

    def test_scala_version_flag(self, resolver):
        config = parse(["--scala-version", "2.13.5-bin-abc1234-SNAPSHOT"], resolver)
        assert config.scala_version == "2.13.5-bin-abc1234-SNAPSHOT"
        assert config.repo_directives == [PR_REPO, "--ttl=24h"]

    def test_scala_version_head(self, resolver, client):
        client.get_file_contents.return_value = 'Global / baseVersion := "2.13.13"'
        client.get_commit_sha.return_value = "0123456789"

        config = parse(["--scala-version", "2.13.head"], resolver)

        assert config.scala_version == "2.13.13-bin-0123456"
        assert config.repo_directives == [f"-r={Constants.INTEGRATION_REPO}"]

    def test_last_selector_wins(self, resolver):
        config = parse(["-212", "--scala-version", "2.13.5-SNAPSHOT", "-2.13.0-RC3"], resolver)
        assert config.scala_version == "2.13.0-RC3"
        assert config.repo_directives == []

    def test_pull_request(self, resolver, client):
        client.get_file_contents.return_value = 'Global / baseVersion := "2.14.0-RC1"'
        client.get_pull_head_sha.return_value = "abcdef1234"

        config = parse(["--scala-pr", "1234"], resolver)

        assert config.selector == VersionSelector.explicit("2.14.0-RC1-pre-abcdef1-SNAPSHOT")
        assert config.scala_version == "2.14.0-RC1-pre-abcdef1-SNAPSHOT"
        assert config.repo_directives == [PR_REPO, "--ttl=24h"]

    def test_lookup_failure_aborts(self, resolver, client):
        client.get_raw_file.side_effect = LookupFailure("nightly of 2.13.x", "HTTP 404")

        with pytest.raises(LookupFailure):
            parse(["-2.13.next", "Foo.scala"], resolver)


class TestMissingArgument:
    """Value flags need a following non-flag token."""

    @pytest.mark.parametrize("argv", [
        ["--scala-version"],
        ["--scala-version", "-v"],
        ["--scala-pr"],
        ["Foo.scala", "--scala-pr", "--print-scala-version"],
    ])
    def test_missing(self, argv, resolver):
        with pytest.raises(MissingArgument) as exc_info:
            parse(argv, resolver)
        assert exc_info.value.exit_code == 1
        assert "requires an argument" in str(exc_info.value)


class TestPassThrough:
    """Options and residual arguments."""

    def test_residual_order_and_text(self, resolver):
        argv = ["-deprecation", "-212", "Foo bar.scala", "-J-Xmx1g", "", "-2.13.head.txt", "-Xlint"]
        config = parse(argv, resolver)
        assert config.residual_args == ["-deprecation", "Foo bar.scala", "", "-2.13.head.txt", "-Xlint"]

    def test_java_options(self, resolver):
        config = parse(["-Dfoo=bar", "-J-Xss4m", "-Dfoo=baz"], resolver)
        assert config.java_opts == ["-Dfoo=bar", "-Xss4m", "-Dfoo=baz"]
        assert config.residual_args == []

    def test_user_directives_are_kept_apart(self, resolver):
        config = parse(["-C--ttl=0", "-212", "-C-r=ivy2Local"], resolver)
        assert config.user_directives == ["--ttl=0", "-r=ivy2Local"]
        assert config.repo_directives == ["--no-default", "-r=central", "--ttl=24h"]
        assert config.coursier_opts == [
            "--no-default", "-r=central", "--ttl=24h", "--ttl=0", "-r=ivy2Local",
        ]
        assert "--ttl=0" not in config.java_opts

    def test_flags(self, resolver):
        config = parse(["-v", "--print-scala-version"], resolver)
        assert config.verbose
        assert config.print_version


class TestHelp:
    """-h and -help."""

    def test_dispatcher_help_stops_processing(self, resolver):
        config = parse(["-h", "--scala-version"], resolver, runner="scala-runner")
        assert config.show_help

    def test_tool_help_passes_through(self, resolver):
        config = parse(["-help"], resolver, runner="scalac")
        assert not config.show_help
        assert config.residual_args == ["-help"]

    def test_usage_mentions_runner(self):
        text = usage("scala-runner")
        assert text.startswith("Usage: scala-runner")
        assert "--scala-pr" in text


class TestSetVersion:
    """Directive derivation on every version change."""

    def test_directives_are_replaced(self, resolver):
        config = LaunchConfig(runner="scala")
        set_version(config, VersionSelector.series_latest("2.12"), resolver)
        set_version(config, VersionSelector.explicit("2.12.18"), resolver)
        assert config.scala_version == "2.12.18"
        assert config.repo_directives == []
