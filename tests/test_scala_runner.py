"""Tests for the CLI entrypoint."""

import logging
from unittest.mock import patch

import pytest

import scala_runner
from common.errors import LookupFailure
from scala_runner import invoked_runner, main


@pytest.fixture(autouse=True)
def no_config_file():
    with patch("scala_runner.load_runtime_config"):
        yield


class TestInvokedRunner:
    """Program identity from argv[0]."""

    @pytest.mark.parametrize("program,runner", [
        ("/usr/local/bin/scala", "scala"),
        ("scalac", "scalac"),
        ("/opt/bin/scaladoc", "scaladoc"),
        ("scalap.exe", "scalap"),
        ("/usr/local/bin/scala-runner", "scala-runner"),
        ("src/scala_runner.py", "scala-runner"),
        ("", "scala-runner"),
    ])
    def test_identity(self, program, runner):
        assert invoked_runner(program) == runner


class TestMain:
    """Exit codes and dispatch."""

    def test_help_under_dispatcher(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["scala-runner", "-help"])
        assert exc_info.value.code == 0
        assert "Usage: scala-runner" in capsys.readouterr().out

    def test_help_under_tool_is_passed_through(self):
        with patch("scala_runner.run", return_value=0) as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main(["scalac", "-h"])
        assert exc_info.value.code == 0
        config = mock_run.call_args[0][0]
        assert config.residual_args == ["-h"]
        assert config.runner == "scalac"

    def test_missing_argument_exits_1_without_launch(self, caplog):
        with patch("scala_runner.run") as mock_run:
            with caplog.at_level(logging.ERROR):
                with pytest.raises(SystemExit) as exc_info:
                    main(["scala", "--scala-version"])
        assert exc_info.value.code == 1
        assert "--scala-version requires an argument" in caplog.text
        mock_run.assert_not_called()

    def test_lookup_failure_exits_1(self, caplog):
        with patch("scala_runner.parse_args", side_effect=LookupFailure("pull request #1", "HTTP 404")):
            with caplog.at_level(logging.ERROR):
                with pytest.raises(SystemExit) as exc_info:
                    main(["scala", "--scala-pr", "1"])
        assert exc_info.value.code == 1
        assert "failed to resolve pull request #1: HTTP 404" in caplog.text

    def test_launch_exit_code_is_propagated(self):
        with patch("scala_runner.run", return_value=42) as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main(["scala", "-212", "-e", "println(1)"])
        assert exc_info.value.code == 42
        config = mock_run.call_args[0][0]
        assert config.scala_version == "2.12+"
        assert config.residual_args == ["-e", "println(1)"]

    def test_verbose_enables_debug(self):
        with patch("scala_runner.run", return_value=0):
            with pytest.raises(SystemExit):
                main(["scala", "-v"])
        assert logging.getLogger().isEnabledFor(logging.DEBUG)
        logging.getLogger().setLevel(logging.WARNING)

    def test_module_exposes_main(self):
        assert callable(scala_runner.main)
