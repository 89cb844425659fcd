"""
Smoke tests writing workflow commands to the real standard streams.
"""

from __future__ import annotations

import pytest
import structlog

from gh_actions_logging import GitHubActionsLogHandler, Settings, StreamSink, configure_logging


@pytest.fixture()
def stdout_handler() -> GitHubActionsLogHandler:
    return GitHubActionsLogHandler.standard_output("smoke")


class TestStandardOutput:

    def test_mask_then_log(self, stdout_handler, capsys: pytest.CaptureFixture[str]) -> None:
        stdout_handler.mask("Mona The Octocat")
        stdout_handler.log("debug", "Mona The Octocat", file="smoke.py", function="f", line=1)
        assert capsys.readouterr().out.splitlines() == [
            "::add-mask::Mona The Octocat",
            "::debug file=smoke.py,line=1::Mona The Octocat",
        ]

    def test_one_shot_commands(self, stdout_handler, capsys: pytest.CaptureFixture[str]) -> None:
        stdout_handler.add_system_path("/path/to/dir")
        stdout_handler.set_environment_variable("MY_NAME", "Mona The Octocat")
        stdout_handler.set_output_parameter("action_fruit", "strawberry")
        assert capsys.readouterr().out == (
            "::add-path::/path/to/dir\n"
            "::set-env name=MY_NAME::Mona The Octocat\n"
            "::set-output name=action_fruit::strawberry\n"
        )

    def test_stop_start_workflow_commands(
        self, stdout_handler, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with stdout_handler.stop_commands() as token:
            stdout_handler.log("warning", "Missing semicolon", file="s.py", function="f", line=2)
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            f"::stop-commands::{token}",
            "::warning file=s.py,line=2::Missing semicolon",
            f"::{token}::",
        ]

    def test_stderr_sink(self, capsys: pytest.CaptureFixture[str]) -> None:
        GitHubActionsLogHandler(StreamSink("stderr")).mask("x")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "::add-mask::x\n"

    def test_invalid_stream(self) -> None:
        with pytest.raises(ValueError):
            StreamSink("file")  # type: ignore[arg-type]


class TestBootstrapToStdout:

    def test_structlog_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(log_level="info"))
        log = structlog.get_logger()
        log.debug("Entered octocatAddition method")
        log.warning("Missing semicolon")
        log.error("Something went wrong")
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("::warning file=")
        assert lines[0].endswith("::Missing semicolon")
        assert lines[1].startswith("::error file=")
        assert lines[1].endswith("::Something went wrong")

    def test_output_setting_selects_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(Settings(log_level="warning", output="stderr"))
        structlog.get_logger().error("to stderr")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.endswith("::to stderr\n")
