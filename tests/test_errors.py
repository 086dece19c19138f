"""Exception type tests."""

from __future__ import annotations

import pytest

from procexec.errors import ProcessError, ProcessExecutionError, TerminationReason


class TestProcessExecutionError:
    """ProcessExecutionError metadata."""

    def test_exit_status(self):
        error = ProcessExecutionError(
            executable="/usr/bin/tool",
            arguments=["--flag"],
            pid=1234,
            returncode=2,
            standard_output="partial",
            standard_error="boom",
        )

        assert error.termination_reason == TerminationReason.EXIT
        assert error.exit_status == 2
        assert error.signal is None
        assert error.arguments == ("--flag",)
        assert error.standard_output == "partial"
        assert error.standard_error == "boom"
        assert str(error) == "/usr/bin/tool exited with status 2"

    def test_signal(self):
        error = ProcessExecutionError(
            executable="/usr/bin/tool",
            arguments=(),
            pid=1234,
            returncode=-15,
        )

        assert error.termination_reason == TerminationReason.UNCAUGHT_SIGNAL
        assert error.signal == 15
        assert error.exit_status == 15
        assert error.returncode == -15
        assert str(error) == "/usr/bin/tool terminated by signal 15 (SIGTERM)"

    def test_unknown_signal_number(self):
        error = ProcessExecutionError("/usr/bin/tool", (), 1, -250)
        assert "signal 250 (unknown)" in str(error)

    def test_defaults_to_empty_output(self):
        error = ProcessExecutionError("/usr/bin/tool", (), 1, 1)
        assert error.standard_output == ""
        assert error.standard_error == ""

    def test_hierarchy(self):
        error = ProcessExecutionError("/usr/bin/tool", (), 1, 1)

        assert isinstance(error, ProcessError)
        with pytest.raises(ProcessError):
            raise error


class TestTerminationReason:
    """TerminationReason enum."""

    def test_values(self):
        assert TerminationReason.EXIT.value == "exit"
        assert TerminationReason.UNCAUGHT_SIGNAL.value == "uncaught_signal"
        assert TerminationReason("exit") is TerminationReason.EXIT
