"""Tests for the StringIO console factory and status styles."""

import pytest

from svcsched.output.console import create_console, get_output, style_for_status


class TestConsole:
    def test_renders_to_buffer_without_ansi(self) -> None:
        console = create_console()
        console.print("[sched.ok]OK[/]")
        assert get_output(console) == "OK\n"

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40


class TestStyleForStatus:
    @pytest.mark.parametrize(
        ("status", "style"),
        [
            ("ok", "sched.status.ok"),
            ("scheduled", "sched.status.ok"),
            ("skipped", "sched.status.skipped"),
            ("running", "sched.status.running"),
            ("stopped", "sched.status.stopped"),
            ("invalid_time_format", "sched.status.failed"),
        ],
    )
    def test_mapping(self, status: str, style: str) -> None:
        assert style_for_status(status) == style
