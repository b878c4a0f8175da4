import io
import sys

import pytest

from specforce.tui import theme
from specforce.tui.theme import is_tty, styled, terminal_width


class _FakeTerminal(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def plain_stdout(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setattr(sys, "stdout", io.StringIO())


def test_styled_without_terminal_is_plain(plain_stdout):
    assert styled("hello", theme.HEADER_STYLE) == "hello"


def test_styled_no_color_wins_over_force(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert styled("hello", theme.ERROR_STYLE) == "hello"


def test_styled_forced_colour_adds_escape_codes(plain_stdout, monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")
    result = styled("hello", theme.SUCCESS_STYLE)
    assert "hello" in result
    assert "\x1b[" in result
    assert len(result) > len("hello")


def test_styled_multiline_keeps_lines(plain_stdout, monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")
    result = styled("first\nsecond", theme.BODY_STYLE)
    lines = result.split("\n")
    assert len(lines) == 2
    assert "first" in lines[0]
    assert "second" in lines[1]


def test_styled_empty_text(plain_stdout, monkeypatch):
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert styled("", theme.BODY_STYLE) == ""


def test_terminal_detected_enables_colour(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setattr(sys, "stdout", _FakeTerminal())
    assert "\x1b[" in styled("x", theme.WARNING_STYLE)


def test_is_tty_false_for_string_buffer(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert is_tty() is False


def test_is_tty_true_for_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdout", _FakeTerminal())
    assert is_tty() is True


def test_is_tty_false_without_stdout(monkeypatch):
    monkeypatch.setattr(sys, "stdout", None)
    assert is_tty() is False


def test_terminal_width_default():
    assert terminal_width() == 80