import io
import os
import sys

import pytest

from specforce.tui import widgets
from specforce.tui.widgets import (
    ArtifactDisplay,
    NeonSpinner,
    confirm,
    generate_logo,
    log_subtask,
    print_artifact_list,
    print_completion_box,
    print_footer,
    print_logo,
    render_badge,
    render_error_badge,
    render_progress_bar,
    render_separator,
)


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.mark.parametrize(
    "percent, width, contains",
    [
        (0, 10, "0%"),
        (50, 10, "50%"),
        (100, 10, "100%"),
        (-10, 10, "0%"),
        (110, 10, "100%"),
    ],
)
def test_render_progress_bar(percent, width, contains):
    assert contains in render_progress_bar(percent, width)


def test_progress_bar_full_and_empty():
    assert render_progress_bar(100, 10) == "█" * 10 + " 100%"
    assert render_progress_bar(0, 10) == "░" * 10 + " 0%"
    assert render_progress_bar(-10, 10) == render_progress_bar(0, 10)
    assert render_progress_bar(110, 10) == render_progress_bar(100, 10)


def test_progress_bar_half():
    bar = render_progress_bar(50, 10)
    assert bar.count("█") == 5
    assert bar.count("░") == 5


def test_render_separator_fallback_and_width():
    assert render_separator(0) == "─" * 80
    assert render_separator(-3) == "─" * 80
    assert render_separator(5) == "─" * 5


@pytest.mark.parametrize(
    "status, label",
    [
        ("success", "SUCCESS"),
        ("OK", "SUCCESS"),
        ("warning", "WARNING"),
        ("warn", "WARNING"),
        ("error", "ERROR"),
        ("fail", "ERROR"),
        ("something", "INFO"),
    ],
)
def test_render_badge_labels(status, label):
    result = render_badge(status, "the message")
    assert label in result
    assert "the message" in result
    assert result.startswith("\n ")
    assert result.endswith("\n")


def test_render_error_badge_matches_error_badge():
    assert render_error_badge("boom") == render_badge("error", "boom")


def test_generate_logo_with_subtitle():
    logo = generate_logo(True)
    assert "SPECFORCE" in logo
    assert widgets.APP_VERSION in logo
    assert "Spec-Driven Development (SDD)" in logo
    assert "Ecosystem for AI-assisted development" in logo
    lines = logo.split("\n")
    assert lines[0].strip() == ""
    assert len(lines) == 7


def test_generate_logo_without_subtitle():
    logo = generate_logo(False)
    assert "SPECFORCE" in logo
    assert "Spec-Driven Development" not in logo
    assert logo == generate_logo(False)


def test_generate_logo_adds_version_prefix(monkeypatch):
    monkeypatch.setattr(widgets, "APP_VERSION", "1.2.3")
    assert "v1.2.3" in generate_logo(False)


def test_print_logo(capsys):
    print_logo()
    assert "SPECFORCE" in capsys.readouterr().out


def test_print_footer(capsys, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    print_footer("v9.9.9")
    out = capsys.readouterr().out
    assert f"Specforce v9.9.9 | Workspace: {os.getcwd()}" in out


def test_log_subtask(capsys):
    log_subtask("Updating files")
    out = capsys.readouterr().out
    assert "›" in out
    assert "Updating files" in out
    assert out.startswith("  ")


def test_print_completion_box(capsys):
    print_completion_box("Done", "line one\nline two is longer")
    out = capsys.readouterr().out
    assert "Done" in out
    assert "line one" in out
    assert "line two is longer" in out
    box_lines = [line for line in out.split("\n") if line.startswith(("+", "|"))]
    assert len({len(line) for line in box_lines}) == 1
    assert box_lines[0].startswith("+-")


def test_print_artifact_list_not_tty(capsys):
    artifacts = [ArtifactDisplay("principles", "Core values"), ArtifactDisplay("security", "Auth rules")]
    print_artifact_list("Artifacts", "Available", artifacts, "v1.0.0")
    out = capsys.readouterr().out
    assert "Artifacts" in out
    assert "Available" in out
    assert "principles" in out and "Core values" in out
    assert "security" in out and "Auth rules" in out
    assert "Workspace" not in out
    assert "SPECFORCE" not in out


@pytest.mark.parametrize(
    "answer, expected",
    [("y\n", True), ("YES\n", True), (" yes \n", True), ("n\n", False), ("\n", False), ("", False)],
)
def test_confirm(monkeypatch, capsys, answer, expected):
    monkeypatch.setattr(sys, "stdin", io.StringIO(answer))
    assert confirm("Proceed?") is expected
    assert "Proceed?" in capsys.readouterr().out


def test_spinner_view_contains_label():
    spinner = NeonSpinner("Creating directories...")
    view = spinner.view()
    assert view.startswith("  ")
    assert view.endswith("Creating directories...\n")


def test_spinner_advance_cycles():
    spinner = NeonSpinner("work")
    first = spinner.view()
    spinner.advance()
    assert spinner.view() != first
    for _ in range(20):
        spinner.advance()
        if spinner.view() == first:
            break
    assert spinner.view() == first


def test_spinner_done_and_error():
    done = NeonSpinner("task")
    done.set_done()
    assert done.view() == "  ✓ task\n"

    failed = NeonSpinner("task")
    failed.set_error(RuntimeError("bad"))
    assert failed.view() == "  ✖ task\n"
    assert isinstance(failed.error, RuntimeError)