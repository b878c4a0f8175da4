"""Reusable terminal widgets: badges, bars, logo, boxes and prompts."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from rich.cells import cell_len
from rich.style import Style

from specforce.tui.theme import (
    ACTIVE_ARROW_STYLE,
    BODY_STYLE,
    BORDER_STYLE,
    BRAND_CYAN,
    DIMMED_STYLE,
    ERROR_BADGE_STYLE,
    ERROR_STYLE,
    FOOTER_STYLE,
    HEADER_STYLE,
    INFO_BADGE_STYLE,
    MUTED_GREY,
    SEPARATOR_GLYPH,
    SEPARATOR_STYLE,
    SUBTASK_STYLE,
    SUBTITLE_STYLE,
    SUCCESS_BADGE_STYLE,
    SUCCESS_GREEN,
    SUCCESS_STYLE,
    WARNING_BADGE_STYLE,
    is_tty,
    styled,
)

APP_VERSION = "v0.2.2"

_BRAILLE_LINES = (
    "    ⢠⣶⣶⡄     ",
    "  ⢠⣿⣿⣿⣿⡄    ",
    " ⢠⣿⣿⣿⣿⣿⣿⡄   ",
    " ⠻⣿⣿⣿⣿⣿⣿⠟   ",
    "   ⠻⣿⣿⣿⠟    ",
    "     ⠻⠟       ",
)

_GRADIENT_COLORS = ("#00FA9A", "#00FCBB", "#00FDEE", "#00FFFF", "#70FFFF", "#E0FFFF")

_SPINNER_FRAMES = ("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ ")

_BADGES = {
    "success": (SUCCESS_BADGE_STYLE, " SUCCESS "),
    "ok": (SUCCESS_BADGE_STYLE, " SUCCESS "),
    "warning": (WARNING_BADGE_STYLE, " WARNING "),
    "warn": (WARNING_BADGE_STYLE, " WARNING "),
    "error": (ERROR_BADGE_STYLE, "  ERROR  "),
    "fail": (ERROR_BADGE_STYLE, "  ERROR  "),
}
_INFO_BADGE = (INFO_BADGE_STYLE, "  INFO   ")

_DEFAULT_SEPARATOR_WIDTH = 80


@dataclass
class ArtifactDisplay:
    """An artifact shown in a listing."""

    id: str
    description: str


def render_separator(width: int) -> str:
    """Return a dimmed horizontal rule; non-positive widths fall back to 80."""
    if width <= 0:
        width = _DEFAULT_SEPARATOR_WIDTH
    return styled(SEPARATOR_GLYPH * width, SEPARATOR_STYLE)


def render_badge(status: str, message: str) -> str:
    """Return a boxed status label followed by the message."""
    style, prefix = _BADGES.get(status.lower(), _INFO_BADGE)
    badge = styled(f" {prefix} ", style)
    return f"\n {badge} {styled(message, BODY_STYLE)}\n"


def render_error_badge(message: str) -> str:
    """Return an error badge for the message."""
    return render_badge("error", message)


def render_progress_bar(percent: int, width: int) -> str:
    """Return a bar of filled and empty cells followed by the percentage."""
    percent = max(0, min(100, percent))
    filled_width = percent * width // 100
    empty_width = width - filled_width
    bar_color = SUCCESS_GREEN if percent == 100 else BRAND_CYAN
    filled = styled("█" * filled_width, Style(color=bar_color))
    empty = styled("░" * empty_width, Style(color=MUTED_GREY))
    return f"{filled}{empty} {percent}%"


def generate_logo(with_subtitle: bool) -> str:
    """Return the logo: a gradient emblem with the name and version beside it."""
    version = APP_VERSION if APP_VERSION.startswith("v") else "v" + APP_VERSION
    left = [
        (line, styled(line, Style(color=color, bold=True)))
        for line, color in zip(_BRAILLE_LINES, _GRADIENT_COLORS)
    ]
    right = [
        ("", ""),
        (
            "SPECFORCE " + version,
            styled("SPECFORCE ", Style(color="#FFFFFF", bold=True)) + styled(version, DIMMED_STYLE),
        ),
    ]
    if with_subtitle:
        for text in ("Spec-Driven Development (SDD)", "Ecosystem for AI-assisted development"):
            right.append((text, styled(text, DIMMED_STYLE)))

    left_width = max(cell_len(plain) for plain, _ in left)
    right_width = max(cell_len(plain) for plain, _ in right)
    rows = [" " * (left_width + right_width)]
    for index in range(max(len(left), len(right))):
        left_plain, left_text = left[index] if index < len(left) else ("", "")
        right_plain, right_text = right[index] if index < len(right) else ("", "")
        rows.append(
            left_text
            + " " * (left_width - cell_len(left_plain))
            + right_text
            + " " * (right_width - cell_len(right_plain))
        )
    return "\n".join(rows)


def _write_line(text: str) -> None:
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def print_logo() -> None:
    """Print the logo without the subtitle."""
    logo = generate_logo(False)
    _write_line(logo)


def print_branding() -> None:
    """Print the logo with the subtitle."""
    branding = generate_logo(True)
    _write_line(branding)


def print_footer(version: str) -> None:
    """Print a bar with the version and the working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = ""
    footer = f"Specforce {version} | Workspace: {cwd}"
    print("\n" + styled(f" {footer} ", FOOTER_STYLE))


def log_subtask(message: str) -> None:
    """Print an indented sub-task line with an arrow."""
    prefix = styled(f" {ACTIVE_ARROW_GLYPH_TEXT} ", ACTIVE_ARROW_STYLE)
    print("  " + prefix + styled(message, SUBTASK_STYLE))


ACTIVE_ARROW_GLYPH_TEXT = "›"


def _box(lines: list[tuple[str, str]], pad_y: int, pad_x: int) -> str:
    inner = max((cell_len(plain) for plain, _ in lines), default=0) + 2 * pad_x
    edge = styled("|", BORDER_STYLE)
    blank = edge + " " * inner + edge
    rows = [styled("+" + "-" * inner + "+", BORDER_STYLE)]
    rows.extend([blank] * pad_y)
    for plain, text in lines:
        fill = inner - 2 * pad_x - cell_len(plain)
        rows.append(edge + " " * pad_x + text + " " * (fill + pad_x) + edge)
    rows.extend([blank] * pad_y)
    rows.append(styled("+" + "-" * inner + "+", BORDER_STYLE))
    return "\n".join(["", *rows, ""])


def print_completion_box(title: str, message: str) -> None:
    """Print a bordered summary box with a title and a message."""
    lines = [(title, styled(title, SUCCESS_STYLE + Style(bold=True))), ("", "")]
    lines.extend((line, styled(line, BODY_STYLE)) for line in message.split("\n"))
    print("\n" + _box(lines, pad_y=1, pad_x=4))


def print_artifact_list(
    title: str, subtitle: str, artifacts: list[ArtifactDisplay], version: str
) -> None:
    """Print a titled list of artifacts with their descriptions."""
    tty = is_tty()
    if tty:
        print_branding()
    print("\n" + styled(title, HEADER_STYLE))
    print(styled(subtitle, SUBTITLE_STYLE))
    print()
    for artifact in artifacts:
        name = artifact.id + " " * max(0, 15 - cell_len(artifact.id))
        print(f"  {styled(name, HEADER_STYLE)} {styled(artifact.description, SUBTITLE_STYLE)}")
    print()
    if tty:
        print_footer(version)


def confirm(question: str) -> bool:
    """Ask a yes/no question on the terminal; only 'y' or 'yes' count as yes."""
    print(f"\n {styled('?', ACTIVE_ARROW_STYLE)} {styled(question, BODY_STYLE)} (y/N): ", end="", flush=True)
    line = sys.stdin.readline() if sys.stdin is not None else ""
    words = line.split()
    response = words[0].lower() if words else ""
    return response in ("y", "yes")


class NeonSpinner:
    """A labelled spinner that can finish as done or failed."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.done = False
        self.error: BaseException | None = None
        self._frame = 0

    def advance(self) -> None:
        """Move the animation to its next frame."""
        self._frame = (self._frame + 1) % len(_SPINNER_FRAMES)

    def view(self) -> str:
        """Return the current line for the spinner."""
        if self.done:
            return f"  {styled('✓', SUCCESS_STYLE)} {self.label}\n"
        if self.error is not None:
            return f"  {styled('✖', ERROR_STYLE)} {self.label}\n"
        frame = styled(_SPINNER_FRAMES[self._frame], Style(color=BRAND_CYAN))
        return f"  {frame} {self.label}\n"

    def set_done(self) -> None:
        """Mark the operation as finished successfully."""
        self.done = True

    def set_error(self, error: BaseException) -> None:
        """Mark the operation as failed."""
        self.error = error