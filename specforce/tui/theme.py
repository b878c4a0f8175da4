"""Colour palette, shared styles and terminal detection."""

from __future__ import annotations

import os
import sys

from rich.color import ColorSystem
from rich.style import Style

BRAND_MINT = "#00FA9A"
BRAND_CYAN = "#00FFFF"
BRAND_ICE = "#E0FFFF"
SUCCESS_GREEN = "#5FFF87"
WARNING_YELLOW = "#FFFFAF"
ERROR_RED = "#FF5F5F"
MUTED_GREY = "#444444"
TEXT_GREY = "#808080"
TEXT_WHITE = "#FFFFFF"
BLACK = "#000000"
FOOTER_BACKGROUND = "#111111"

FINISHED_GREEN = SUCCESS_GREEN
IN_PROGRESS_ORANGE = WARNING_YELLOW
MUTED_DARK_GREY = TEXT_GREY

ARROW_GLYPH = "›"
BULLET_GLYPH = "◉"
EMPTY_BULLET_GLYPH = "○"
SEPARATOR_GLYPH = "─"

HEADER_STYLE = Style(color=BRAND_MINT, bold=True)
SUBTITLE_STYLE = Style(color=BRAND_ICE)
BODY_STYLE = Style(color=TEXT_WHITE)
DIMMED_STYLE = Style(color=MUTED_DARK_GREY)
FINISHED_STYLE = Style(color=FINISHED_GREEN)
IN_PROGRESS_STYLE = Style(color=IN_PROGRESS_ORANGE)
MUTED_STYLE = Style(color=MUTED_DARK_GREY)
SUCCESS_STYLE = Style(color=SUCCESS_GREEN)
WARNING_STYLE = Style(color=WARNING_YELLOW)
ERROR_STYLE = Style(color=ERROR_RED)

SUCCESS_BADGE_STYLE = Style(color=BLACK, bgcolor=SUCCESS_GREEN, bold=True)
WARNING_BADGE_STYLE = Style(color=BLACK, bgcolor=WARNING_YELLOW, bold=True)
ERROR_BADGE_STYLE = Style(color=TEXT_WHITE, bgcolor=ERROR_RED, bold=True)
INFO_BADGE_STYLE = Style(color=TEXT_WHITE, bgcolor=MUTED_GREY)

BORDER_STYLE = Style(color=MUTED_GREY)
SUBTASK_STYLE = Style(color=TEXT_GREY)
CATEGORY_HEADER_STYLE = Style(color=BRAND_CYAN, bold=True, underline=True)
SELECTED_ITEM_STYLE = Style(color=BRAND_CYAN, bold=True)
UNSELECTED_ITEM_STYLE = Style(color=TEXT_WHITE)
SELECTION_MARKER_STYLE = Style(color=BRAND_CYAN, bold=True)

ACTIVE_ARROW_STYLE = Style(color=BRAND_CYAN, bold=True)
SELECTED_BULLET_STYLE = Style(color=BRAND_CYAN)
UNSELECTED_BULLET_STYLE = Style(color=MUTED_GREY)
SEPARATOR_STYLE = Style(color=MUTED_GREY)
FOOTER_STYLE = Style(color=TEXT_GREY, bgcolor=FOOTER_BACKGROUND)

_DEFAULT_WIDTH = 80


def is_tty() -> bool:
    """Return True when standard output is a terminal."""
    stream = sys.stdout
    try:
        return bool(stream is not None and stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def terminal_width() -> int:
    """Return the width used for full-width rendering."""
    return _DEFAULT_WIDTH


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return is_tty()


def styled(text: str, style: Style) -> str:
    """Return text wrapped in the style's escape codes, line by line.

    Colour is left out when NO_COLOR is set or output is not a terminal,
    unless FORCE_COLOR is set.
    """
    if not text or not _color_enabled():
        return text
    return "\n".join(
        style.render(line, color_system=ColorSystem.TRUECOLOR) if line else line
        for line in text.split("\n")
    )