"""Checklists showing which artifacts of a document set exist."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rich.style import Style

from specforce.tui.theme import (
    BULLET_GLYPH,
    EMPTY_BULLET_GLYPH,
    ERROR_RED,
    SUCCESS_GREEN,
    TEXT_GREY,
    TEXT_WHITE,
    styled,
)

_PRESENT_STYLE = Style(color=SUCCESS_GREEN)
_MISSING_STYLE = Style(color=ERROR_RED)
_DESCRIPTION_STYLE = Style(color=TEXT_GREY)
_NAME_STYLE = Style(color=TEXT_WHITE, bold=True)


@dataclass
class ArtifactStatus:
    """One artifact of a set and whether it is present."""

    name: str
    description: str
    exists: bool


def render_artifact_checklist(artifacts: Iterable[ArtifactStatus]) -> str:
    """Return one line per artifact: a filled or empty bullet, name and description."""
    lines = []
    for artifact in artifacts:
        if artifact.exists:
            glyph = styled(BULLET_GLYPH, _PRESENT_STYLE)
        else:
            glyph = styled(EMPTY_BULLET_GLYPH, _MISSING_STYLE)
        name = styled(f"{artifact.name:<16}", _NAME_STYLE)
        description = styled(artifact.description, _DESCRIPTION_STYLE)
        lines.append(f" {glyph} {name} {description}\n")
    return "".join(lines)