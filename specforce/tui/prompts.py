"""Interactive prompts: agent selection, upgrade confirmation and progress."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from rich.cells import cell_len
from rich.style import Style

from specforce.tui.theme import (
    ACTIVE_ARROW_STYLE,
    ARROW_GLYPH,
    BODY_STYLE,
    BULLET_GLYPH,
    DIMMED_STYLE,
    EMPTY_BULLET_GLYPH,
    HEADER_STYLE,
    SELECTED_BULLET_STYLE,
    UNSELECTED_BULLET_STYLE,
    WARNING_STYLE,
    styled,
)
from specforce.tui.widgets import render_progress_bar

_CYAN = Style(color="#00FFFF")
_CYAN_BOLD = Style(color="#00FFFF", bold=True)
_MAGENTA_BOLD = Style(color="#FF00FF", bold=True)
_GREEN = Style(color="#00FF00")
_RED = Style(color="#FF0000")

_RAW_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\x1b": "esc",
    "\x03": "ctrl+c",
}

_SEQUENCE_KEYS = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
}


def _normalize_key(key: str) -> str:
    return _RAW_KEYS.get(key, key)


class _Named(Protocol):
    id: str
    name: str


@dataclass
class AgentOption:
    """An agent that can be chosen, and whether it is chosen or already installed."""

    id: str
    name: str
    selected: bool = False
    exists: bool = False


class AgentSelector:
    """State of the multi-select list of agents."""

    def __init__(self, available: Iterable[_Named], existing: Iterable[str]) -> None:
        existing_ids = set(existing)
        self.choices = [
            AgentOption(
                id=agent.id,
                name=agent.name,
                selected=agent.id in existing_ids,
                exists=agent.id in existing_ids,
            )
            for agent in available
        ]
        self.cursor = 0
        self.to_remove: set[int] = set()
        self.confirming = False
        self.quitting = False
        self.aborted = False

    def handle_key(self, key: str) -> bool:
        """Apply a key press; return True when the selection is over."""
        key = _normalize_key(key)
        if self.confirming:
            return self._handle_confirmation(key)
        return self._handle_navigation(key)

    def _handle_confirmation(self, key: str) -> bool:
        if key in ("y", "Y"):
            self.quitting = True
            return True
        if key in ("n", "N", "esc"):
            self.confirming = False
        return False

    def _handle_navigation(self, key: str) -> bool:
        if key in ("ctrl+c", "q"):
            self.quitting = True
            self.aborted = True
            return True
        if key in ("up", "k"):
            if self.cursor > 0:
                self.cursor -= 1
        elif key in ("down", "j"):
            if self.cursor < len(self.choices) - 1:
                self.cursor += 1
        elif key in ("enter", " "):
            self._toggle()
        elif key == "y":
            if self.to_remove:
                self.confirming = True
            else:
                self.quitting = True
                return True
        return False

    def _toggle(self) -> None:
        if not self.choices:
            return
        choice = self.choices[self.cursor]
        if choice.selected:
            choice.selected = False
            if choice.exists:
                self.to_remove.add(self.cursor)
        else:
            choice.selected = True
            self.to_remove.discard(self.cursor)

    def view(self) -> str:
        """Return the current screen."""
        if self.quitting:
            return ""
        if self.confirming:
            return self._view_confirmation()
        return self._view_selection()

    def _view_confirmation(self) -> str:
        names = " ".join(self.choices[index].name for index in sorted(self.to_remove))
        text = styled("⚠️ WARNING: You have unselected existing agents.\n", WARNING_STYLE)
        text += styled(
            f"The following agent directories will be decommissioned: [{names}]\n\n", BODY_STYLE
        )
        text += styled("Are you sure you want to proceed? (y/n)", BODY_STYLE)
        return text

    def _view_selection(self) -> str:
        lines = [styled("Select AI agents to initialize in this project:", HEADER_STYLE) + "\n\n"]
        for index, choice in enumerate(self.choices):
            cursor = styled(ARROW_GLYPH, ACTIVE_ARROW_STYLE) if index == self.cursor else " "
            if choice.selected:
                checked = styled(BULLET_GLYPH, SELECTED_BULLET_STYLE)
            else:
                checked = styled(EMPTY_BULLET_GLYPH, UNSELECTED_BULLET_STYLE)
            exists_info = styled(" (already exists)", DIMMED_STYLE) if choice.exists else ""
            lines.append(f"{cursor} {checked} {styled(choice.name, BODY_STYLE)}{exists_info}\n")
        lines.append(self._view_footer())
        return "".join(lines)

    def _view_footer(self) -> str:
        footer = (
            "\n"
            + styled("Press space/enter to toggle, 'y' to confirm, 'q' to quit.", DIMMED_STYLE)
            + "\n"
        )
        if self.to_remove:
            footer += (
                "\n"
                + styled("⚠️ Some existing agents will be removed upon confirmation.", WARNING_STYLE)
                + "\n"
            )
        return footer

    def selected_ids(self) -> list[str]:
        """Return the ids of the chosen agents in list order."""
        return [choice.id for choice in self.choices if choice.selected]


class UpgradePrompt:
    """A yes/no question asking whether to upgrade now."""

    def __init__(self, version: str) -> None:
        self.version = version
        self.choice = False
        self.quitting = False

    def handle_key(self, key: str) -> bool:
        """Apply a key press; return True when the question is answered."""
        key = _normalize_key(key)
        if key in ("y", "Y"):
            self.choice = True
            self.quitting = True
        elif key in ("n", "N", "esc", "enter"):
            self.choice = False
            self.quitting = True
        elif key == "ctrl+c":
            self.quitting = True
        return self.quitting

    def view(self) -> str:
        """Return the prompt line, or nothing once answered."""
        if self.quitting:
            return ""
        return (
            f"\n {styled('?', _CYAN_BOLD)} Do you want to upgrade to version "
            f"{styled(self.version, _MAGENTA_BOLD)} now? [y/N] "
        )


class UpgradeProgress:
    """Progress of a running upgrade."""

    def __init__(self, status: str = "Starting upgrade...") -> None:
        self.percent = 0
        self.status = status
        self.finished = False
        self.error: BaseException | None = None

    def update_progress(self, percent: int, status: str) -> None:
        """Record a new percentage and status line."""
        self.percent = percent
        self.status = status

    def finish(self, error: BaseException | None = None) -> None:
        """Mark the upgrade as over, failed when error is given."""
        self.finished = True
        self.error = error

    def handle_key(self, key: str) -> bool:
        """Return True when the key asks to quit."""
        return _normalize_key(key) == "ctrl+c"

    def view(self) -> str:
        """Return the progress display or the final outcome."""
        if self.finished:
            if self.error is not None:
                return f"\n  {styled('✘', _RED)} {self.error}\n"
            return f"\n  {styled('✔', _GREEN)} Upgrade complete!\n"
        bar = render_progress_bar(self.percent, 40)
        return f"\n  {styled('›', _CYAN)} {self.status}\n  {bar}\n"


def render_update_notification(current: str, latest: str) -> str:
    """Return a rounded box announcing that a newer version exists."""
    lines = [
        (
            " UPDATE AVAILABLE  A new version of Specforce is available!",
            styled(" UPDATE AVAILABLE ", _CYAN_BOLD) + " A new version of Specforce is available!",
        ),
        ("", ""),
        (f"  Current: {current}", f"  Current: {current}"),
        (f"  Latest:  {latest}", f"  Latest:  {styled(latest, _MAGENTA_BOLD)}"),
        ("", ""),
        (
            "  Run specforce install to upgrade.",
            "  Run " + styled("specforce install", _GREEN) + " to upgrade.",
        ),
    ]
    pad_x, pad_y = 2, 1
    inner = max(cell_len(plain) for plain, _ in lines) + 2 * pad_x
    edge = styled("│", _CYAN)
    blank = edge + " " * inner + edge
    rows = [styled("╭" + "─" * inner + "╮", _CYAN)]
    rows.extend([blank] * pad_y)
    for plain, text in lines:
        fill = inner - pad_x - cell_len(plain)
        rows.append(edge + " " * pad_x + text + " " * fill + edge)
    rows.extend([blank] * pad_y)
    rows.append(styled("╰" + "─" * inner + "╯", _CYAN))
    return "\n" + "\n".join(rows) + "\n"


class _Interactive(Protocol):
    def handle_key(self, key: str) -> bool: ...

    def view(self) -> str: ...


def _keystroke_name(keystroke) -> str:
    if keystroke.is_sequence:
        name = keystroke.name or ""
        return _SEQUENCE_KEYS.get(name, name)
    return _normalize_key(str(keystroke))


def _run_interactive(model: _Interactive) -> None:
    from blessed import Terminal

    term = Terminal()
    out = sys.stdout
    drawn = 0

    def draw() -> None:
        nonlocal drawn
        text = model.view()
        prefix = term.move_up(drawn) if drawn else ""
        out.write(prefix + "\r" + term.clear_eos + text)
        out.flush()
        drawn = text.count("\n")

    with term.cbreak(), term.hidden_cursor():
        draw()
        while True:
            try:
                key = _keystroke_name(term.inkey())
            except KeyboardInterrupt:
                key = "ctrl+c"
            done = model.handle_key(key)
            draw()
            if done:
                break


def select_agents(available: Iterable[_Named], existing: Iterable[str]) -> list[str]:
    """Let the user pick agents on the terminal and return their ids."""
    selector = AgentSelector(available, existing)
    _run_interactive(selector)
    if selector.aborted:
        raise RuntimeError("aborted")
    return selector.selected_ids()


def prompt_for_upgrade(version: str) -> bool:
    """Ask on the terminal whether to upgrade; return True when confirmed."""
    prompt = UpgradePrompt(version)
    _run_interactive(prompt)
    return prompt.choice