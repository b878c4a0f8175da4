"""Terminal implementation of the user-facing reporting interface."""

from __future__ import annotations

from specforce.tui.theme import BODY_STYLE, styled
from specforce.tui.widgets import NeonSpinner, confirm, log_subtask, render_badge


class TerminalUI:
    """Reports progress and asks questions on standard output and input."""

    def __init__(self) -> None:
        self.spinner: NeonSpinner | None = None

    def log(self, message: str) -> None:
        print(styled(message, BODY_STYLE))

    def warn(self, message: str) -> None:
        print(render_badge("warning", message), end="")

    def error(self, message: str) -> None:
        print(render_badge("error", message), end="")

    def success(self, message: str) -> None:
        print(render_badge("success", message), end="")

    def sub_task(self, message: str) -> None:
        log_subtask(message)

    def start_spinner(self, message: str) -> None:
        """Show a spinner line; an already running spinner keeps its label."""
        if self.spinner is None:
            self.spinner = NeonSpinner(message)
        print(self.spinner.view(), end="")

    def stop_spinner(self) -> None:
        self.spinner = None

    def confirm(self, question: str) -> bool:
        return confirm(question)