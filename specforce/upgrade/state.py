"""Persistent state of the automatic update check."""

from __future__ import annotations

import json
import os
import re
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

_ZERO_TIME = "0001-01-01T00:00:00Z"
_TIME_RE = re.compile(r"^(.*T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(.*)$")


@dataclass
class UpdateState:
    """What the last update check found, and which version the user silenced."""

    last_check_at: datetime | None = None
    latest_version: str = ""
    ignored_version: str = ""


def default_state_path() -> Path:
    """Return ~/.specforce/state.json."""
    return Path.home() / ".specforce" / "state.json"


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_time(text: str) -> datetime | None:
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    head, fraction, tail = match.groups()
    if fraction:
        head += "." + (fraction + "000000")[:6]
    moment = datetime.fromisoformat(head + tail)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if moment == datetime(1, 1, 1, tzinfo=timezone.utc):
        return None
    return moment


def _string_field(data: dict, key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


class StateManager:
    """Loads and saves the update state as JSON, writing atomically."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else default_state_path()
        self._lock = threading.Lock()

    def load(self) -> UpdateState:
        """Read the state; a missing file yields an empty state."""
        with self._lock:
            try:
                raw = self.path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return UpdateState()
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("state file must hold a JSON object")
        return UpdateState(
            last_check_at=_parse_time(_string_field(data, "last_check_at")),
            latest_version=_string_field(data, "latest_version"),
            ignored_version=_string_field(data, "ignored_version"),
        )

    def save(self, state: UpdateState) -> None:
        """Write the state to a temporary file and rename it into place."""
        payload = json.dumps(
            {
                "last_check_at": _format_time(state.last_check_at),
                "latest_version": state.latest_version,
                "ignored_version": state.ignored_version,
            },
            indent=2,
        )
        with self._lock:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)