"""Throttled background update checks and the upgrade itself."""

from __future__ import annotations

import contextlib
import os
import sys
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from specforce.upgrade.installers import BinaryInstaller, NPMInstaller
from specforce.upgrade.providers import Provider
from specforce.upgrade.semver import is_newer
from specforce.upgrade.state import StateManager

CHECK_INTERVAL = timedelta(hours=24)
RELEASES_BASE_URL = "https://github.com"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_npm_install() -> bool:
    """Return True when the running program appears to come from npm."""
    program = sys.argv[0] if sys.argv else ""
    if not program:
        return False
    path = os.path.abspath(program)
    return "node" in path or "npm" in path


class UpgradeService:
    """Coordinates update checks and upgrades."""

    def __init__(
        self,
        state_manager: StateManager,
        provider: Provider,
        current_version: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.state_manager = state_manager
        self.provider = provider
        self.current_version = current_version
        self.clock = clock or _utc_now

    def check_for_update(self) -> threading.Thread | None:
        """Start a background check if the last one is 24 hours old.

        Failures are silent. Returns the started thread, or None when no
        check was started.
        """
        try:
            state = self.state_manager.load()
        except (OSError, ValueError):
            return None

        if state.last_check_at is not None and self.clock() - state.last_check_at < CHECK_INTERVAL:
            return None

        def run() -> None:
            try:
                latest = self.provider.get_latest_version()
            except Exception:
                return
            state.latest_version = latest
            state.last_check_at = self.clock()
            with contextlib.suppress(OSError):
                self.state_manager.save(state)

        thread = threading.Thread(target=run, name="specforce-update-check", daemon=True)
        thread.start()
        return thread

    def is_update_available(self) -> tuple[bool, str]:
        """Return (True, version) when a newer, not ignored version is known."""
        try:
            state = self.state_manager.load()
        except (OSError, ValueError):
            return False, ""
        latest = state.latest_version
        if not latest or latest == state.ignored_version:
            return False, ""
        if is_newer(self.current_version, latest):
            return True, latest
        return False, ""

    def perform_upgrade(self, version: str) -> None:
        """Upgrade through npm or by replacing the binary, whichever applies."""
        if is_npm_install():
            NPMInstaller().install()
            return

        installer = BinaryInstaller()
        tmp_path = installer.download_and_verify(version, RELEASES_BASE_URL)
        try:
            installer.replace(tmp_path)
        finally:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)