"""Installing a new release, either as a native binary or through npm."""

from __future__ import annotations

import contextlib
import hashlib
import os
import platform
import subprocess
import sys
import tempfile
from collections.abc import Iterable
from typing import BinaryIO, Protocol

import requests

from specforce.upgrade.providers import HTTP_TIMEOUT, NPM_PACKAGE, RELEASE_REPOSITORY, new_http_session

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


class UpgradeError(Exception):
    """An upgrade step failed."""


def _os_name() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def asset_name() -> str:
    """Return the release asset name for this platform."""
    os_name = _os_name()
    machine = platform.machine().lower()
    name = f"specforce-kit_{os_name}_{_ARCH_NAMES.get(machine, machine)}"
    if os_name == "windows":
        name += ".exe"
    return name


def find_hash_in_checksums(lines: Iterable[str], asset: str) -> str:
    """Return the hash listed for asset in a checksum file."""
    for line in lines:
        parts = line.split()
        if len(parts) >= 2 and parts[1] == asset:
            return parts[0]
    raise UpgradeError(f"hash for {asset} not found in checksum file")


def verify_hash(path: str | os.PathLike, expected_hash: str) -> None:
    """Raise UpgradeError unless the file's SHA-256 equals expected_hash."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(65536), b""):
            digest.update(chunk)
    actual = digest.hexdigest()
    if actual != expected_hash:
        raise UpgradeError(f"checksum mismatch: expected {expected_hash}, got {actual}")


def move_file(src: str | os.PathLike, dst: str | os.PathLike) -> None:
    """Move a file, copying across filesystems when a rename is impossible."""
    try:
        os.replace(src, dst)
        return
    except OSError:
        pass
    with open(src, "rb") as source, open(dst, "wb") as target:
        for chunk in iter(lambda: source.read(65536), b""):
            target.write(chunk)
    with contextlib.suppress(OSError):
        os.remove(src)


class BinaryInstaller:
    """Downloads a release binary, checks it and swaps it into place."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or new_http_session()

    def download_and_verify(self, version: str, base_url: str) -> str:
        """Download the release binary to a temporary file and return its path."""
        asset = asset_name()
        checksum_name = f"specforce-kit_{version.removeprefix('v')}_checksums.txt"
        release_url = f"{base_url}/repos/{RELEASE_REPOSITORY}/releases/download/{version}"

        fd, tmp_path = tempfile.mkstemp(prefix="specforce-update-")
        try:
            with os.fdopen(fd, "wb") as out:
                self._download(f"{release_url}/{asset}", out)
            expected = self._expected_hash(f"{release_url}/{checksum_name}", asset)
            verify_hash(tmp_path, expected)
        except BaseException:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise
        return tmp_path

    def _download(self, url: str, out: BinaryIO) -> None:
        try:
            with self.session.get(url, stream=True, timeout=HTTP_TIMEOUT) as response:
                if response.status_code != 200:
                    raise UpgradeError(
                        f"failed to download binary: failed to download file (status {response.status_code})"
                    )
                for chunk in response.iter_content(chunk_size=65536):
                    out.write(chunk)
        except requests.RequestException as exc:
            raise UpgradeError(f"failed to download binary: {exc}") from exc

    def _expected_hash(self, url: str, asset: str) -> str:
        try:
            response = self.session.get(url, timeout=HTTP_TIMEOUT)
        except requests.RequestException as exc:
            raise UpgradeError(f"failed to download checksum: {exc}") from exc
        if response.status_code != 200:
            raise UpgradeError(f"checksum file not found (status {response.status_code})")
        return find_hash_in_checksums(response.text.splitlines(), asset)

    def replace(self, new_path: str | os.PathLike) -> None:
        """Replace the running program's file with the one at new_path."""
        program = sys.argv[0] if sys.argv else ""
        if not program:
            raise UpgradeError("failed to get executable path")
        self.replace_at(new_path, os.path.abspath(program))

    def replace_at(self, new_path: str | os.PathLike, target_path: str | os.PathLike) -> None:
        """Replace target_path with new_path, restoring the original on failure."""
        target = os.fspath(target_path)
        backup = target + ".old"
        try:
            os.rename(target, backup)
        except OSError as exc:
            raise UpgradeError(f"failed to move current binary to backup: {exc}") from exc

        try:
            move_file(new_path, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                os.rename(backup, target)
            raise UpgradeError(f"failed to move new binary to target: {exc}") from exc

        with contextlib.suppress(OSError):
            os.remove(backup)
        os.chmod(target, 0o755)


class CommandExecutor(Protocol):
    def run(self, name: str, *args: str) -> None: ...


class SubprocessExecutor:
    """Runs a command and raises if it fails."""

    def run(self, name: str, *args: str) -> None:
        subprocess.run([name, *args], check=True)


class NPMInstaller:
    """Upgrades by reinstalling the global npm package."""

    def __init__(self, executor: CommandExecutor | None = None) -> None:
        self.executor = executor or SubprocessExecutor()

    def install(self) -> None:
        self.executor.run("npm", "install", "-g", NPM_PACKAGE)