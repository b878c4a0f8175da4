"""Semantic version comparison for release tags."""

from __future__ import annotations

import re

_NUMBER = r"0|[1-9][0-9]*"
_IDENTS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_VERSION_RE = re.compile(
    rf"^v({_NUMBER})(?:\.({_NUMBER})(?:\.({_NUMBER})(?:-({_IDENTS}))?(?:\+{_IDENTS})?)?)?$"
)

_Parsed = tuple[int, int, int, tuple[str, ...]]


def normalize_version(version: str) -> str:
    """Trim whitespace and make sure a non-empty version starts with 'v'."""
    version = version.strip()
    if not version:
        return ""
    if not version.startswith("v"):
        return "v" + version
    return version


def _parse(version: str) -> _Parsed | None:
    match = _VERSION_RE.match(version)
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    idents = tuple(prerelease.split(".")) if prerelease else ()
    if any(len(ident) > 1 and ident.isdigit() and ident[0] == "0" for ident in idents):
        return None
    return int(major), int(minor or 0), int(patch or 0), idents


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    if a == b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for x, y in zip(a, b):
        if x == y:
            continue
        x_num, y_num = x.isdigit(), y.isdigit()
        if x_num and y_num:
            return _sign((len(x), x), (len(y), y))
        if x_num:
            return -1
        if y_num:
            return 1
        return _sign(x, y)
    return _sign(len(a), len(b))


def compare_versions(v1: str, v2: str) -> int:
    """Return -1, 0 or 1 as v1 is lower than, equal to or higher than v2.

    An invalid version is lower than any valid one; two invalid versions are equal.
    """
    p1 = _parse(normalize_version(v1))
    p2 = _parse(normalize_version(v2))
    if p1 is None or p2 is None:
        return _sign(p1 is not None, p2 is not None)
    core = _sign(p1[:3], p2[:3])
    if core:
        return core
    return _compare_prerelease(p1[3], p2[3])


def is_newer(current: str, latest: str) -> bool:
    """Return True when latest is a higher version than current."""
    return compare_versions(current, latest) == -1