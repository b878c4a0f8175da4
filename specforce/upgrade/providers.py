"""Sources that report the latest released version."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import requests

HTTP_TIMEOUT = 2.0
GITHUB_API_URL = "https://api.github.com"
NPM_REGISTRY_URL = "https://registry.npmjs.org"
RELEASE_REPOSITORY = "specforce-kit/specforce-kit"
NPM_PACKAGE = "@" + RELEASE_REPOSITORY


class ProviderError(Exception):
    """The latest version could not be fetched."""


def new_http_session() -> requests.Session:
    """Return the HTTP session used for version and release requests."""
    return requests.Session()


def fetch_json(session: requests.Session, url: str) -> Any:
    """GET url and return its decoded JSON body."""
    try:
        response = session.get(url, timeout=HTTP_TIMEOUT)
    except requests.RequestException as exc:
        raise ProviderError(str(exc)) from exc
    if response.status_code != 200:
        raise ProviderError(f"unexpected status code: {response.status_code}")
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(f"invalid JSON response: {exc}") from exc


def _string_field(data: Any, key: str) -> str:
    if not isinstance(data, dict):
        raise ProviderError("unexpected JSON response shape")
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ProviderError(f"field {key!r} is not a string")
    return value


class Provider(ABC):
    """Something that knows the newest available version."""

    @abstractmethod
    def get_latest_version(self) -> str:
        """Return the latest version string, such as 'v1.2.3'."""


class GitHubProvider(Provider):
    """Reads the latest release tag from the GitHub API."""

    def __init__(self, base_url: str = GITHUB_API_URL, session: requests.Session | None = None) -> None:
        self.base_url = base_url
        self.session = session or new_http_session()

    def get_latest_version(self) -> str:
        url = f"{self.base_url}/repos/{RELEASE_REPOSITORY}/releases/latest"
        return _string_field(fetch_json(self.session, url), "tag_name")


class NPMProvider(Provider):
    """Reads the latest published version from the npm registry."""

    def __init__(self, base_url: str = NPM_REGISTRY_URL, session: requests.Session | None = None) -> None:
        self.base_url = base_url
        self.session = session or new_http_session()

    def get_latest_version(self) -> str:
        url = f"{self.base_url}/{NPM_PACKAGE}/latest"
        return _string_field(fetch_json(self.session, url), "version")


class StaticProvider(Provider):
    """Returns a fixed version, or raises a fixed error."""

    def __init__(self, version: str = "", error: Exception | None = None) -> None:
        self.version = version
        self.error = error

    def get_latest_version(self) -> str:
        if self.error is not None:
            raise self.error
        return self.version