"""Creating the project skeleton and finding what is already set up."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from specforce.project.agents_md import Reporter, ensure_agents_md

SPECFORCE_DIR = ".specforce"
PROJECT_DIRS = (
    ".specforce/docs",
    ".specforce/specs",
    ".specforce/archive",
)


class ProjectAlreadyInitializedError(Exception):
    """The project already has a .specforce directory."""


@dataclass(frozen=True)
class AgentLocation:
    """An agent and the directory it keeps in a project."""

    id: str
    dir_name: str


def create_directories(root: str | os.PathLike, dirs: Iterable[str]) -> None:
    """Create each directory under root with an empty .gitkeep if it has none."""
    for directory in dirs:
        path = Path(root) / directory
        path.mkdir(mode=0o750, parents=True, exist_ok=True)
        gitkeep = path / ".gitkeep"
        if not gitkeep.exists():
            fd = os.open(gitkeep, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            os.close(fd)


def bootstrap_project(root: str | os.PathLike, reporter: Reporter | None = None) -> None:
    """Create the .specforce structure and AGENTS.md in root.

    Raises ProjectAlreadyInitializedError when .specforce already exists.
    """
    if os.path.exists(Path(root) / SPECFORCE_DIR):
        raise ProjectAlreadyInitializedError(
            "cannot initialize project: project already initialized"
        )

    if reporter is not None:
        reporter.start_spinner("Creating directories...")
    create_directories(root, PROJECT_DIRS)
    if reporter is not None:
        reporter.stop_spinner()
        reporter.success("Specforce directory structure initialized successfully.")

    ensure_agents_md(root, reporter)


def detect_existing_agents(
    root: str | os.PathLike, agents: Iterable[AgentLocation] | None
) -> list[str]:
    """Return the ids of agents whose directory exists under root."""
    if agents is None:
        return []
    return [agent.id for agent in agents if (Path(root) / agent.dir_name).is_dir()]


def is_initialized(root: str | os.PathLike) -> bool:
    """Return True when root holds a .specforce directory."""
    return (Path(root) / SPECFORCE_DIR).is_dir()