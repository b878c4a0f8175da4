"""The managed AGENTS.md guide and the agent configuration that points to it."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

START_MARKER = "<!-- SPECFORCE_AGENTS_START -->"
END_MARKER = "<!-- SPECFORCE_AGENTS_END -->"
AGENTS_FILE = "AGENTS.md"
LINKED_AGENT_DIRS = (".agent", ".claude")
LINK_TARGET = "../../AGENTS.md"

_GEMINI_SETTINGS = """{
  "context": {
    "fileName": [
      "AGENTS.md",
      "GEMINI.md"
    ]
  }
}"""

_AGENTS_TEMPLATE = """<!-- SPECFORCE_AGENTS_START -->
# AI Agent Collaboration Guide

This project uses **Specforce** for Spec-Driven Development (SDD). Every AI agent working in this project MUST adhere to the following rules:

## 1. Spec-Driven Development (SDD) Protocol
You MUST operate exclusively through the Specforce workflow engines (commands/skills). They define your mindset and mandatory steps:

- **Discovery (`/discovery`):** Purely conversational and read-only mode for feature brainstorming or diagnostic investigation. Use this to explore ideas or research bugs before planning.
- **Planning (`/spec`):** Always activate this workflow when a new feature intent or structural change is detected. It governs requirements discovery, constitutional alignment, and task decomposition.
- **Governance (`/constitution`):** Use to ensure your proposals respect the project's architecture, security, and principles.
- **Execution (`/implement`):** Activate this engine to perform the deterministic execution cycle following the approved roadmap.
- **Archival (`/archive`):** Activate this workflow once implementation is verified to harvest lessons learned, update the Project Constitution, and clean up active specs.

### Proactive Mandate
Do NOT wait for explicit slash commands from the user. If the conversation context shifts to "planning" or "implementation," you MUST automatically invoke the corresponding workflow command/skill to proceed.

- **Specs First:** Never write implementation code until a fully approved Specification (requirements.md, design.md, tasks.md) exists.
- **Total Consistency:** If a change is required at any point (even mid-implementation), you MUST update ALL related artifacts. You are strictly forbidden from updating only tasks.md while leaving requirements.md or design.md inconsistent.
- **Atomic Execution:** Follow the exact sequence of the tasks.md roadmap. Mark tasks as [DONE] or [FINISHED] sequentially and ONLY after successful verification.

## 2. Project Constitution
Before proposing architectural changes or adding new patterns, you MUST review the relevant Constitution documents located in .specforce/docs/:
- principles.md: Core values, philosophy, and cultural/technical axioms.
- architecture.md: System boundaries, dependency direction, and persistence topology.
- ui-ux.md: Visual direction, interaction patterns, and aesthetic DNA.
- security.md: AuthZ, roles, permissions, and data protection rules.
- engineering.md: Coding standards, testing strategy, and refactoring guidelines.
- governance.md: Project lifecycle rules, ownership, and AI boundaries.
- memorial.md: Durable lessons learned and cross-session memory.

## 3. Custom Hooks Configuration
Specforce allows developers to gate state transitions (e.g., finishing a task) using custom hooks. You can configure these in the project root's config.yaml:

```yaml
# config.yaml example
hooks:
  on_task_finished:
    - "make lint"
    - "make test"
  on_phase_finished:
    - "go test ./src/internal/..."
  on_all_tasks_finished:
    - "go test ./..."
```
If a hook fails, the state transition will be blocked.

*Note: The content above is managed by Specforce. Do not edit inside these markers.*
<!-- SPECFORCE_AGENTS_END -->
"""


class Reporter(Protocol):
    """Receives progress messages and answers questions for the user."""

    def log(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def sub_task(self, message: str) -> None: ...

    def start_spinner(self, message: str) -> None: ...

    def stop_spinner(self) -> None: ...

    def confirm(self, question: str) -> bool: ...


def generate_agents_content() -> str:
    """Return the managed AGENTS.md block, markers included."""
    return _AGENTS_TEMPLATE


def merge_agents_content(existing: str, replacement: str) -> str:
    """Put replacement in place of the marked block of existing, or append it."""
    start = existing.find(START_MARKER)
    end = existing.find(END_MARKER)
    if start != -1 and end != -1 and end > start:
        return existing[:start] + replacement + existing[end + len(END_MARKER):]
    if not existing:
        return replacement
    if not existing.endswith("\n"):
        existing += "\n"
    return existing + replacement


def _write_private(path: Path, text: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def _read_if_present(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError:
        return ""


def ensure_platform_configs(root: str | os.PathLike) -> None:
    """Write the Gemini settings and link each agent's rules to AGENTS.md."""
    root_path = Path(root)
    gemini_dir = root_path / ".gemini"
    gemini_dir.mkdir(mode=0o750, parents=True, exist_ok=True)
    _write_private(gemini_dir / "settings.json", _GEMINI_SETTINGS)

    for agent_dir in LINKED_AGENT_DIRS:
        rules_dir = root_path / agent_dir / "rules"
        rules_dir.mkdir(mode=0o750, parents=True, exist_ok=True)
        link_path = rules_dir / AGENTS_FILE
        if os.path.lexists(link_path):
            os.remove(link_path)
        os.symlink(LINK_TARGET, link_path)


def ensure_agents_md(root: str | os.PathLike, reporter: Reporter | None = None) -> None:
    """Create or refresh AGENTS.md in root, keeping text outside the markers.

    Nothing is written when the file is already up to date.
    """
    root_path = Path(os.path.normpath(os.fspath(root)))
    path = root_path / AGENTS_FILE
    existing = _read_if_present(path)
    merged = merge_agents_content(existing, generate_agents_content())
    if merged == existing:
        return

    if reporter is not None:
        reporter.sub_task("Updating AGENTS.md...")

    _write_private(path, merged)
    ensure_platform_configs(root_path)