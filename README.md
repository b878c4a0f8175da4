# specforce

A library for Spec-Driven Development (SDD) projects that are worked on
together with AI coding agents. It has three parts:

- **`specforce.project`** — creates the `.specforce/` layout (`docs`,
  `specs`, `archive`), keeps a managed block in `AGENTS.md` up to date
  without touching your own text around it, writes the Gemini settings file,
  links the `.agent` and `.claude` rules directories to `AGENTS.md`, and
  detects which agent directories already exist.
- **`specforce.tui`** — terminal rendering: the colour theme, badges,
  progress bars, a spinner, the logo, artifact checklists, an agent
  multi-select, the upgrade prompt and progress view, an update notification
  box, and `TerminalUI`, a reporter built from them.
- **`specforce.upgrade`** — semantic version comparison, a persisted
  update-check state, release providers, binary and npm installers with
  SHA-256 checksum verification, and `UpgradeService`, which checks for a new
  release at most once every 24 hours.

## Requirements

Python 3.10 or newer, with `requests`, `rich` and `blessed`.

## Bootstrapping a project

```python
from specforce.project.bootstrap import (
    ProjectAlreadyInitializedError,
    bootstrap_project,
    is_initialized,
)

root = "path/to/project"
if not is_initialized(root):
    bootstrap_project(root, None)
```

`bootstrap_project` raises `ProjectAlreadyInitializedError` when
`.specforce` already exists. Each created directory gets an empty `.gitkeep`.
The second argument is a reporter: any object with `log`, `warn`, `error`,
`success`, `sub_task`, `start_spinner`, `stop_spinner` and `confirm` (the
`Reporter` protocol in `specforce.project.agents_md`), or `None`.
`specforce.tui.terminal_ui.TerminalUI` is the ready-made one.

`detect_existing_agents(root, agents)` takes `AgentLocation(id, dir_name)`
entries and returns the ids whose directory exists under `root`.

## The managed AGENTS.md block

```python
from specforce.project.agents_md import ensure_agents_md, merge_agents_content

ensure_agents_md("path/to/project", None)

merged = merge_agents_content(
    "My notes\n<!-- SPECFORCE_AGENTS_START -->\nold\n<!-- SPECFORCE_AGENTS_END -->\nMore notes",
    "NEW BLOCK",
)
assert merged == "My notes\nNEW BLOCK\nMore notes"
```

Text outside the `SPECFORCE_AGENTS_START` / `SPECFORCE_AGENTS_END` markers is
kept. Without markers the block is appended; without a file one is created.
When `AGENTS.md` changes, `ensure_agents_md` also writes
`.gemini/settings.json` and replaces `.agent/rules/AGENTS.md` and
`.claude/rules/AGENTS.md` with symlinks to `../../AGENTS.md`. When the file
is already up to date, nothing is written.

## Versions and updates

```python
from specforce.upgrade.semver import compare_versions, is_newer

compare_versions("1.0.0", "v1.0.1")          # -1
compare_versions("v1.1.0-alpha", "v1.1.0")   # -1
is_newer("v1.0.0", "v1.0.1")                 # True
```

A missing `v` prefix is added before comparing; an invalid version sorts
below any valid one.

`UpgradeService(state_manager, provider, current_version, clock)` combines:

- a `StateManager`, whose JSON file is `~/.specforce/state.json`
  (`default_state_path()`) unless another path is given;
- a provider: `GitHubProvider`, `NPMProvider`, or `StaticProvider` for a
  fixed version or error;
- the running version, and optionally a clock returning an aware `datetime`.

`check_for_update()` starts a background thread at most once per 24 hours
and returns it (or `None`); failures are silent. `is_update_available()`
returns `(True, version)` when a newer version is known and not the ignored
one. `perform_upgrade(version)` runs `npm install -g` when the program seems
to come from npm, and otherwise downloads the release binary, verifies it
against the release checksum file and swaps it in place of the running
program, rolling back if the swap fails.

## Terminal rendering

```python
from specforce.tui.widgets import render_badge, render_progress_bar

print(render_progress_bar(50, 20))
print(render_badge("success", "All artifacts present"))
```

Escape codes are emitted only when standard output is a terminal, unless
`FORCE_COLOR` is set; `NO_COLOR` turns them off. The interactive
`select_agents` and `prompt_for_upgrade` need a real terminal; their state
classes (`AgentSelector`, `UpgradePrompt`, `UpgradeProgress`) take key names
through `handle_key` and can be driven without one.

## What it does not do

There is no command-line program: the package installs no command, and
nothing here runs on its own. It does not scan specs or the constitution for
a live dashboard, does not install agent tool files from a kit, and does not
read project configuration; it offers the pieces listed above for a program
to build on.