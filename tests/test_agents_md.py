import json
import os

from specforce.project.agents_md import (
    END_MARKER,
    START_MARKER,
    ensure_agents_md,
    ensure_platform_configs,
    generate_agents_content,
    merge_agents_content,
)


class RecordingReporter:
    def __init__(self):
        self.events = []

    def log(self, message):
        self.events.append(("log", message))

    def warn(self, message):
        self.events.append(("warn", message))

    def error(self, message):
        self.events.append(("error", message))

    def success(self, message):
        self.events.append(("success", message))

    def sub_task(self, message):
        self.events.append(("sub_task", message))

    def start_spinner(self, message):
        self.events.append(("start_spinner", message))

    def stop_spinner(self):
        self.events.append(("stop_spinner", None))

    def confirm(self, question):
        return True


def test_ensure_agents_md_creates_new_file(tmp_path):
    ensure_agents_md(tmp_path, None)
    content = (tmp_path / "AGENTS.md").read_text(encoding="utf-8")
    assert "<!-- SPECFORCE_AGENTS_START -->" in content
    assert content == generate_agents_content()


def test_ensure_agents_md_updates_existing_file(tmp_path):
    path = tmp_path / "AGENTS.md"
    path.write_text(
        "CUSTOM START\n<!-- SPECFORCE_AGENTS_START -->\nOLD\n<!-- SPECFORCE_AGENTS_END -->\nCUSTOM END",
        encoding="utf-8",
    )
    ensure_agents_md(tmp_path, None)
    content = path.read_text(encoding="utf-8")
    assert content.startswith("CUSTOM START")
    assert "# AI Agent Collaboration Guide" in content
    assert content.endswith("\nCUSTOM END")
    assert "\nOLD\n" not in content


def test_ensure_agents_md_reports_only_when_changed(tmp_path):
    reporter = RecordingReporter()
    ensure_agents_md(tmp_path, reporter)
    assert reporter.events == [("sub_task", "Updating AGENTS.md...")]
    ensure_agents_md(tmp_path, reporter)
    assert reporter.events == [("sub_task", "Updating AGENTS.md...")]


def test_unchanged_file_skips_platform_configs(tmp_path):
    (tmp_path / "AGENTS.md").write_text(generate_agents_content(), encoding="utf-8")
    ensure_agents_md(tmp_path, None)
    assert not (tmp_path / ".gemini").exists()


def test_ensure_platform_configs_via_agents_md(tmp_path):
    ensure_agents_md(tmp_path, None)

    data = (tmp_path / ".gemini" / "settings.json").read_text(encoding="utf-8")
    assert '"fileName": [' in data
    assert '"AGENTS.md"' in data
    assert json.loads(data) == {"context": {"fileName": ["AGENTS.md", "GEMINI.md"]}}

    for agent_dir in (".agent", ".claude"):
        link = tmp_path / agent_dir / "rules" / "AGENTS.md"
        assert os.path.islink(link)
        assert os.readlink(link) == "../../AGENTS.md"


def test_ensure_platform_configs_replaces_existing_file(tmp_path):
    rules = tmp_path / ".claude" / "rules"
    rules.mkdir(parents=True)
    (rules / "AGENTS.md").write_text("stale", encoding="utf-8")
    ensure_platform_configs(tmp_path)
    assert os.readlink(rules / "AGENTS.md") == "../../AGENTS.md"


def test_generate_agents_content():
    content = generate_agents_content()
    assert START_MARKER in content
    assert END_MARKER in content
    assert "# AI Agent Collaboration Guide" in content
    assert content.startswith(START_MARKER)
    assert content.endswith(END_MARKER + "\n")


def test_merge_empty_existing():
    assert merge_agents_content("", "NEW CONTENT") == "NEW CONTENT"


def test_merge_existing_without_markers():
    result = merge_agents_content("CUSTOM CONTENT", "NEW CONTENT")
    assert result.startswith("CUSTOM CONTENT")
    assert "NEW CONTENT" in result
    assert result == "CUSTOM CONTENT\nNEW CONTENT"


def test_merge_existing_with_trailing_newline_adds_none():
    assert merge_agents_content("CUSTOM\n", "NEW") == "CUSTOM\nNEW"


def test_merge_existing_with_markers():
    existing = (
        "CUSTOM START\n<!-- SPECFORCE_AGENTS_START -->\nOLD CONTENT\n"
        "<!-- SPECFORCE_AGENTS_END -->\nCUSTOM END"
    )
    assert merge_agents_content(existing, "NEW CONTENT") == "CUSTOM START\nNEW CONTENT\nCUSTOM END"


def test_merge_markers_in_wrong_order_appends():
    existing = "<!-- SPECFORCE_AGENTS_END -->\n<!-- SPECFORCE_AGENTS_START -->"
    assert merge_agents_content(existing, "NEW") == existing + "\nNEW"