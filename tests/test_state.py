import json
from datetime import datetime, timezone

import pytest

from specforce.upgrade.state import StateManager, UpdateState, default_state_path


def test_default_state_path_under_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    path = default_state_path()
    assert ".specforce" in str(path)
    assert path.name == "state.json"
    assert path.parent.parent == tmp_path


def test_manager_defaults_to_home_path(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert StateManager().path == tmp_path / ".specforce" / "state.json"


def test_load_missing_file_gives_empty_state(tmp_path):
    mgr = StateManager(tmp_path / "state.json")
    state = mgr.load()
    assert state == UpdateState()
    assert state.last_check_at is None


def test_save_and_load_round_trip(tmp_path):
    mgr = StateManager(tmp_path / "state.json")
    now = datetime.now(timezone.utc).replace(microsecond=0)
    state = mgr.load()
    state.last_check_at = now
    state.latest_version = "v1.0.0"
    state.ignored_version = "v0.9.0"
    mgr.save(state)

    loaded = mgr.load()
    assert loaded.last_check_at == now
    assert loaded.latest_version == "v1.0.0"
    assert loaded.ignored_version == "v0.9.0"


def test_save_creates_directory_and_no_temp_file(tmp_path):
    path = tmp_path / "nested" / "state.json"
    mgr = StateManager(path)
    mgr.save(UpdateState(latest_version="v2.0.0"))
    assert path.exists()
    assert not path.with_name("state.json.tmp").exists()


def test_saved_file_format(tmp_path):
    path = tmp_path / "state.json"
    moment = datetime(2023, 10, 27, 10, 0, 0, tzinfo=timezone.utc)
    StateManager(path).save(UpdateState(moment, "v1.2.3", ""))
    data = json.loads(path.read_text())
    assert data == {
        "last_check_at": "2023-10-27T10:00:00Z",
        "latest_version": "v1.2.3",
        "ignored_version": "",
    }


def test_zero_time_round_trips_as_none(tmp_path):
    path = tmp_path / "state.json"
    StateManager(path).save(UpdateState())
    assert json.loads(path.read_text())["last_check_at"] == "0001-01-01T00:00:00Z"
    assert StateManager(path).load().last_check_at is None


def test_load_nanosecond_timestamp(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"last_check_at": "2023-10-27T10:00:00.123456789+02:00", "latest_version": "v1.0.0"})
    )
    loaded = StateManager(path).load()
    assert loaded.last_check_at == datetime(2023, 10, 27, 8, 0, 0, 123456, tzinfo=timezone.utc)
    assert loaded.ignored_version == ""


def test_load_corrupt_file_raises(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        StateManager(path).load()