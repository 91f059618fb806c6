import pytest

from arkconfig.errors import ConfigIOError, ConfigNotFoundError
from arkconfig.progression import find_level_preset, generate_level_config, render_level_fragment
from arkconfig.workspace import ConfigWorkspace


@pytest.fixture
def workspace(memory_storage):
    ws = ConfigWorkspace(memory_storage, "ASA", poll_interval=0.01, auto_sync=False)
    yield ws
    ws.close()


def test_open_loads_session_and_schema(workspace):
    session = workspace.open("1", "GameUserSettings.ini")
    assert session.file_id.file_name == "GameUserSettings"
    assert session.get_setting("ServerSettings", "SessionName") == "My Island"
    assert workspace.schema[0].title == "Server Identity & Access"
    assert workspace.watcher.last_known_mtime > 0


def test_open_unknown_file_raises(workspace):
    with pytest.raises(ConfigNotFoundError):
        workspace.open("2", "Game")


def test_file_without_schema_still_opens(workspace, memory_storage):
    memory_storage.write_external("1", "Engine", "[Core]\nA=1\n")
    workspace.open("1", "Engine")
    assert workspace.schema is None
    assert workspace.session.get_setting("Core", "A") == "1"


def test_switching_files_stops_previous_watcher(memory_storage):
    with ConfigWorkspace(memory_storage, "ASA", poll_interval=0.01) as ws:
        ws.open("1", "GameUserSettings")
        first = ws.watcher
        assert first.is_running
        ws.open("1", "Game")
        assert not first.is_running
        assert ws.watcher is not first
        assert ws.watcher.is_running
    assert ws.watcher is None


def test_save_commits_and_syncs_watcher(workspace, memory_storage):
    session = workspace.open("1", "GameUserSettings")
    session.update_setting("ServerSettings", "XPMultiplier", "2.0")
    mtime = workspace.save()
    assert "XPMultiplier=2.0" in memory_storage.files[("1", "GameUserSettings")]
    assert not session.has_changes()
    assert workspace.watcher.last_known_mtime == mtime
    assert workspace.watcher.poll_once() is False


def test_save_failure_keeps_working_copy(workspace, memory_storage):
    session = workspace.open("1", "GameUserSettings")
    session.update_setting("ServerSettings", "XPMultiplier", "2.0")
    memory_storage.fail_saves = True
    with pytest.raises(ConfigIOError):
        workspace.save()
    assert session.is_modified("ServerSettings", "XPMultiplier")
    assert session.get_setting("ServerSettings", "XPMultiplier") == "2.0"


def test_save_raw_buffer(workspace, memory_storage):
    session = workspace.open("1", "GameUserSettings")
    workspace.apply_fragment("[Extra]\nKey=1")
    workspace.save(use_raw=True)
    saved = memory_storage.files[("1", "GameUserSettings")]
    assert saved.endswith("\n\n[Extra]\nKey=1")
    assert session.get_original("Extra", "Key") == "1"
    assert not session.has_changes()


def test_apply_fragment_twice_appends_twice(workspace):
    session = workspace.open("1", "Game")
    fragment = "[/script/shootergame.shootergamemode]\nOverrideMaxExperiencePointsPlayer=10"
    workspace.apply_fragment(fragment)
    workspace.apply_fragment(fragment)
    assert session.raw_text.count(fragment) == 2
    assert session.get_setting("/script/shootergame.shootergamemode", "OverrideMaxExperiencePointsPlayer") == ""
    assert session.has_changes()
    assert len(workspace.composer.history) == 2
    workspace.save()
    assert session.get_setting("/script/shootergame.shootergamemode", "OverrideMaxExperiencePointsPlayer") == "10"
    assert not session.has_changes()


def test_edits_survive_fragment_and_raw_save(workspace, memory_storage):
    session = workspace.open("1", "GameUserSettings")
    session.update_setting("ServerSettings", "XPMultiplier", "7.0")
    workspace.apply_fragment("[Extra]\nKey=1")
    assert session.get_setting("ServerSettings", "XPMultiplier") == "7.0"
    workspace.save(use_raw=True)
    saved = memory_storage.files[("1", "GameUserSettings")]
    assert "XPMultiplier=7.0" in saved
    assert "XPMultiplier=1.0" not in saved
    assert saved.endswith("\n\n[Extra]\nKey=1")
    assert session.get_original("ServerSettings", "XPMultiplier") == "7.0"


def test_default_save_keeps_level_ramp_lines(workspace, memory_storage):
    session = workspace.open("1", "Game")
    preset = find_level_preset("Boosted")
    level_config = generate_level_config(preset)
    workspace.apply_fragment(render_level_fragment(level_config, preset))
    workspace.save()
    saved = memory_storage.files[("1", "Game")]
    expected = len(level_config.player_levels.entries) + len(level_config.dino_levels.entries)
    assert saved.count("LevelExperienceRampOverrides=") == expected
    assert saved.count("OverridePlayerLevelEngramPoints=") == len(level_config.engram_points)
    assert not session.has_pending_fragments


def test_dry_run_text_matches_save(workspace, memory_storage):
    session = workspace.open("1", "GameUserSettings")
    session.update_setting("ServerSettings", "XPMultiplier", "3.0")
    workspace.apply_fragment("[Extra]\nKey=1")
    preview = workspace.render_save()
    workspace.save()
    assert memory_storage.files[("1", "GameUserSettings")] == preview

def test_apply_preset_and_validate(workspace):
    session = workspace.open("1", "GameUserSettings")
    assert workspace.apply_preset("Official Rates") == 5
    session.update_setting("ServerSettings", "ServerPVE", "maybe")
    result = workspace.validate()
    assert result.has_errors
    assert [i.field for i in result.get_errors()] == ["ServerPVE"]


def test_reload_discards_edits(workspace):
    session = workspace.open("1", "GameUserSettings")
    session.update_setting("ServerSettings", "XPMultiplier", "8.0")
    workspace.reload()
    assert not session.has_changes()


def test_operations_require_open_file(workspace):
    with pytest.raises(RuntimeError):
        workspace.save()
