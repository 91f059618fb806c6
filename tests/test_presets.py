import pytest

from arkconfig.errors import UnknownPresetError
from arkconfig.presets import CONFIG_PRESETS, Preset, PresetEngine


def test_builtin_names():
    assert PresetEngine().names() == [
        "Official Rates",
        "Slightly Boosted (2x)",
        "Boosted (5x)",
        "Highly Boosted (10x)",
        "PvP Focused",
        "PvE Relaxed",
    ]


def test_apply_overwrites_only_named_keys(session):
    engine = PresetEngine()
    written = engine.apply(session, "Boosted (5x)")
    assert written == 6
    assert session.get_setting("ServerSettings", "XPMultiplier") == "5.0"
    assert session.get_setting("ServerSettings", "MatingIntervalMultiplier") == "0.5"
    assert session.get_setting("ServerSettings", "SessionName") == "My Island"


def test_apply_is_idempotent(session):
    engine = PresetEngine()
    for preset in CONFIG_PRESETS:
        engine.apply(session, preset)
        snapshot = {s: dict(v) for s, v in session.working.items()}
        engine.apply(session, preset)
        assert session.working == snapshot


def test_sequence_last_wins(session):
    engine = PresetEngine()
    engine.apply_sequence(session, ["PvE Relaxed", "PvP Focused"])
    assert session.get_setting("ServerSettings", "ServerPVE") == "False"
    assert session.get_setting("ServerSettings", "XPMultiplier") == "3.0"
    # Only set by the first preset
    assert session.get_setting("ServerSettings", "EggHatchSpeedMultiplier") == "15.0"


def test_unknown_preset():
    with pytest.raises(UnknownPresetError):
        PresetEngine().get("Nope")
    assert PresetEngine().get("official rates").name == "Official Rates"


def test_custom_preset_list(session):
    engine = PresetEngine([Preset("Mine", "", {"Custom": {"A": "1"}})])
    assert engine.names() == ["Mine"]
    assert engine.apply(session, "Mine") == 1
    assert session.is_modified("Custom", "A")
