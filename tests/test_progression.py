import pytest

from arkconfig.progression import (
    LEVEL_PRESETS,
    OFFICIAL_PLAYER_XP,
    CurveType,
    difficulty_for_level,
    engram_points,
    find_level_preset,
    format_number,
    generate_level_config,
    generate_progression,
    parse_level_entries,
    render_level_fragment,
    xp_for_level,
)


def test_linear_example():
    table = generate_progression(5, "linear", 1.0)
    assert table.xp_values() == [100, 200, 300, 400, 500]
    assert [e.total_xp for e in table] == [100, 300, 600, 1000, 1500]
    assert [e.level for e in table] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("curve", list(CurveType))
@pytest.mark.parametrize("multiplier", [0.5, 1.0, 3.0])
def test_totals_are_strictly_increasing_prefix_sums(curve, multiplier):
    table = generate_progression(60, curve, multiplier)
    totals = [e.total_xp for e in table]
    assert all(a < b for a, b in zip(totals, totals[1:]))
    running = 0
    for entry in table:
        running += entry.xp_for_level
        assert entry.total_xp == running


def test_curve_formulas():
    assert xp_for_level(3, CurveType.EXPONENTIAL) == int(3 ** 2.1 * 10)
    assert xp_for_level(7, CurveType.FLAT, 2.0) == 1000
    assert xp_for_level(5, CurveType.OFFICIAL) == OFFICIAL_PLAYER_XP[5]
    # First level past the known table grows by 12%
    assert xp_for_level(30, CurveType.OFFICIAL) == int(15000 * 1.12)


def test_empty_table():
    table = generate_progression(0, "linear")
    assert len(table) == 0
    assert table.max_total_xp == 0


def test_edit_propagates_forward_only():
    table = generate_progression(5, "linear")
    table.set_xp(1, 999)
    assert table[0].total_xp == 100
    assert [e.total_xp for e in table][1:] == [1099, 1399, 1799, 2299]


def test_negative_xp_rejected():
    table = generate_progression(3, "linear")
    with pytest.raises(ValueError):
        table.set_xp(0, -1)
    assert table.xp_values() == [100, 200, 300]


def test_delete_renumbers_and_recomputes():
    table = generate_progression(4, "linear")
    removed = table.delete(1)
    assert removed.xp_for_level == 200
    assert table.as_rows() == [(1, 100, 100), (2, 300, 400), (3, 400, 800)]


def test_append():
    table = generate_progression(2, "linear")
    entry = table.append()
    assert (entry.level, entry.xp_for_level, entry.total_xp) == (3, 220, 520)

    empty = generate_progression(0, "linear")
    first = empty.append()
    assert (first.level, first.xp_for_level, first.total_xp) == (1, 100, 100)


def test_engram_schedule():
    points = engram_points(150)
    assert points[0] == 8 and points[9] == 8
    assert points[10] == 12 and points[29] == 12
    assert points[30] == 16 and points[59] == 16
    assert points[60] == 24 and points[99] == 24
    assert points[100] == int(8 * 4 * 1.1 ** (1 / 50))
    assert len(points) == 150


def test_difficulty_for_level():
    assert difficulty_for_level(150) == (1.0, 5.0)
    assert difficulty_for_level(200) == (1.0, 6.67)
    assert difficulty_for_level(10) == (1.0, 1.0)


def test_level_config_sizes():
    preset = find_level_preset("Default (150)")
    cfg = generate_level_config(preset)
    assert len(cfg.player_levels) == 105
    assert len(cfg.dino_levels) == 150 + 88
    assert len(cfg.engram_points) == 105
    assert cfg.max_xp_player == cfg.player_levels[-1].total_xp


def test_render_fragment_layout():
    preset = LEVEL_PRESETS[1]
    cfg = generate_level_config(preset, "linear", "flat")
    lines = render_level_fragment(cfg, preset).split("\n")
    assert lines[:4] == [
        "[/script/shootergame.shootergamemode]",
        "",
        "; === Max Level Settings ===",
        f"OverrideMaxExperiencePointsPlayer={cfg.max_xp_player}",
    ]
    assert lines[7] == "LevelExperienceRampOverrides=(ExperiencePointsForLevel=100,Alpha=1.0)"
    assert lines.count("OverridePlayerLevelEngramPoints=8") == 10
    assert lines[-2:] == ["; DifficultyOffset=1", "; OverrideOfficialDifficulty=6.67"]
    assert not lines[-1].endswith("\n")


def test_parse_level_entries_reads_rendered_fragment():
    preset = find_level_preset("Default")
    cfg = generate_level_config(preset, "linear", "linear")
    parsed = parse_level_entries(render_level_fragment(cfg, preset))
    assert len(parsed) == len(cfg.player_levels) + len(cfg.dino_levels)
    assert parsed.xp_values()[:3] == [100, 200, 300]
    assert parse_level_entries("nothing here").as_rows() == []


def test_format_number():
    assert format_number(1.0) == "1"
    assert format_number(33.34) == "33.34"
    assert format_number(20.0) == "20"
