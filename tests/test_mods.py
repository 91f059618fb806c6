import pytest

from arkconfig.mods import POPULAR_MODS, ModSettingsBuilder, find_mod


def test_catalogue():
    assert [m.id for m in POPULAR_MODS][-1] == "custom"
    assert find_mod("structures_plus").steam_id == "731604991"
    assert find_mod("missing") is None


def test_render_defaults():
    lines = ModSettingsBuilder().render().split("\n")
    assert lines[:4] == [
        "[/script/shootergame.shootergamemode]",
        "",
        "; === Mod Settings ===",
        "; --- Structures Plus (S+) ---",
    ]
    assert "StructurePickupTime=30" in lines
    assert "; --- Custom Mod Settings ---" not in lines
    assert "; --- Custom Settings ---" not in lines
    assert lines[-1] == ""


def test_update_reset_and_empty_values():
    builder = ModSettingsBuilder()
    builder.update("dino_storage", "DinoStorageCooldown", "")
    builder.update("dino_storage", "DinoStorageAllowWild", "True")
    text = builder.render()
    assert "DinoStorageCooldown" not in text
    assert "DinoStorageAllowWild=True" in text
    builder.reset("dino_storage")
    assert builder.get("dino_storage", "DinoStorageCooldown") == "0"
    with pytest.raises(KeyError):
        builder.update("nope", "A", "1")


def test_custom_settings():
    builder = ModSettingsBuilder()
    with pytest.raises(ValueError):
        builder.add_custom("  ", "1")
    builder.add_custom("MyKey", "5")
    builder.add_custom("Other", "6")
    assert builder.remove_custom(1) == ("Other", "6")
    lines = builder.render().split("\n")
    assert lines[-2:] == ["; --- Custom Settings ---", "MyKey=5"]


def test_search():
    assert [m.id for m in ModSettingsBuilder.search("spyglass")] == ["awesome_spyglass", "super_spyglass"]
    assert len(ModSettingsBuilder.search("")) == len(POPULAR_MODS)
