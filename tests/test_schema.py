from arkconfig.catalog import SHOOTER_GAME_MODE
from arkconfig.schema import (
    FieldType,
    GameVariant,
    SchemaRegistry,
    filter_schema,
    find_field,
    find_group,
    get_schema,
    iter_fields,
)


def test_lookup_by_variant_and_file():
    gus = get_schema(GameVariant.ASA, "GameUserSettings")
    assert gus[0].title == "Server Identity & Access"
    game = get_schema("ase", "Game.ini")
    assert game[0].title == "Core Multipliers"
    assert all(f.section == SHOOTER_GAME_MODE for f in game[0].fields)


def test_unknown_file_has_no_schema():
    assert get_schema("ASA", "Engine") is None
    assert SchemaRegistry({}).get_schema("ASA", "Game") is None


def test_asa_has_rcon_fields_ase_does_not():
    assert find_field(get_schema("ASA", "GameUserSettings"), "ServerSettings", "RCONEnabled") is not None
    assert find_field(get_schema("ASE", "GameUserSettings"), "ServerSettings", "RCONEnabled") is None


def test_field_metadata():
    field = find_field(get_schema("ASA", "GameUserSettings"), "ServerSettings", "XPMultiplier")
    assert field.type == FieldType.NUMBER
    assert field.default_value == "1.0"
    assert field.max == 100


def test_every_field_has_a_section():
    for variant in GameVariant:
        for name in ("GameUserSettings", "Game"):
            for field in iter_fields(get_schema(variant, name)):
                assert field.section and field.key and field.label


def test_filter_by_query_drops_empty_groups():
    schema = get_schema("ASA", "GameUserSettings")
    filtered = filter_schema(schema, "taming")
    assert filtered
    assert all(f.matches("taming") for g in filtered for f in g.fields)
    assert len(filtered) < len(schema)
    assert filter_schema(schema) is schema


def test_filter_by_predicate():
    schema = get_schema("ASA", "GameUserSettings")
    booleans = filter_schema(schema, predicate=lambda f: f.type == FieldType.BOOLEAN)
    assert all(f.type == FieldType.BOOLEAN for f in iter_fields(booleans))
    assert find_group(booleans, "gameplay rules") is not None


def test_registry_lists_files_per_variant():
    assert set(SchemaRegistry().files_for("ASE")) == {"GameUserSettings", "Game"}
