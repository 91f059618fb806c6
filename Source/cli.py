import argparse
import sys
import time
from typing import Optional

from arkconfig import ConfigWorkspace, LocalConfigStorage
from arkconfig import config
from arkconfig.errors import ArkConfigError
from arkconfig.logging_utils import crash_hint, install_excepthook, log_environment, log_exception_context, setup_logging
from arkconfig.mods import ModSettingsBuilder
from arkconfig.presets import PresetEngine
from arkconfig.progression import (
    LEVEL_PRESETS,
    CurveType,
    custom_level_preset,
    find_level_preset,
    generate_level_config,
    render_level_fragment,
)
from arkconfig.schema import filter_schema, find_group
from arkconfig.servers import ServerRegistry


def _open(args, auto_sync: bool = False) -> ConfigWorkspace:
    registry = ServerRegistry(args.registry)
    entry = registry.get(args.server)
    ws = ConfigWorkspace(LocalConfigStorage(registry), entry.game_variant, auto_sync=auto_sync)
    ws.open(entry.server_id, args.file)
    return ws


def _split_key(path: str):
    # "ServerSettings.XPMultiplier" or "/Script/ShooterGame.ShooterGameMode:Key"
    sep = ":" if ":" in path else "."
    section, _, key = path.rpartition(sep)
    if not section or not key:
        raise ValueError(f"Expected SECTION.KEY or SECTION:KEY, got {path!r}")
    return section, key


def _save(ws: ConfigWorkspace, dry_run: bool) -> None:
    if dry_run:
        print(ws.render_save())
        return
    ws.save()
    print(f"[OK] Saved {ws.file_id}")


def cmd_servers(args) -> int:
    registry = ServerRegistry(args.registry)
    if args.action in ("add", "remove") and not args.id:
        print(f"[ERROR] --id is required to {args.action} a server")
        return 2
    if args.action == "add":
        if not args.path:
            print("[ERROR] --path is required to add a server")
            return 2
        entry = registry.add(args.id, args.path, args.variant, args.name or "")
        print(f"[OK] Registered {entry.server_id} ({entry.variant}) -> {entry.config_dir()}")
        return 0
    if args.action == "remove":
        registry.remove(args.id)
        print(f"[OK] Removed {args.id}")
        return 0
    servers = registry.list()
    if not servers:
        print("No servers registered.")
    for entry in servers:
        label = f" {entry.name}" if entry.name else ""
        print(f"  {entry.server_id}{label} [{entry.variant}] {entry.install_path}")
    return 0


def cmd_show(args) -> int:
    with _open(args) as ws:
        session = ws.session
        schema = ws.schema
        if args.raw or schema is None:
            print(session.raw_text)
            return 0
        if args.search or args.modified:
            schema = filter_schema(schema, args.search or "",
                                   (lambda f: session.is_modified(f.section, f.key)) if args.modified else None)
        for group in schema:
            print(f"[{group.title}]")
            for f in group.fields:
                value = session.get_setting(f.section, f.key)
                shown = value if value != "" else f"(default {f.default_value})" if f.default_value else "(unset)"
                print(f"  {f.key}: {shown}")
    return 0


def cmd_get(args) -> int:
    section, key = _split_key(args.key)
    with _open(args) as ws:
        print(ws.session.get_setting(section, key))
    return 0


def cmd_set(args) -> int:
    section, key = _split_key(args.key)
    with _open(args) as ws:
        ws.session.update_setting(section, key, args.value)
        _save(ws, args.dry_run)
    return 0


def cmd_presets(args) -> int:
    for preset in PresetEngine().presets():
        print(f"  {preset.name}: {preset.description} ({preset.key_count} keys)")
    return 0


def cmd_preset(args) -> int:
    with _open(args) as ws:
        written = ws.presets.apply_sequence(ws.session, args.names)
        print(f"[INFO] Wrote {written} key(s)")
        _save(ws, args.dry_run)
    return 0


def cmd_reset_group(args) -> int:
    with _open(args) as ws:
        group = find_group(ws.schema, args.group)
        if group is None:
            print(f"[ERROR] No group named {args.group!r}")
            return 2
        written = ws.session.reset_group(group)
        print(f"[INFO] Reset {written} field(s) in {group.title}")
        _save(ws, args.dry_run)
    return 0


def cmd_validate(args) -> int:
    with _open(args) as ws:
        result = ws.validate()
    if not result.issues:
        print("[OK] No issues found")
    for issue in result.issues:
        print(f"[{issue.severity.value.upper()}] {issue.path}: {issue.message} (got {issue.actual})")
    return 1 if result.has_errors else 0


def cmd_levels(args) -> int:
    if args.list:
        for p in LEVEL_PRESETS:
            print(f"  {p.name}: wild {p.max_wild_level}, tamed +{p.max_tamed_levels}, player {p.max_player_level}")
        return 0
    if args.preset:
        preset = find_level_preset(args.preset)
        if preset is None:
            print(f"[ERROR] Unknown level preset: {args.preset}")
            return 2
    else:
        preset = custom_level_preset(args.player_level, args.wild_level, args.tamed_levels)
    level_config = generate_level_config(preset, args.player_curve, args.dino_curve, args.multiplier)
    fragment = render_level_fragment(level_config, preset)
    if args.server is None:
        print(fragment)
        return 0
    with _open(args) as ws:
        ws.apply_fragment(fragment)
        _save(ws, args.dry_run)
    return 0


def cmd_mods(args) -> int:
    builder = ModSettingsBuilder()
    if args.search is not None:
        for mod in builder.search(args.search):
            steam = f" (workshop {mod.steam_id})" if mod.steam_id else ""
            print(f"  {mod.id}: {mod.name}{steam}")
        return 0
    for item in args.set or []:
        target, _, value = item.partition("=")
        mod_id, _, key = target.partition(".")
        builder.update(mod_id, key, value)
    for item in args.custom or []:
        key, _, value = item.partition("=")
        builder.add_custom(key, value)
    fragment = builder.render()
    if args.server is None:
        print(fragment)
        return 0
    with _open(args) as ws:
        ws.apply_fragment(fragment)
        _save(ws, args.dry_run)
    return 0


def cmd_watch(args) -> int:
    interval: Optional[float] = args.interval
    with _open(args) as ws:
        ws.watcher.interval = config.POLL_INTERVAL if interval is None else interval
        ws.watcher.start()
        print(f"[INFO] Watching {ws.file_id}; Ctrl+C to stop")
        seen = 0
        try:
            while args.duration is None or args.duration > 0:
                time.sleep(0.2)
                if ws.watcher.reload_count != seen:
                    seen = ws.watcher.reload_count
                    print(f"[INFO] Reloaded {ws.file_id} ({seen})")
                if args.duration is not None:
                    args.duration -= 0.2
        except KeyboardInterrupt:
            print("Bye!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arkconfig", description="ARK server config editor")
    parser.add_argument("--registry", help="Server registry JSON (default: %(default)s)",
                        default=config.SERVER_REGISTRY_PATH)
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--diagnostics", action="store_true", help="Log environment details at startup")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def with_file(p, required=True):
        p.add_argument("--server", "-s", required=required, help="Registered server id")
        p.add_argument("--file", "-f", default="GameUserSettings", help="GameUserSettings or Game")
        return p

    p = sub.add_parser("servers", help="List or register servers")
    p.add_argument("action", nargs="?", choices=("list", "add", "remove"), default="list")
    p.add_argument("--id")
    p.add_argument("--path")
    p.add_argument("--variant", choices=("ASE", "ASA"), default=None)
    p.add_argument("--name")
    p.set_defaults(func=cmd_servers)

    p = with_file(sub.add_parser("show", help="Print settings grouped by schema"))
    p.add_argument("--raw", action="store_true")
    p.add_argument("--search")
    p.add_argument("--modified", action="store_true")
    p.set_defaults(func=cmd_show)

    p = with_file(sub.add_parser("get", help="Print one value"))
    p.add_argument("key", help="SECTION.KEY")
    p.set_defaults(func=cmd_get)

    p = with_file(sub.add_parser("set", help="Change one value and save"))
    p.add_argument("key", help="SECTION.KEY")
    p.add_argument("value")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_set)

    p = sub.add_parser("presets", help="List rate presets")
    p.set_defaults(func=cmd_presets)

    p = with_file(sub.add_parser("preset", help="Apply one or more presets in order and save"))
    p.add_argument("names", nargs="+")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_preset)

    p = with_file(sub.add_parser("reset-group", help="Reset a schema group to its defaults"))
    p.add_argument("group")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_reset_group)

    p = with_file(sub.add_parser("validate", help="Check values against the schema"))
    p.set_defaults(func=cmd_validate)

    curves = [c.value for c in CurveType]
    p = with_file(sub.add_parser("levels", help="Generate level progression"), required=False)
    p.set_defaults(file="Game")
    p.add_argument("--list", action="store_true", help="List level presets")
    p.add_argument("--preset", help="Level preset name, e.g. 'Boosted (200)' or 'Boosted'")
    p.add_argument("--player-level", type=int, default=105)
    p.add_argument("--wild-level", type=int, default=150)
    p.add_argument("--tamed-levels", type=int, default=88)
    p.add_argument("--player-curve", choices=curves, default="official")
    p.add_argument("--dino-curve", choices=curves, default="official")
    p.add_argument("--multiplier", type=float, default=1.0)
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_levels)

    p = with_file(sub.add_parser("mods", help="Render a mod settings fragment"), required=False)
    p.set_defaults(file="Game")
    p.add_argument("--dry-run", action="store_true")
    p.add_argument("--search", help="List mods matching a query")
    p.add_argument("--set", action="append", metavar="MOD.KEY=VALUE")
    p.add_argument("--custom", action="append", metavar="KEY=VALUE")
    p.set_defaults(func=cmd_mods)

    p = with_file(sub.add_parser("watch", help="Follow external changes to a config file"))
    p.add_argument("--interval", type=float)
    p.add_argument("--duration", type=float, help="Stop after this many seconds")
    p.set_defaults(func=cmd_watch)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_level)
    install_excepthook(logger)
    if args.diagnostics:
        log_environment(logger)
    try:
        return args.func(args)
    except (ArkConfigError, ValueError, KeyError) as e:
        print(f"[ERROR] {e}")
        return 1
    except Exception:
        log_exception_context(f"Command {args.cmd} failed", logger)
        print(crash_hint())
        return 1


if __name__ == "__main__":
    sys.exit(main())
