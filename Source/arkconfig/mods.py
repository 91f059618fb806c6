"""Settings of popular server mods and the Game.ini fragment that configures them."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .progression import GAME_MODE_HEADER
from .schema import FieldType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModSetting:
    key: str
    label: str
    type: FieldType
    default_value: str
    description: str = ""
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None


@dataclass(frozen=True)
class ModConfig:
    id: str
    name: str
    description: str
    settings: Tuple[ModSetting, ...] = ()
    steam_id: Optional[str] = None

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.name.lower() or q in self.description.lower()


def _num(key, label, default, desc, min=None, max=None, step=None) -> ModSetting:
    return ModSetting(key, label, FieldType.NUMBER, default, desc, min, max, step)


def _bool(key, label, default, desc) -> ModSetting:
    return ModSetting(key, label, FieldType.BOOLEAN, default, desc)


POPULAR_MODS: List[ModConfig] = [
    ModConfig("structures_plus", "Structures Plus (S+)", "Advanced building mod with enhanced structures", (
        _num("StructurePickupTime", "Structure Pickup Time", "30",
             "Seconds allowed to pick up placed structures (0 = disabled)", 0, 3600),
        _bool("DisablePickupWhenDamaged", "Disable Pickup When Damaged", "True",
              "Prevent picking up damaged structures"),
        _bool("AllowIntegratedSPlusandVanilla", "Allow Integrated S+ and Vanilla", "True",
              "Allow both S+ and vanilla structure types"),
        _num("StackSizeMultiplier", "Stack Size Multiplier", "1", "Multiplier for item stack sizes", 1, 100),
    ), steam_id="731604991"),
    ModConfig("awesome_spyglass", "Awesome Spyglass", "Enhanced spyglass showing dino stats", (
        _num("AwesomeSpyglassRange", "Spyglass Range", "10000", "Maximum range for spyglass detection", 1000, 50000),
        _bool("ShowWildStats", "Show Wild Dino Stats", "True", "Display stats for wild dinosaurs"),
        _bool("ShowTamedStats", "Show Tamed Dino Stats", "True", "Display stats for tamed dinosaurs"),
    ), steam_id="1404697612"),
    ModConfig("super_spyglass", "Super Spyglass", "View dino levels, stats, and colors", (
        _bool("SuperSpyglassShowLevel", "Show Level", "True", "Display creature level"),
        _bool("SuperSpyglassShowColors", "Show Colors", "True", "Display creature color regions"),
    ), steam_id="793605978"),
    ModConfig("dino_storage", "Dino Storage v2", "Store dinos as soul balls", (
        _num("DinoStorageSoulTrapMaxLevel", "Max Trap Level", "450", "Maximum dino level that can be stored", 1, 1000),
        _bool("DinoStorageAllowWild", "Allow Wild Capture", "False", "Allow capturing wild dinosaurs"),
        _num("DinoStorageCooldown", "Release Cooldown", "0", "Cooldown in seconds after releasing a dino", 0, 3600),
    ), steam_id="1609138312"),
    ModConfig("kraken_better_dinos", "Kraken's Better Dinos", "Enhanced dino abilities and behaviors", (
        _num("KBDDinoHarvestMultiplier", "Dino Harvest Multiplier", "1.0", "Multiplier for dino harvesting",
             0.1, 10, 0.1),
        _num("KBDDamageMultiplier", "Dino Damage Multiplier", "1.0", "Multiplier for dino damage", 0.1, 10, 0.1),
    ), steam_id="1565015734"),
    ModConfig("stack_mod", "ARK Additions: Stacking Mod", "Configurable stack sizes for items", (
        _num("ConfigOverrideItemMaxQuantity", "Global Stack Multiplier", "1",
             "Global multiplier for all stack sizes", 1, 1000),
        _num("ResourceStackMultiplier", "Resource Stack Multiplier", "1",
             "Multiplier for resource stack sizes", 1, 1000),
    ), steam_id="1998020277"),
    ModConfig("hg_stacking", "HG Stacking Mod 10000-90", "Increased stack sizes with weight reduction", (
        _bool("HGStackingEnabled", "Stacking Enabled", "True", "Enable the stacking modifications"),
        _num("HGWeightMultiplier", "Weight Reduction", "0.1", "Weight multiplier for stacked items", 0.01, 1, 0.01),
    ), steam_id="849985737"),
    ModConfig("custom", "Custom Mod Settings", "Add your own custom mod settings"),
]


def find_mod(mod_id: str) -> Optional[ModConfig]:
    for mod in POPULAR_MODS:
        if mod.id == mod_id:
            return mod
    return None


@dataclass
class ModSettingsBuilder:
    """Collects mod values (seeded with every mod's defaults) and renders the fragment."""
    values: Dict[str, Dict[str, str]] = field(default_factory=dict)
    custom: List[Tuple[str, str]] = field(default_factory=list)

    def __post_init__(self):
        for mod in POPULAR_MODS:
            self.values.setdefault(mod.id, {s.key: s.default_value for s in mod.settings})

    def _mod(self, mod_id: str) -> ModConfig:
        mod = find_mod(mod_id)
        if mod is None:
            raise KeyError(f"Unknown mod: {mod_id}")
        return mod

    def update(self, mod_id: str, key: str, value: str) -> None:
        self._mod(mod_id)
        self.values.setdefault(mod_id, {})[key] = value

    def get(self, mod_id: str, key: str) -> str:
        return self.values.get(mod_id, {}).get(key, "")

    def reset(self, mod_id: str) -> None:
        mod = self._mod(mod_id)
        self.values[mod_id] = {s.key: s.default_value for s in mod.settings}
        logger.debug("Reset %s to defaults", mod.name)

    def add_custom(self, key: str, value: str) -> None:
        if not key.strip():
            raise ValueError("Setting key is required")
        self.custom.append((key, value))

    def remove_custom(self, index: int) -> Tuple[str, str]:
        return self.custom.pop(index)

    @staticmethod
    def search(query: str) -> List[ModConfig]:
        if not query:
            return list(POPULAR_MODS)
        return [mod for mod in POPULAR_MODS if mod.matches(query)]

    def render(self) -> str:
        lines = [GAME_MODE_HEADER, "", "; === Mod Settings ==="]
        for mod_id, settings in self.values.items():
            mod = find_mod(mod_id)
            if mod is None or not settings:
                continue
            lines.append(f"; --- {mod.name} ---")
            lines.extend(f"{key}={value}" for key, value in settings.items() if value != "")
            lines.append("")
        if self.custom:
            lines.append("; --- Custom Settings ---")
            lines.extend(f"{key}={value}" for key, value in self.custom)
        return "\n".join(lines)
