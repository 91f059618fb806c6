"""
Level progression tables for Game.ini.

Generates per-level experience requirements for players and dinos from a
handful of curve shapes, keeps cumulative totals consistent while a table is
edited, and renders the ``LevelExperienceRampOverrides`` fragment that goes
under the game mode section.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

GAME_MODE_HEADER = "[/script/shootergame.shootergamemode]"

# Per-level XP of the official player curve for levels 0..29
OFFICIAL_PLAYER_XP = [
    0, 5, 20, 40, 70, 120, 190, 270, 380, 530,
    700, 900, 1150, 1450, 1800, 2200, 2650, 3150, 3700, 4350,
    5050, 5800, 6600, 7500, 8500, 9600, 10800, 12100, 13500, 15000,
]
OFFICIAL_GROWTH = 1.12

_RAMP_RE = re.compile(r"LevelExperienceRampOverrides=\(ExperiencePointsForLevel=(\d+)")


class CurveType(Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    FLAT = "flat"
    OFFICIAL = "official"

    @classmethod
    def coerce(cls, value: Union["CurveType", str]) -> "CurveType":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


def xp_for_level(level: int, curve: Union[CurveType, str] = CurveType.OFFICIAL, multiplier: float = 1.0) -> int:
    """XP needed to go from ``level - 1`` to ``level`` on the given curve."""
    curve = CurveType.coerce(curve)
    if curve == CurveType.LINEAR:
        return math.floor(level * 100 * multiplier)
    if curve == CurveType.EXPONENTIAL:
        return math.floor(level ** 2.1 * 10 * multiplier)
    if curve == CurveType.FLAT:
        return math.floor(500 * multiplier)
    if level < len(OFFICIAL_PLAYER_XP):
        return math.floor(OFFICIAL_PLAYER_XP[level] * multiplier)
    # Beyond the known table grow geometrically from its last value
    extra = level - len(OFFICIAL_PLAYER_XP) + 1
    return math.floor(OFFICIAL_PLAYER_XP[-1] * OFFICIAL_GROWTH ** extra * multiplier)


@dataclass
class ProgressionEntry:
    level: int
    xp_for_level: int
    total_xp: int


class ProgressionTable:
    """Ordered list of progression entries with cumulative totals.

    Invariants after every operation: levels are ``1..n`` and each entry's
    ``total_xp`` is the previous total plus its own ``xp_for_level``.
    """

    def __init__(self, entries: Optional[List[ProgressionEntry]] = None):
        self.entries: List[ProgressionEntry] = list(entries or [])

    @classmethod
    def from_xp(cls, xp_values: List[int]) -> "ProgressionTable":
        table = cls([ProgressionEntry(0, int(xp), 0) for xp in xp_values])
        table.recompute()
        return table

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ProgressionEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ProgressionEntry:
        return self.entries[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProgressionTable):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"ProgressionTable({len(self.entries)} levels, max_total_xp={self.max_total_xp})"

    @property
    def max_total_xp(self) -> int:
        return self.entries[-1].total_xp if self.entries else 0

    def xp_values(self) -> List[int]:
        return [e.xp_for_level for e in self.entries]

    def as_rows(self) -> List[Tuple[int, int, int]]:
        return [(e.level, e.xp_for_level, e.total_xp) for e in self.entries]

    def recompute(self) -> None:
        """Renumber levels from 1 and rebuild every cumulative total."""
        total = 0
        for i, entry in enumerate(self.entries):
            total += entry.xp_for_level
            entry.level = i + 1
            entry.total_xp = total

    def set_xp(self, index: int, xp: int) -> None:
        """Change one level's XP; totals from ``index`` onwards follow."""
        if xp < 0:
            raise ValueError(f"XP must be non-negative, got {xp}")
        entry = self.entries[index]
        before = self.entries[index - 1].total_xp if index > 0 else 0
        entry.xp_for_level = int(xp)
        entry.total_xp = before + entry.xp_for_level
        for i in range(index + 1, len(self.entries)):
            self.entries[i].total_xp = self.entries[i - 1].total_xp + self.entries[i].xp_for_level

    def delete(self, index: int) -> ProgressionEntry:
        removed = self.entries.pop(index)
        self.recompute()
        return removed

    def append(self) -> ProgressionEntry:
        """Add one level whose XP is 10% above the current last level (100 to start)."""
        last = self.entries[-1] if self.entries else ProgressionEntry(0, 0, 0)
        xp = math.floor(last.xp_for_level * 1.1) or 100
        entry = ProgressionEntry(last.level + 1, xp, last.total_xp + xp)
        self.entries.append(entry)
        return entry


def generate_progression(max_level: int, curve: Union[CurveType, str] = CurveType.OFFICIAL,
                         multiplier: float = 1.0) -> ProgressionTable:
    """Build levels ``1..max_level``; an empty table when ``max_level`` < 1."""
    return ProgressionTable.from_xp([xp_for_level(level, curve, multiplier) for level in range(1, max_level + 1)])


def engram_points(max_level: int, base: int = 8, growth: float = 1.1) -> List[int]:
    """Engram points awarded at each level, in level order."""
    points: List[int] = []
    for level in range(1, max_level + 1):
        if level <= 10:
            points.append(base)
        elif level <= 30:
            points.append(math.floor(base * 1.5))
        elif level <= 60:
            points.append(math.floor(base * 2))
        elif level <= 100:
            points.append(math.floor(base * 3))
        else:
            points.append(math.floor(base * 4 * growth ** ((level - 100) / 50)))
    return points


@dataclass(frozen=True)
class LevelPreset:
    name: str
    description: str
    max_wild_level: int
    max_tamed_levels: int  # levels a dino can gain after taming
    max_player_level: int
    difficulty_offset: float
    override_official_difficulty: float


LEVEL_PRESETS: List[LevelPreset] = [
    LevelPreset("Default (150)", "Official ARK settings with max wild level 150", 150, 88, 105, 1.0, 5.0),
    LevelPreset("Boosted (200)", "Slightly boosted with max wild level 200", 200, 88, 135, 1.0, 6.67),
    LevelPreset("High (300)", "High difficulty with max wild level 300", 300, 100, 155, 1.0, 10.0),
    LevelPreset("Extreme (600)", "Extreme difficulty with max wild level 600", 600, 150, 200, 1.0, 20.0),
    LevelPreset("Ultra (800)", "Ultra difficulty with max wild level 800", 800, 180, 250, 1.0, 26.67),
    LevelPreset("Maximum (1000)", "Maximum difficulty with max wild level 1000", 1000, 200, 300, 1.0, 33.34),
]


def find_level_preset(name: str) -> Optional[LevelPreset]:
    for preset in LEVEL_PRESETS:
        if preset.name.lower() == name.lower() or preset.name.split(" ")[0].lower() == name.lower():
            return preset
    return None


def difficulty_for_level(max_wild_level: int) -> Tuple[float, float]:
    """Return ``(difficulty_offset, override_official_difficulty)`` for a wild level cap.

    Max wild level is 30 times the official difficulty override.
    """
    override = math.ceil(max_wild_level / 30 * 100) / 100
    return 1.0, max(1.0, override)


def custom_level_preset(max_player_level: int, max_wild_level: int, max_tamed_levels: int) -> LevelPreset:
    offset, override = difficulty_for_level(max_wild_level)
    return LevelPreset("Custom", "Custom level configuration", max_wild_level, max_tamed_levels,
                       max_player_level, offset, override)


@dataclass
class LevelConfig:
    player_levels: ProgressionTable
    dino_levels: ProgressionTable
    engram_points: List[int] = field(default_factory=list)

    @property
    def max_xp_player(self) -> int:
        return self.player_levels.max_total_xp

    @property
    def max_xp_dino(self) -> int:
        return self.dino_levels.max_total_xp


def generate_level_config(preset: LevelPreset, player_curve: Union[CurveType, str] = CurveType.OFFICIAL,
                          dino_curve: Union[CurveType, str] = CurveType.OFFICIAL,
                          multiplier: float = 1.0) -> LevelConfig:
    players = generate_progression(preset.max_player_level, player_curve, multiplier)
    dinos = generate_progression(preset.max_wild_level + preset.max_tamed_levels, dino_curve, multiplier)
    logger.debug("Generated %d player and %d dino levels for %s", len(players), len(dinos), preset.name)
    return LevelConfig(players, dinos, engram_points(preset.max_player_level))


def format_number(value: float) -> str:
    """Render a number the way the game UI writes it: ``1.0`` as ``1``, ``6.67`` as is."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _ramp_line(xp: int) -> str:
    return f"LevelExperienceRampOverrides=(ExperiencePointsForLevel={xp},Alpha=1.0)"


def render_level_fragment(level_config: LevelConfig, preset: LevelPreset) -> str:
    lines = [
        GAME_MODE_HEADER,
        "",
        "; === Max Level Settings ===",
        f"OverrideMaxExperiencePointsPlayer={level_config.max_xp_player}",
        f"OverrideMaxExperiencePointsDino={level_config.max_xp_dino}",
        "",
        "; === Player Level XP Requirements ===",
    ]
    lines.extend(_ramp_line(e.xp_for_level) for e in level_config.player_levels)
    lines.append("")
    lines.append("; === Dino Level XP Requirements ===")
    lines.extend(_ramp_line(e.xp_for_level) for e in level_config.dino_levels)
    lines.append("")
    lines.append("; === Engram Points Per Level ===")
    lines.extend(f"OverridePlayerLevelEngramPoints={p}" for p in level_config.engram_points)
    lines.append("")
    lines.append("; === GameUserSettings.ini Difficulty Settings ===")
    lines.append("; Add these to your GameUserSettings.ini under [ServerSettings]:")
    lines.append(f"; DifficultyOffset={format_number(preset.difficulty_offset)}")
    lines.append(f"; OverrideOfficialDifficulty={format_number(preset.override_official_difficulty)}")
    return "\n".join(lines)


def parse_level_entries(text: str) -> ProgressionTable:
    """Rebuild a table from existing ramp override lines, in order of appearance.

    Player and dino ramps are not told apart; every match becomes one level.
    """
    return ProgressionTable.from_xp([int(m.group(1)) for m in _RAMP_RE.finditer(text)])
