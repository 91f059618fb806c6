"""Named bundles of settings that can be stamped onto a session in one step."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .catalog import SERVER_SETTINGS
from .errors import UnknownPresetError
from .session import ConfigSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    # section -> key -> value
    settings: Dict[str, Dict[str, str]]

    @property
    def key_count(self) -> int:
        return sum(len(keys) for keys in self.settings.values())


def _rates(xp: str, taming: str, harvest: str, hatch: str, mature: str, **extra: str) -> Dict[str, Dict[str, str]]:
    values = {
        "XPMultiplier": xp,
        "TamingSpeedMultiplier": taming,
        "HarvestAmountMultiplier": harvest,
        "EggHatchSpeedMultiplier": hatch,
        "BabyMatureSpeedMultiplier": mature,
    }
    values.update(extra)
    return {SERVER_SETTINGS: values}


CONFIG_PRESETS: List[Preset] = [
    Preset("Official Rates", "Official server rates (1x everything)",
           _rates("1.0", "1.0", "1.0", "1.0", "1.0")),
    Preset("Slightly Boosted (2x)", "Slightly faster progression (2x rates)",
           _rates("2.0", "2.0", "2.0", "2.0", "2.0")),
    Preset("Boosted (5x)", "Faster progression for casual play (5x rates)",
           _rates("5.0", "5.0", "5.0", "10.0", "10.0", MatingIntervalMultiplier="0.5")),
    Preset("Highly Boosted (10x)", "Very fast progression (10x rates)",
           _rates("10.0", "10.0", "10.0", "20.0", "20.0", MatingIntervalMultiplier="0.2")),
    Preset("PvP Focused", "Balanced for PvP with faster rebuilding", {
        SERVER_SETTINGS: {
            "ServerPVE": "False",
            "XPMultiplier": "3.0",
            "TamingSpeedMultiplier": "5.0",
            "HarvestAmountMultiplier": "3.0",
            "StructureDamageMultiplier": "1.5",
            "AllowThirdPersonPlayer": "False",
            "EnablePvPGamma": "False",
        }
    }),
    Preset("PvE Relaxed", "Casual PvE experience", {
        SERVER_SETTINGS: {
            "ServerPVE": "True",
            "XPMultiplier": "5.0",
            "TamingSpeedMultiplier": "7.0",
            "HarvestAmountMultiplier": "3.0",
            "EggHatchSpeedMultiplier": "15.0",
            "BabyMatureSpeedMultiplier": "15.0",
            "AllowThirdPersonPlayer": "True",
        }
    }),
]


class PresetEngine:
    """Looks presets up by name and applies them to sessions."""

    def __init__(self, presets: Optional[Iterable[Preset]] = None):
        self._presets: Dict[str, Preset] = {}
        for preset in (CONFIG_PRESETS if presets is None else presets):
            self._presets[preset.name] = preset

    def names(self) -> List[str]:
        return list(self._presets)

    def presets(self) -> List[Preset]:
        return list(self._presets.values())

    def get(self, name: str) -> Preset:
        try:
            return self._presets[name]
        except KeyError:
            # Case-insensitive fallback for CLI use
            for preset_name, preset in self._presets.items():
                if preset_name.lower() == name.lower():
                    return preset
            raise UnknownPresetError(name) from None

    def apply(self, session: ConfigSession, preset: Union[str, Preset]) -> int:
        """Overwrite the preset's keys in the session's working copy.

        Keys the preset does not name are left alone, so applying the same
        preset twice yields the same working copy as applying it once.
        """
        if not isinstance(preset, Preset):
            preset = self.get(preset)
        return session.apply_preset(preset)

    def apply_sequence(self, session: ConfigSession, presets: Sequence[Union[str, Preset]]) -> int:
        """Apply presets in order; on overlapping keys the last one wins."""
        resolved = [p if isinstance(p, Preset) else self.get(p) for p in presets]
        return sum(session.apply_preset(p) for p in resolved)
