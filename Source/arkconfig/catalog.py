"""Built-in field catalogue for GameUserSettings.ini and Game.ini (ASE and ASA)."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from .schema import ConfigGroup, FieldSchema, FieldType, GameVariant, Schema

SERVER_SETTINGS = "ServerSettings"
MESSAGE_OF_THE_DAY = "MessageOfTheDay"
SHOOTER_GAME_MODE = "/Script/ShooterGame.ShooterGameMode"


def _text(key: str, label: str, desc: str, default: Optional[str] = None,
          section: str = SERVER_SETTINGS) -> FieldSchema:
    return FieldSchema(key, label, FieldType.TEXT, section, default, desc)


def _bool(key: str, label: str, default: str, desc: str,
          section: str = SERVER_SETTINGS) -> FieldSchema:
    return FieldSchema(key, label, FieldType.BOOLEAN, section, default, desc)


def _num(key: str, label: str, default: str, desc: str, min: Optional[float] = None,
         max: Optional[float] = None, step: Optional[float] = None,
         section: str = SERVER_SETTINGS) -> FieldSchema:
    return FieldSchema(key, label, FieldType.NUMBER, section, default, desc, min, max, step)


def _mult(key: str, label: str, desc: str, min: float = 0.1, max: float = 10,
          section: str = SERVER_SETTINGS) -> FieldSchema:
    # Most rate settings are 1.0-default multipliers stepped by 0.1
    return _num(key, label, "1.0", desc, min, max, 0.1, section)


def _group(title: str, description: str, icon: str, *fields: FieldSchema) -> ConfigGroup:
    return ConfigGroup(title, description, tuple(fields), icon)


# --- GameUserSettings.ini building blocks ---

COMMON_SERVER_SETTINGS = (
    _text("SessionName", "Session Name", "The name that appears in the server browser", "Ark Server"),
    _text("Message", "Message of the Day", "Message shown when players join", section=MESSAGE_OF_THE_DAY),
    _num("Duration", "MOTD Duration", "20", "How long the MOTD is displayed (seconds)", section=MESSAGE_OF_THE_DAY),
    _text("ServerPassword", "Server Password", "Leave empty for no password"),
    _text("ServerAdminPassword", "Admin Password", "Password required for admin commands"),
    _text("SpectatorPassword", "Spectator Password", "Password for spectator mode"),
    _num("MaxPlayers", "Max Players", "70", "Maximum number of players allowed", 1, 255),
)

COMMON_GAMEPLAY = (
    _bool("ServerPVE", "PvE Mode", "False", "Enable Player vs Environment mode (no player damage)"),
    _bool("ServerHardcore", "Hardcore Mode", "False", "Characters are deleted on death"),
    _bool("GlobalVoiceChat", "Global Voice Chat", "False", "Enable voice chat across entire server"),
    _bool("ProximityChat", "Proximity Chat", "False", "Enable proximity-based voice chat"),
    _bool("AllowThirdPersonPlayer", "Allow Third Person", "True", "Allow players to use third-person view"),
    _bool("AlwaysNotifyPlayerLeft", "Notify Player Left", "False", "Show notification when player leaves"),
    _bool("AlwaysNotifyPlayerJoined", "Notify Player Joined", "False", "Show notification when player joins"),
    _bool("ShowMapPlayerLocation", "Show Player Location on Map", "True", "Display player position on map"),
    _bool("ServerCrosshair", "Enable Crosshair", "True", "Show crosshair on screen"),
    _bool("ServerForceNoHud", "Force No HUD", "False", "Disable HUD for all players"),
    _bool("EnablePvPGamma", "Enable PvP Gamma", "False", "Allow gamma adjustment in PvP"),
    _bool("DisablePvEGamma", "Disable PvE Gamma", "False", "Prevent gamma adjustment in PvE"),
)

COMMON_DIFFICULTY = (
    _num("DifficultyOffset", "Difficulty Offset", "1.0", "Base difficulty (0.0-1.0)", 0, 1, 0.1),
    _num("OverrideOfficialDifficulty", "Override Official Difficulty", "5.0",
         "Maximum creature level scaling (1-10)", 1, 10, 0.5),
    _num("MaxTribeLogs", "Max Tribe Logs", "100", "Maximum tribe log entries", 10, 1000),
)

COMMON_PREVENTION = (
    _bool("NoTributeDownloads", "No Tribute Downloads", "False", "Prevent downloading items from obelisks"),
    _bool("PreventDownloadSurvivors", "Prevent Download Survivors", "False", "Block survivor downloads from cloud"),
    _bool("PreventUploadSurvivors", "Prevent Upload Survivors", "False", "Block survivor uploads to cloud"),
    _bool("PreventDownloadItems", "Prevent Download Items", "False", "Block item downloads from cloud"),
    _bool("PreventUploadItems", "Prevent Upload Items", "False", "Block item uploads to cloud"),
    _bool("PreventDownloadDinos", "Prevent Download Dinos", "False", "Block dino downloads from cloud"),
    _bool("PreventUploadDinos", "Prevent Upload Dinos", "False", "Block dino uploads to cloud"),
)

COMMON_PLAYER_STATS = (
    _mult("PlayerCharacterHealthRecoveryMultiplier", "Health Recovery", "Multiplier for player health regeneration"),
    _mult("PlayerCharacterStaminaRecoveryMultiplier", "Stamina Recovery", "Multiplier for stamina regeneration"),
    _mult("PlayerCharacterWaterDrainMultiplier", "Water Drain", "How fast players get thirsty"),
    _mult("PlayerCharacterFoodDrainMultiplier", "Food Drain", "How fast players get hungry"),
    _mult("PlayerDamageMultiplier", "Player Damage", "Damage dealt by players"),
    _mult("PlayerResistanceMultiplier", "Player Resistance", "Damage resistance for players"),
)

COMMON_DINO_STATS = (
    _mult("DinoCharacterHealthRecoveryMultiplier", "Dino Health Recovery", "Dino health regeneration rate"),
    _mult("DinoCharacterStaminaDrainMultiplier", "Dino Stamina Drain", "How fast dinos lose stamina"),
    _mult("DinoCharacterFoodDrainMultiplier", "Dino Food Drain", "How fast dinos get hungry"),
    _mult("DinoDamageMultiplier", "Dino Damage", "Damage dealt by tamed dinos"),
    _mult("DinoResistanceMultiplier", "Dino Resistance", "Damage resistance for tamed dinos"),
    _mult("DinoCountMultiplier", "Dino Spawn Count", "Number of dinos that spawn", max=5),
    _num("MaxPersonalTamedDinos", "Max Tamed Dinos (Personal)", "500", "Max dinos per player/tribe member", 1, 10000),
    _num("MaxTamedDinos", "Max Tamed Dinos (Server)", "5000", "Max total tamed dinos on server", 1, 50000),
)

COMMON_HARVESTING = (
    _mult("HarvestAmountMultiplier", "Harvest Amount", "Resources gathered per action", max=100),
    _mult("HarvestHealthMultiplier", "Harvest Node Health", "Health of harvestable nodes"),
    _mult("ResourcesRespawnPeriodMultiplier", "Resource Respawn Speed", "How fast resources respawn (lower = faster)"),
    _bool("ClampResourceHarvestDamage", "Clamp Resource Harvest Damage", "False",
          "Limit damage dealt to harvestable resources"),
)

COMMON_XP_LEVELING = (
    _mult("XPMultiplier", "XP Multiplier", "Experience gain rate", max=100),
    _mult("PlayerLevelCapMultiplier", "Player Level Cap Multiplier", "Multiply the max player level", min=1),
)

COMMON_TAMING = (
    _mult("TamingSpeedMultiplier", "Taming Speed", "Speed of taming process", max=100),
    _mult("DinoTurretDamageMultiplier", "Dino Turret Damage", "Damage from auto turrets to dinos"),
)

COMMON_BREEDING = (
    _mult("MatingIntervalMultiplier", "Mating Interval", "Time between mating (lower = faster)", 0.01, 100),
    _mult("EggHatchSpeedMultiplier", "Egg Hatch Speed", "How fast eggs hatch", 0.01, 100),
    _mult("BabyMatureSpeedMultiplier", "Baby Mature Speed", "How fast babies grow up", 0.01, 100),
    _mult("BabyCuddleIntervalMultiplier", "Cuddle Interval",
          "Time between imprint requests (lower = more frequent)", 0.01, 100),
    _mult("BabyCuddleGracePeriodMultiplier", "Cuddle Grace Period", "Time allowed to complete cuddle"),
    _mult("BabyCuddleLoseImprintQualitySpeedMultiplier", "Cuddle Lose Imprint Speed",
          "Speed of losing imprint quality"),
    _mult("BabyImprintingStatScaleMultiplier", "Imprinting Stat Scale", "Bonus stats from imprinting"),
    _mult("LayEggIntervalMultiplier", "Lay Egg Interval", "Time between laying eggs (lower = more frequent)"),
)

COMMON_ENVIRONMENT = (
    _mult("DayCycleSpeedScale", "Day Cycle Speed", "Speed of day/night cycle"),
    _mult("DayTimeSpeedScale", "Day Time Speed", "Speed of daytime passage"),
    _mult("NightTimeSpeedScale", "Night Time Speed", "Speed of nighttime passage"),
)

COMMON_STRUCTURE = (
    _mult("PvEStructureDecayPeriodMultiplier", "Structure Decay Period (PvE)",
          "Time until structures decay in PvE (0 = disabled)", 0, 100),
    _num("PvEStructureDecayDestructionPeriod", "Structure Decay Destruction (PvE)", "0",
         "Time until decayed structures are destroyed", 0, 100000, 1),
    _mult("StructureDamageMultiplier", "Structure Damage", "Damage dealt to structures"),
    _mult("StructureResistanceMultiplier", "Structure Resistance", "Damage resistance of structures"),
    _num("NewMaxStructuresInRange", "Max Structures in Range", "6000",
         "Maximum structures within build radius", 1000, 100000),
    _mult("StructurePreventResourceRadiusMultiplier", "Structure Resource Radius",
          "Radius around structures where resources don't spawn", max=3),
    _mult("PlatformSaddleBuildAreaBoundsMultiplier", "Platform Build Area", "Platform saddle build area size"),
    _mult("PerPlatformMaxStructuresMultiplier", "Platform Max Structures", "Max structures per platform"),
    _num("TribeSlotReplicationLimit", "Tribe Slot Limit", "0", "Maximum tribe slots (0 = no limit)", 0, 500),
    _bool("AutoDestroyDecayedDinos", "Auto Destroy Decayed Dinos", "False", "Automatically destroy unclaimed dinos"),
)

COMMON_PVP_SETTINGS = (
    _bool("PreventOfflinePvP", "Offline Raid Protection (ORP)", "False", "Enable offline raid protection"),
    _num("PreventOfflinePvPInterval", "ORP Activation Delay", "900", "Seconds until ORP activates after logout", 0, 3600),
    _bool("bPvPDinoDecay", "PvP Dino Decay", "False", "Enable dino decay in PvP"),
    _bool("bPvPStructureDecay", "PvP Structure Decay", "False", "Enable structure decay in PvP"),
    _mult("PvPZoneStructureDamageMultiplier", "PvP Zone Structure Damage", "Structure damage multiplier in PvP zones"),
    _bool("PreventTribeAlliances", "Prevent Tribe Alliances", "False", "Disable tribe alliance system"),
    _bool("AllowRaidDinoFeeding", "Allow Raid Dino Feeding", "False", "Allow feeding of Titanosaur/Raid dinos"),
    _mult("RaidDinoCharacterFoodDrainMultiplier", "Raid Dino Food Drain", "Food drain for raid dinos"),
)

COMMON_ADMIN_SETTINGS = (
    _bool("AdminLogging", "Admin Logging", "False", "Log all admin commands"),
    _num("AutoSavePeriodMinutes", "Auto Save Interval (minutes)", "15", "Minutes between auto-saves", 1, 120),
    _bool("AllowHideDamageSourceFromLogs", "Hide Damage Source in Logs", "False", "Hide damage source from tribe logs"),
    _bool("ShowFloatingDamageText", "Show Floating Damage Text", "False", "Display damage numbers"),
    _bool("EnableDeathTeamSpectator", "Death Team Spectator", "False", "Spectate tribe mates after death"),
    _bool("bDisableGenesisMissions", "Disable Genesis Missions", "False", "Disable Genesis map missions"),
    _bool("AllowHitMarkers", "Allow Hit Markers", "True", "Show hit marker indicators"),
)

COMMON_LOOT_SETTINGS = (
    _mult("SupplyCrateLootQualityMultiplier", "Supply Crate Quality", "Quality of items in supply drops"),
    _mult("FishingLootQualityMultiplier", "Fishing Loot Quality", "Quality of fishing rewards"),
    _mult("CraftingSkillBonusMultiplier", "Crafting Skill Bonus", "Crafting skill effectiveness"),
    _mult("ItemStackSizeMultiplier", "Item Stack Size", "Multiplier for stack sizes", 1, 100),
    _mult("ResourceNoReplenishRadiusStructures", "Resource No-Spawn Radius",
          "Radius where resources don't respawn near structures", 0, 5),
    _bool("RandomSupplyCratePoints", "Random Supply Crate Points", "False", "Randomize supply drop locations"),
)

COMMON_TIMERS = (
    _mult("GlobalSpoilingTimeMultiplier", "Spoiling Time", "How long items take to spoil (higher = longer)", max=100),
    _mult("GlobalItemDecompositionTimeMultiplier", "Item Decomposition Time", "How long dropped items last", max=100),
    _mult("GlobalCorpseDecompositionTimeMultiplier", "Corpse Decomposition Time", "How long corpses last", max=100),
    _mult("CropDecaySpeedMultiplier", "Crop Decay Speed", "Speed of crop decay"),
    _mult("CropGrowthSpeedMultiplier", "Crop Growth Speed", "Speed of crop growth"),
    _mult("DinoDecayPeriodMultiplier", "Dino Decay Period", "Time until unclaimed dinos decay", max=100),
    _mult("PoopIntervalMultiplier", "Poop Interval", "Dino poop frequency (lower = more poop)"),
)

COMMON_ENGRAMS = (
    _bool("bAutoUnlockAllEngrams", "Auto Unlock All Engrams", "False", "Automatically unlock all engrams"),
    _bool("bAllowUnlimitedRespecs", "Unlimited Respecs", "False", "Allow unlimited mindwipes"),
    _bool("bOnlyAllowSpecifiedEngrams", "Only Specified Engrams", "False", "Restrict to specified engrams only"),
    _bool("UseCorpseLocator", "Use Corpse Locator", "False", "Enable corpse locator beam"),
)

COMMON_FLYER_SETTINGS = (
    _bool("bFlyerPlatformAllowUnalignedDinoBasing", "Flyer Platform Allow Unaligned Dinos", "False",
          "Allow dinos on flyer platforms while moving"),
    _bool("bDisablePhotoMode", "Disable Photo Mode", "False", "Disable the photo mode feature"),
    _bool("AllowFlyingStaminaRecovery", "Flying Stamina Recovery", "False", "Allow stamina recovery while flying"),
    _mult("OxygenSwimSpeedStatMultiplier", "Oxygen Swim Speed", "Effect of oxygen on swim speed", min=0),
)

COMMON_WILD_DINO = (
    _mult("WildDinoCharacterFoodDrainMultiplier", "Wild Dino Food Drain", "Wild dino food consumption rate"),
    _mult("WildDinoTorporDrainMultiplier", "Wild Dino Torpor Drain", "Wild dino torpor drain rate"),
    _bool("PassiveDefensesDamageRiderlessDinos", "Passive Defense vs Riderless Dinos", "False",
          "Passive defenses damage riderless dinos"),
    _bool("DestroyUnconnectedWaterPipes", "Destroy Unconnected Pipes", "False", "Auto-destroy unconnected water pipes"),
)

_STRUCTURE_COLLISION = _bool("DisableStructurePlacementCollision", "Disable Structure Collision", "False",
                             "Allow structures to be placed with overlaps")


def _game_user_settings(identity: ConfigGroup, gameplay: Tuple[FieldSchema, ...],
                        taming_extra: Tuple[FieldSchema, ...] = (),
                        structure_extra: Tuple[FieldSchema, ...] = (),
                        prevention_extra: Tuple[FieldSchema, ...] = ()) -> Schema:
    # ASE and ASA share the layout and differ only in a few extra fields
    return (
        identity,
        _group("Gameplay Rules", "Core gameplay settings and restrictions", "gamepad", *gameplay),
        _group("Difficulty & Limits", "Server difficulty and various limits", "chart", *COMMON_DIFFICULTY),
        _group("PvP & Raid Settings", "PvP combat rules and offline raid protection", "sword", *COMMON_PVP_SETTINGS),
        _group("Admin & Server Management", "Admin tools, logging, and auto-save", "shield", *COMMON_ADMIN_SETTINGS),
        _group("Player Stats & Progression", "Player character stats and leveling", "user",
               *COMMON_PLAYER_STATS, *COMMON_XP_LEVELING),
        _group("Dino Settings", "Dinosaur stats and spawning", "dragon", *COMMON_DINO_STATS),
        _group("Wild Dino Behavior", "Wild dino stats and behaviors", "paw", *COMMON_WILD_DINO),
        _group("Flyers & Movement", "Flying creature settings and movement", "feather", *COMMON_FLYER_SETTINGS),
        _group("Harvesting & Resources", "Resource gathering and respawn rates", "pickaxe", *COMMON_HARVESTING),
        _group("Taming & Breeding", "Taming speed and breeding settings", "heart",
               *COMMON_TAMING, *COMMON_BREEDING, *taming_extra),
        _group("Environment & Time", "Day/night cycles and weather", "sun", *COMMON_ENVIRONMENT),
        _group("Structure Settings", "Structure decay, damage, and platform limits", "building",
               *COMMON_STRUCTURE, *structure_extra),
        _group("Supply Drops & Loot", "Loot quality and crafting bonuses", "gift", *COMMON_LOOT_SETTINGS),
        _group("Spoiling & Decay Timers", "Item spoiling, corpse decay, and crops", "clock", *COMMON_TIMERS),
        _group("Engrams & Crafting", "Engram unlocks and mindwipe options", "book", *COMMON_ENGRAMS),
        _group("Upload/Download Rules", "Prevent uploads and downloads", "cloud",
               *COMMON_PREVENTION, *prevention_extra),
    )


ASE_GAME_USER_SETTINGS_SCHEMA = _game_user_settings(
    _group("Server Identity & Access", "Server name, passwords, and access control", "server",
           *COMMON_SERVER_SETTINGS),
    (
        *COMMON_GAMEPLAY,
        _bool("AllowCaveBuildingPvE", "Allow Cave Building (PvE)", "False", "Allow building in caves in PvE mode"),
        _bool("AllowFlyerCarryPvE", "Allow Flyer Carry (PvE)", "False", "Allow flyers to carry players/dinos in PvE"),
        _STRUCTURE_COLLISION,
    ),
)

ASA_GAME_USER_SETTINGS_SCHEMA = _game_user_settings(
    _group("Server Identity & Access", "Server name, passwords, and RCON", "server",
           *COMMON_SERVER_SETTINGS,
           _bool("RCONEnabled", "Enable RCON", "True", "Enable remote console access"),
           _num("RCONPort", "RCON Port", "27020", "Port for RCON connections", 1024, 65535)),
    (
        *COMMON_GAMEPLAY,
        _STRUCTURE_COLLISION,
        _bool("AllowAnyoneBabyImprintCuddle", "Anyone Can Cuddle", "False", "Allow any tribe member to imprint"),
        _bool("DisableImprintDinoBuff", "Disable Imprint Buff", "False", "Disable stat bonuses from imprinting"),
    ),
    taming_extra=(
        _mult("BabyImprintAmountMultiplier", "Baby Imprint Amount", "Amount of imprint gained per cuddle"),
    ),
    structure_extra=(
        _bool("DisableStructureDecayPvE", "Disable Structure Decay (PvE)", "False",
              "Completely disable structure decay in PvE"),
        _bool("ForceAllStructureLocking", "Force Structure Locking", "False", "Automatically lock all structures"),
    ),
    prevention_extra=(
        _bool("EnableCryopodNerf", "Enable Cryopod Nerf", "True", "Apply cryopod sickness debuff"),
    ),
)


# --- Game.ini ---

def _gm_mult(key: str, label: str, desc: str, min: float = 0.1, max: float = 10) -> FieldSchema:
    return _mult(key, label, desc, min, max, section=SHOOTER_GAME_MODE)


def _gm_bool(key: str, label: str, default: str, desc: str) -> FieldSchema:
    return _bool(key, label, default, desc, section=SHOOTER_GAME_MODE)


COMMON_GAME_MULTIPLIERS = (
    _gm_mult("XPMultiplier", "XP Multiplier", "Overall XP gain rate", max=100),
    _gm_mult("TamingSpeedMultiplier", "Taming Speed", "Taming process speed", max=100),
    _gm_mult("HarvestAmountMultiplier", "Harvest Amount", "Resources per harvest action", max=100),
    _gm_mult("CaveDamageMultiplier", "Cave Damage", "Damage multiplier inside caves"),
    _gm_mult("KillXPMultiplier", "Kill XP Multiplier", "XP gained from kills", max=100),
    _gm_mult("HarvestXPMultiplier", "Harvest XP Multiplier", "XP gained from harvesting", max=100),
    _gm_mult("CraftXPMultiplier", "Craft XP Multiplier", "XP gained from crafting", max=100),
    _gm_mult("GenericXPMultiplier", "Generic XP Multiplier", "XP from misc actions", max=100),
    _gm_mult("SpecialXPMultiplier", "Special XP Multiplier", "XP from explorer notes, etc.", max=100),
)

COMMON_GAME_BREEDING = (
    _gm_mult("MatingIntervalMultiplier", "Mating Interval", "Cooldown between mating", 0.01, 100),
    _gm_mult("EggHatchSpeedMultiplier", "Egg Hatch Speed", "Egg incubation speed", 0.01, 100),
    _gm_mult("BabyMatureSpeedMultiplier", "Baby Mature Speed", "Baby growth rate", 0.01, 100),
    _gm_mult("BabyCuddleIntervalMultiplier", "Cuddle Interval", "Time between cuddles", 0.01, 100),
    _gm_mult("BabyCuddleGracePeriodMultiplier", "Cuddle Grace Period", "Time allowed for cuddle"),
    _gm_mult("BabyCuddleLoseImprintQualitySpeedMultiplier", "Imprint Loss Speed", "Speed of losing imprint"),
    _gm_mult("BabyImprintingStatScaleMultiplier", "Imprinting Stat Scale", "Stat bonus from imprinting"),
    _gm_mult("BabyFoodConsumptionSpeedMultiplier", "Baby Food Consumption", "Baby food drain rate", 0.01),
)

# Stat indices follow the game's EPrimalCharacterStatusValue order
_STAT_NAMES = {
    0: "Health", 1: "Stamina", 2: "Torpidity", 3: "Oxygen", 4: "Food", 5: "Water",
    7: "Weight", 8: "Melee", 9: "Speed", 10: "Fortitude", 11: "Crafting",
}


def _per_level(kind: str, suffix: str, indices: Tuple[int, ...], desc_fmt: str) -> Tuple[FieldSchema, ...]:
    return tuple(
        _gm_mult(f"PerLevelStatsMultiplier_{kind}[{i}]", f"{_STAT_NAMES[i]} per Level ({suffix})",
                 desc_fmt.format(stat=_STAT_NAMES[i].lower()))
        for i in indices
    )


GAME_PLAYER_STATS = _per_level("Player", "Player", (0, 1, 2, 3, 4, 5, 7, 8, 9, 10, 11), "{stat} gained per level")
GAME_DINO_TAMED_STATS = _per_level("DinoTamed", "Tamed", (0, 1, 3, 4, 7, 8, 9), "Tamed dino {stat} per level")
GAME_DINO_WILD_STATS = _per_level("DinoWild", "Wild", (0, 1, 3, 4, 7, 8), "Wild dino {stat} per level")

GAME_ADVANCED_OPTIONS = (
    _gm_bool("bAllowCustomRecipes", "Allow Custom Recipes", "True", "Allow players to create custom recipes"),
    _gm_bool("bPassiveDefensesDamageRiderlessDinos", "Turrets Damage Riderless Dinos", "False",
             "Auto-turrets damage unclaimed dinos"),
    _gm_bool("bDisableFriendlyFire", "Disable Friendly Fire", "False", "Prevent damage to tribe mates"),
    _gm_bool("bPvEDisableFriendlyFire", "PvE Disable Friendly Fire", "False", "Prevent friendly fire in PvE"),
    _gm_bool("bAllowUnlimitedRespecs", "Unlimited Respecs", "False", "Allow unlimited mindwipes"),
    _num("MaxNumberOfPlayersInTribe", "Max Players per Tribe", "0", "Max tribe size (0 = no limit)", 1, 500,
         section=SHOOTER_GAME_MODE),
    _num("GlobalPoweredBatteryDurabilityDecreasePerSecond", "Battery Drain Rate", "4.0",
         "Battery power drain per second", 0, 10, 0.01, section=SHOOTER_GAME_MODE),
    _gm_mult("FuelConsumptionIntervalMultiplier", "Fuel Consumption Rate", "Fuel consumption multiplier"),
)


def _game_ini(breeding_extra: Tuple[FieldSchema, ...] = ()) -> Schema:
    return (
        _group("Core Multipliers", "Essential game rate multipliers", "settings", *COMMON_GAME_MULTIPLIERS),
        _group("Breeding Settings", "Breeding and maturation rates", "heart", *COMMON_GAME_BREEDING, *breeding_extra),
        _group("Player Stats Per Level", "Stats gained per level for players", "user", *GAME_PLAYER_STATS),
        _group("Tamed Dino Stats Per Level", "Stats gained per level for tamed dinos", "dragon",
               *GAME_DINO_TAMED_STATS),
        _group("Wild Dino Stats Per Level", "Stats per level for wild dinos", "paw", *GAME_DINO_WILD_STATS),
        _group("Advanced Options", "Friendly fire, recipes, and misc settings", "cog", *GAME_ADVANCED_OPTIONS),
    )


ASE_GAME_INI_SCHEMA = _game_ini()
ASA_GAME_INI_SCHEMA = _game_ini((
    _gm_mult("BabyImprintAmountMultiplier", "Baby Imprint Amount", "Imprint percentage per cuddle"),
))


SCHEMAS: Dict[Tuple[GameVariant, str], Schema] = {
    (GameVariant.ASE, "GameUserSettings"): ASE_GAME_USER_SETTINGS_SCHEMA,
    (GameVariant.ASA, "GameUserSettings"): ASA_GAME_USER_SETTINGS_SCHEMA,
    (GameVariant.ASE, "Game"): ASE_GAME_INI_SCHEMA,
    (GameVariant.ASA, "Game"): ASA_GAME_INI_SCHEMA,
}
