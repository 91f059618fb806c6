import os


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Root for logs, backups and the server registry
APP_DIR = os.getenv(
    "ARKCONFIG_APP_DIR",
    os.path.join(os.path.expanduser("~"), ".arkconfig"),
)

# Where the dedicated server keeps its ini files, relative to the install path
CONFIG_SUBDIR = os.getenv("ARKCONFIG_CONFIG_SUBDIR", "ShooterGame/Saved/Config/WindowsServer")

# JSON file mapping server ids to install paths
SERVER_REGISTRY_PATH = os.getenv(
    "ARKCONFIG_SERVER_REGISTRY",
    os.path.join(APP_DIR, "servers.json"),
)

# Seconds between external-change checks
POLL_INTERVAL = env_float("ARKCONFIG_POLL_INTERVAL", 3.0)

# Game variant used when a server entry does not name one ("ASA" or "ASE")
DEFAULT_VARIANT = os.getenv("ARKCONFIG_DEFAULT_VARIANT", "ASA")

# Copy the previous file into backups/ before each save
BACKUP_ON_SAVE = env_bool("ARKCONFIG_BACKUP_ON_SAVE", True)

# Keep at most this many backups per config file
BACKUP_KEEP = int(env_float("ARKCONFIG_BACKUP_KEEP", 10))

LOG_LEVEL = os.getenv("ARKCONFIG_LOG_LEVEL", "DEBUG")

# Logical config files the editor knows about
CONFIG_FILES = ("GameUserSettings", "Game")
