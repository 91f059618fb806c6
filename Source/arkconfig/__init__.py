"""Config editing core for ARK dedicated servers.

Parses and writes GameUserSettings.ini / Game.ini, tracks edits against the
file on disk, follows external changes, and generates preset, level and mod
fragments. Storage is pluggable; ``LocalConfigStorage`` works on a server's
install directory.
"""

from .ini import parse, serialize  # re-export for convenience
from .session import ConfigFileId, ConfigSession, SessionObserver  # change tracking
from .storage import ConfigStorage, InMemoryConfigStorage, LocalConfigStorage
from .workspace import ConfigWorkspace
