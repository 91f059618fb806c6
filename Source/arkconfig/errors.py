"""Exception types raised by the configuration core."""

from __future__ import annotations


class ArkConfigError(Exception):
    """Base class for all arkconfig errors."""


class ConfigNotFoundError(ArkConfigError):
    """The requested configuration source does not exist or cannot be resolved."""


class UnknownServerError(ConfigNotFoundError):
    def __init__(self, server_id):
        self.server_id = server_id
        super().__init__(f"Unknown server id: {server_id}")


class ConfigIOError(ArkConfigError):
    """Reading or writing a configuration file failed.

    The session that triggered the write keeps its working copy so the caller
    can retry.
    """


class UnknownPresetError(ArkConfigError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown preset: {name}")

    def __str__(self) -> str:
        return self.args[0]
