"""
Field schema model for the structured config editor.

A schema is an ordered tuple of display groups; each group holds field
definitions that point at exactly one (section, key) slot of an ini document.
Schemas are static data (see ``catalog``) looked up per game variant and
logical file name. Files without a schema return ``None`` so callers can fall
back to raw-text editing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from . import config

logger = logging.getLogger(__name__)


class FieldType(Enum):
    """Input kinds a field can be rendered and validated as."""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    COLOR = "color"


class GameVariant(Enum):
    ASE = "ASE"  # ARK: Survival Evolved
    ASA = "ASA"  # ARK: Survival Ascended

    @classmethod
    def coerce(cls, value: Union["GameVariant", str]) -> "GameVariant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown game variant: {value!r} (expected ASE or ASA)") from None


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


@dataclass(frozen=True)
class FieldSchema:
    """Definition of one editable setting."""
    key: str
    label: str
    type: FieldType
    section: str
    default_value: Optional[str] = None
    description: str = ""
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Tuple[SelectOption, ...] = ()

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.label.lower() or q in self.description.lower() or q in self.key.lower()


@dataclass(frozen=True)
class ConfigGroup:
    """Display grouping of fields; not a storage concept."""
    title: str
    description: str
    fields: Tuple[FieldSchema, ...]
    icon: Optional[str] = None


Schema = Tuple[ConfigGroup, ...]


def normalize_file_name(file_name: str) -> str:
    """Map ``"Game.ini"``, ``"game"`` etc. to the logical name used as catalog key."""
    name = file_name.strip()
    if name.lower().endswith(".ini"):
        name = name[:-4]
    for known in config.CONFIG_FILES:
        if name.lower() == known.lower():
            return known
    return name


class SchemaRegistry:
    """Static catalogue of schemas keyed by (variant, logical file name)."""

    def __init__(self, schemas: Optional[Dict[Tuple[GameVariant, str], Schema]] = None):
        if schemas is None:
            from .catalog import SCHEMAS
            schemas = SCHEMAS
        self._schemas = dict(schemas)

    def get_schema(self, variant: Union[GameVariant, str], file_name: str) -> Optional[Schema]:
        """Return the schema for a file, or None when the file has no structured view."""
        key = (GameVariant.coerce(variant), normalize_file_name(file_name))
        schema = self._schemas.get(key)
        if schema is None:
            logger.debug("No schema for %s/%s", key[0].value, key[1])
        return schema

    def files_for(self, variant: Union[GameVariant, str]) -> Tuple[str, ...]:
        v = GameVariant.coerce(variant)
        return tuple(name for (var, name) in self._schemas if var == v)


def iter_fields(schema: Schema) -> Iterator[FieldSchema]:
    for group in schema:
        yield from group.fields


def find_field(schema: Optional[Schema], section: str, key: str) -> Optional[FieldSchema]:
    if not schema:
        return None
    for field in iter_fields(schema):
        if field.section == section and field.key == key:
            return field
    return None


def find_group(schema: Optional[Schema], title: str) -> Optional[ConfigGroup]:
    if not schema:
        return None
    for group in schema:
        if group.title.lower() == title.lower():
            return group
    return None


def filter_schema(schema: Schema, query: str = "",
                  predicate: Optional[Callable[[FieldSchema], bool]] = None) -> Schema:
    """Narrow a schema to fields matching a search query and/or predicate.

    Groups left without fields are dropped. With no query and no predicate the
    schema is returned unchanged.
    """
    if not query and predicate is None:
        return schema
    result = []
    for group in schema:
        fields = tuple(
            f for f in group.fields
            if (not query or f.matches(query)) and (predicate is None or predicate(f))
        )
        if fields:
            result.append(ConfigGroup(group.title, group.description, fields, group.icon))
    return tuple(result)


_default_registry: Optional[SchemaRegistry] = None


def default_registry() -> SchemaRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = SchemaRegistry()
    return _default_registry


def get_schema(variant: Union[GameVariant, str], file_name: str) -> Optional[Schema]:
    """Convenience lookup against the built-in catalogue."""
    return default_registry().get_schema(variant, file_name)
