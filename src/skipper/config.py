"""
Skipper configuration.

Process-wide policy data, loaded once at startup and passed explicitly
to the marker and collision resolvers:
    - aliases: content type aliases that mark a node (case-insensitive)
    - while_loop_max_count: upper bound for every upward walk
    - reserved_property_alias: node property that marks a node when true

Example YAML:

    aliases:
      - folder
      - newsArchive
    while_loop_max_count: 100
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Union

import yaml


DEFAULT_WHILE_LOOP_MAX_COUNT = 100
RESERVED_PROPERTY_ALIAS = "skipperWasHere"


class ConfigError(ValueError):
    """Raised when configuration data is invalid."""
    pass


def _normalize_aliases(aliases: Iterable[str]) -> FrozenSet[str]:
    normalized = set()
    for alias in aliases:
        if not isinstance(alias, str):
            raise ConfigError(f"Alias must be a string, got {type(alias).__name__}: {alias!r}")
        alias = alias.strip()
        if alias:
            normalized.add(alias.lower())
    return frozenset(normalized)


@dataclass(frozen=True)
class SkipperConfig:
    """
    Immutable configuration for the resolvers.

    Properties:
        aliases:
            Lower-cased content type aliases of marked nodes
        while_loop_max_count:
            Maximum iterations of an upward walk (guards cyclic parent links)
        reserved_property_alias:
            Property whose true value marks a node regardless of its type
    """

    aliases: FrozenSet[str] = field(default_factory=frozenset)
    while_loop_max_count: int = DEFAULT_WHILE_LOOP_MAX_COUNT
    reserved_property_alias: str = RESERVED_PROPERTY_ALIAS

    def __post_init__(self) -> None:
        # Accept any iterable of aliases, store them lower-cased
        object.__setattr__(self, "aliases", _normalize_aliases(self.aliases))

        limit = self.while_loop_max_count
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ConfigError(f"while_loop_max_count must be a positive integer, got {limit!r}")
        if not isinstance(self.reserved_property_alias, str) or not self.reserved_property_alias:
            raise ConfigError("reserved_property_alias must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "SkipperConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        aliases = data.get("aliases") or []
        if isinstance(aliases, str) or not isinstance(aliases, (list, tuple, set, frozenset)):
            raise ConfigError("aliases must be a list of strings")

        return cls(
            aliases=frozenset(aliases),
            while_loop_max_count=data.get("while_loop_max_count", DEFAULT_WHILE_LOOP_MAX_COUNT),
            reserved_property_alias=data.get("reserved_property_alias", RESERVED_PROPERTY_ALIAS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aliases": sorted(self.aliases),
            "while_loop_max_count": self.while_loop_max_count,
            "reserved_property_alias": self.reserved_property_alias,
        }


def config_from_yaml(text: str) -> SkipperConfig:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML configuration: {e}") from e
    return SkipperConfig.from_dict(data)


def load_config(path: Union[str, Path]) -> SkipperConfig:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the content is not a valid configuration
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    return config_from_yaml(path.read_text(encoding="utf-8"))
