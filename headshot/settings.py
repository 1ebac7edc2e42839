# headshot/settings.py
"""Settings collaborator: validated tunables, list parsing, atomic reload."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.exceptions import SettingsError

from .config import DEFAULT_CONFIG, DEFAULT_HEADSHOT_EFFECTS, DEFAULT_HELMET_PROTECTIONS, HeadshotConfig
from .damage import ProtectionTable
from .effects import EffectSpec, StatusEffect

logger = logging.getLogger(__name__)


class HeadshotSettings(BaseSettings):
    """Headshot tunables, overridable via environment variables (HEADSHOT_*)."""

    # Combat
    headshot_multiplier: float = Field(2.0, ge=1.1, le=10.0)
    enable_headshot_effects: bool = False
    headshot_effects: list[str] = Field(default_factory=lambda: list(DEFAULT_HEADSHOT_EFFECTS))

    # Detection
    ray_trace_distance: float = Field(32.0, ge=1.0, le=64.0)
    arrow_backtrack: float = Field(0.1, ge=0.0, le=1.0)

    # Hitbox
    max_head_width: float = Field(0.5, ge=0.1, le=2.0)
    head_height_ratio: float = Field(0.5, ge=0.1, le=1.0)
    head_height_bottom_ratio: float = Field(1.0 / 3.0, ge=0.0, le=1.0)
    head_height_top_ratio: float = Field(2.0 / 3.0, ge=0.0, le=1.0)

    # Particles
    particle_count: int = Field(20, ge=0, le=100)
    particle_spread: float = Field(0.5, ge=0.0, le=2.0)
    particle_speed: float = Field(0.1, ge=0.0, le=1.0)

    helmet_protections: list[str] = Field(default_factory=lambda: list(DEFAULT_HELMET_PROTECTIONS))

    debug: bool = False

    model_config = SettingsConfigDict(env_prefix="HEADSHOT_", env_file=".env", extra="ignore")

    def to_config(self) -> HeadshotConfig:
        return HeadshotConfig(
            headshot_multiplier=self.headshot_multiplier,
            enable_headshot_effects=self.enable_headshot_effects,
            headshot_effects=parse_effect_spec(self.headshot_effects),
            ray_trace_distance=self.ray_trace_distance,
            arrow_backtrack=self.arrow_backtrack,
            max_head_width=self.max_head_width,
            head_height_ratio=self.head_height_ratio,
            head_height_bottom_ratio=self.head_height_bottom_ratio,
            head_height_top_ratio=self.head_height_top_ratio,
            particle_count=self.particle_count,
            particle_spread=self.particle_spread,
            particle_speed=self.particle_speed,
            helmet_protections=parse_protection_table(self.helmet_protections),
            debug=self.debug,
        )


def _split_entry(entry: str) -> tuple[str, str] | None:
    # Ids are namespaced ("minecraft:iron_helmet"), so the value follows the last colon.
    item_id, sep, value = entry.strip().rpartition(":")
    if not sep or not item_id or not value:
        return None
    return item_id, value


def parse_effect_spec(entries: Iterable[str]) -> EffectSpec:
    """Parse "effect_id:duration_ticks" entries; malformed ones are skipped."""
    effects = []
    for entry in entries:
        parts = _split_entry(entry)
        if parts is None:
            logger.warning(f"Invalid effect entry in config: {entry!r}")
            continue
        effect_id, raw_duration = parts
        try:
            duration = int(raw_duration)
        except ValueError:
            logger.warning(f"Invalid effect entry in config: {entry!r}")
            continue
        effect = StatusEffect(effect_id, duration)
        if not effect.is_valid:
            logger.warning(f"Invalid effect entry in config: {entry!r}")
            continue
        effects.append(effect)
    return EffectSpec(tuple(effects))


def parse_protection_table(entries: Iterable[str]) -> ProtectionTable:
    """Parse "item_id:fraction" entries; malformed or out-of-range ones are skipped.

    The first entry for an id wins.
    """
    table: dict[str, float] = {}
    for entry in entries:
        parts = _split_entry(entry)
        if parts is None:
            logger.warning(f"Invalid helmet protection entry in config: {entry!r}")
            continue
        item_id, raw_fraction = parts
        try:
            fraction = float(raw_fraction)
        except ValueError:
            logger.warning(f"Invalid helmet protection value for {item_id}: {raw_fraction!r}")
            continue
        if not 0.0 <= fraction <= 1.0:
            logger.warning(f"Helmet protection for {item_id} out of range [0, 1]: {fraction}")
            continue
        table.setdefault(item_id, fraction)
    return ProtectionTable(table)


def load_config(source: Mapping[str, Any] | None = None) -> HeadshotConfig:
    """Build a snapshot from explicit values layered over the environment.

    Any validation failure, including an unparsable environment value, falls
    back to the built-in defaults.
    """
    try:
        config = HeadshotSettings(**dict(source or {})).to_config()
    except (ValidationError, SettingsError) as e:
        logger.error(f"Failed to load headshot configuration: {e}")
        logger.warning("Loaded default configuration values due to loading error")
        return DEFAULT_CONFIG
    logger.info("Successfully loaded headshot configuration")
    return config


def load_config_file(path: str | Path) -> HeadshotConfig:
    """Load a snapshot from a JSON object file, falling back to defaults."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read headshot configuration {path}: {e}")
        logger.warning("Loaded default configuration values due to loading error")
        return DEFAULT_CONFIG
    if not isinstance(raw, dict):
        logger.error(f"Headshot configuration {path} is not a JSON object")
        logger.warning("Loaded default configuration values due to loading error")
        return DEFAULT_CONFIG
    return load_config(raw)


class ConfigStore:
    """Holds the current snapshot; reload swaps the whole reference at once.

    Readers never lock. The lock only serializes concurrent reloads.
    """

    def __init__(self, config: HeadshotConfig | None = None) -> None:
        self._config = config if config is not None else DEFAULT_CONFIG
        self._lock = threading.Lock()

    def get(self) -> HeadshotConfig:
        return self._config

    def reload(self, source: Mapping[str, Any] | str | Path | None = None) -> HeadshotConfig:
        """Install a new snapshot from a JSON file path or a mapping of values."""
        if isinstance(source, (str, Path)):
            config = load_config_file(source)
        elif source is None or isinstance(source, Mapping):
            config = load_config(source)
        else:
            raise TypeError(f"Unsupported configuration source: {type(source).__name__}")
        with self._lock:
            self._config = config
        return config


# Global instance
config_store = ConfigStore()
