from __future__ import annotations

from dataclasses import dataclass, field

from .damage import ProtectionTable
from .effects import EffectSpec, StatusEffect

_DEFAULT_EFFECTS: tuple[tuple[str, int], ...] = (("minecraft:blindness", 60),)

_DEFAULT_PROTECTIONS: dict[str, float] = {
    "minecraft:leather_helmet": 0.2,
    "minecraft:chainmail_helmet": 0.4,
    "minecraft:iron_helmet": 0.6,
    "minecraft:golden_helmet": 0.3,
    "minecraft:diamond_helmet": 0.8,
    "minecraft:netherite_helmet": 1.0,
    "minecraft:turtle_helmet": 0.5,
}

# Settings-list form ("id:value") of the same defaults.
DEFAULT_HEADSHOT_EFFECTS: tuple[str, ...] = tuple(f"{eid}:{ticks}" for eid, ticks in _DEFAULT_EFFECTS)
DEFAULT_HELMET_PROTECTIONS: tuple[str, ...] = tuple(f"{iid}:{frac}" for iid, frac in _DEFAULT_PROTECTIONS.items())


def _default_effects() -> EffectSpec:
    return EffectSpec(tuple(StatusEffect(eid, ticks) for eid, ticks in _DEFAULT_EFFECTS))


def _default_protections() -> ProtectionTable:
    return ProtectionTable(_DEFAULT_PROTECTIONS)


@dataclass(frozen=True)
class HeadshotConfig:
    """Immutable snapshot of every headshot tunable.

    A snapshot is valid until the next reload; the pipeline takes it as an
    explicit argument and never reads ambient state.
    """

    # Combat
    headshot_multiplier: float = 2.0
    enable_headshot_effects: bool = False
    headshot_effects: EffectSpec = field(default_factory=_default_effects)

    # Detection
    ray_trace_distance: float = 32.0
    arrow_backtrack: float = 0.1  # Projectile overshoot correction, blocks.

    # Hitbox
    max_head_width: float = 0.5
    head_height_ratio: float = 0.5
    head_height_bottom_ratio: float = 1.0 / 3.0
    head_height_top_ratio: float = 2.0 / 3.0

    # Particles (hints for the effect emitter)
    particle_count: int = 20
    particle_spread: float = 0.5
    particle_speed: float = 0.1

    helmet_protections: ProtectionTable = field(default_factory=_default_protections)

    debug: bool = False


DEFAULT_CONFIG = HeadshotConfig()
