"""Post-hit collaborators: status effects and the headshot particle burst."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from .constants import PARTICLE_SPEED_JITTER

if TYPE_CHECKING:
    from .config import HeadshotConfig
    from .hitbox import TargetState
    from .qualify import HeadshotContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusEffect:
    effect_id: str  # Namespaced id, e.g. "minecraft:blindness"
    duration_ticks: int

    @property
    def is_valid(self) -> bool:
        return bool(self.effect_id) and self.duration_ticks > 0


@dataclass(frozen=True)
class EffectSpec:
    """Ordered status effects applied to a target after a headshot."""

    entries: tuple[StatusEffect, ...] = ()

    def __iter__(self) -> Iterator[StatusEffect]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class StatusEffectApplier(Protocol):
    def apply(self, target: TargetState, effect: StatusEffect) -> None:
        """Apply one effect; raises KeyError for ids the host does not know."""
        ...


class ParticleSink(Protocol):
    def send_particles(self, pos: np.ndarray, motion: np.ndarray, speed: float) -> None: ...


class ParticleEmitter(Protocol):
    def emit(self, world: Any, context: HeadshotContext, config: HeadshotConfig) -> None: ...


def apply_status_effects(
    target: TargetState, effects: Iterable[StatusEffect], applier: StatusEffectApplier
) -> list[dict]:
    """Apply each effect in order, skipping malformed or unknown ones."""
    events = []
    for effect in effects:
        if not effect.is_valid:
            logger.warning(f"Invalid effect entry skipped: {effect}")
            continue
        try:
            applier.apply(target, effect)
        except (KeyError, ValueError) as e:
            logger.warning(f"Could not apply effect {effect.effect_id}: {e}")
            continue
        events.append(
            {
                "type": "status_effect",
                "target": target.target_id,
                "effect": effect.effect_id,
                "duration": effect.duration_ticks,
            }
        )
    return events


def particle_burst(
    context: HeadshotContext,
    count: int,
    spread: float,
    speed: float,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Positions and motions for a burst at the hit point.

    Particles fly back toward the attacker (opposite the attack direction),
    each jittered uniformly within +/- spread/2 per axis.

    Returns: (positions float64[count, 3], motions float64[count, 3])
    """
    if count <= 0:
        empty = np.zeros((0, 3), dtype=np.float64)
        return empty, empty.copy()

    jitter = (rng.random((count, 3)) - 0.5) * spread
    base_motion = context.attack_direction * -speed
    positions = context.hit_position[None, :] + jitter
    motions = base_motion[None, :] + jitter
    return positions, motions


class ParticleBurstEmitter:
    """Default emitter: sends one particle per burst slot to the world."""

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def emit(self, world: ParticleSink | None, context: HeadshotContext, config: HeadshotConfig) -> None:
        if world is None:
            return
        positions, motions = particle_burst(
            context, config.particle_count, config.particle_spread, config.particle_speed, self.rng
        )
        for pos, motion in zip(positions, motions):
            world.send_particles(pos, motion, PARTICLE_SPEED_JITTER)
