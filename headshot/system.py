"""Damage-event pipeline: resolve aim, build the head box, qualify, compose damage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .attacker import Attacker, resolve_attack_vector
from .damage import compose_damage, effective_multiplier
from .effects import apply_status_effects
from .hitbox import TargetState, build_head_box
from .qualify import HeadshotContext, qualify
from .settings import ConfigStore, config_store

if TYPE_CHECKING:
    import numpy as np

    from .config import HeadshotConfig
    from .effects import ParticleEmitter, StatusEffectApplier
    from .geom import AABB

logger = logging.getLogger(__name__)


@dataclass
class DamageEvent:
    """A pending hit from the host's damage dispatcher.

    `damage` is overwritten in place when the hit qualifies as a headshot.
    """

    target: TargetState | None
    attacker: Attacker | None
    damage: float
    world: Any = None


def calculate_headshot(
    target: TargetState | None, attacker: Attacker | None, config: HeadshotConfig
) -> HeadshotContext | None:
    if target is None or attacker is None:
        logger.debug("Null target or attacker in headshot calculation")
        return None

    origin, direction = resolve_attack_vector(attacker, target.pose.pos, config)
    head_box = build_head_box(target.pose, config)
    context = qualify(origin, direction, head_box, config.ray_trace_distance)

    if config.debug:
        _log_detection(target, attacker, head_box, origin, direction, context)
    return context


class HeadshotSystem:
    """
    Applies headshot damage and effects to damage events.

    Stateless per event: the only shared state is the config snapshot, read
    once per event from the store, so events may be evaluated concurrently.
    """

    def __init__(
        self,
        store: ConfigStore | None = None,
        *,
        emitter: ParticleEmitter | None = None,
        applier: StatusEffectApplier | None = None,
    ) -> None:
        self.store = store if store is not None else config_store
        self.emitter = emitter
        self.applier = applier

    def on_damage(self, event: DamageEvent | None) -> list[dict]:
        if event is None or event.attacker is None or event.target is None:
            return []

        config = self.store.get()
        context = calculate_headshot(event.target, event.attacker, config)
        if context is None:
            return []
        return self._apply_headshot(event, event.target, context, config)

    def _apply_headshot(
        self,
        event: DamageEvent,
        target: TargetState,
        context: HeadshotContext,
        config: HeadshotConfig,
    ) -> list[dict]:
        original_damage = event.damage
        protection = config.helmet_protections.lookup(target.head_item)
        multiplier = effective_multiplier(protection, config.headshot_multiplier)
        event.damage = compose_damage(original_damage, protection, config.headshot_multiplier)

        events: list[dict] = [
            {
                "type": "headshot",
                "target": target.target_id,
                "attacker": event.attacker.entity_id,
                "pos": [float(v) for v in context.hit_position],
                "original_damage": float(original_damage),
                "damage": float(event.damage),
                "helmet": target.head_item,
                "protection": protection,
            }
        ]

        if config.enable_headshot_effects and self.applier is not None:
            events.extend(apply_status_effects(target, config.headshot_effects, self.applier))

        if self.emitter is not None:
            self.emitter.emit(event.world, context, config)

        if config.debug:
            logger.debug("HEADSHOT CONFIRMED!")
            logger.debug(f"Hit Position: {context.hit_position.tolist()}")
            logger.debug(
                f"Headshot applied - Original damage: {original_damage}, Helmet protection: {protection}, "
                f"Final multiplier: {multiplier}, New damage: {event.damage}"
            )
        return events


def _log_detection(
    target: TargetState,
    attacker: Attacker,
    head_box: AABB,
    origin: np.ndarray,
    direction: np.ndarray,
    context: HeadshotContext | None,
) -> None:
    logger.debug("=== Headshot Detection Debug ===")
    logger.debug(f"Target: {target.target_id}")
    logger.debug(f"Attacker: {attacker.entity_id}")
    logger.debug(f"Head Hitbox - Min: {head_box.min.tolist()}, Max: {head_box.max.tolist()}")
    logger.debug(f"Attack Vector - From: {origin.tolist()}, Direction: {direction.tolist()}")
    hit = context.hit_position.tolist() if context is not None else "No hit"
    logger.debug(f"Hit Result: {hit}")
