from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np

from .geom import as_vec3, look_vector, normalize

if TYPE_CHECKING:
    from .config import HeadshotConfig


@dataclass(frozen=True, eq=False)
class ProjectileAttacker:
    """A thrown or fired projectile (arrow, bolt) that made contact this tick."""

    pos: np.ndarray  # float64[3], position on the tick the collision was detected
    vel: np.ndarray  # float64[3], per-tick motion
    entity_id: str = "projectile"

    def aim(self, target_pos: np.ndarray, config: HeadshotConfig) -> tuple[np.ndarray, np.ndarray]:
        # Step back along the flight path: discrete movement overshoots the
        # target on the tick the collision is detected.
        direction = normalize(self.vel)
        origin = as_vec3(self.pos) - direction * config.arrow_backtrack
        return origin, direction


@dataclass(frozen=True, eq=False)
class CombatantAttacker:
    """A living attacker with eyes and a look direction (melee, hitscan)."""

    eye_pos: np.ndarray  # float64[3]
    look: np.ndarray  # float64[3]
    entity_id: str = "combatant"

    @classmethod
    def from_angles(
        cls, eye_pos: np.ndarray, yaw_deg: float, pitch_deg: float, entity_id: str = "combatant"
    ) -> CombatantAttacker:
        return cls(eye_pos=as_vec3(eye_pos), look=look_vector(yaw_deg, pitch_deg), entity_id=entity_id)

    def aim(self, target_pos: np.ndarray, config: HeadshotConfig) -> tuple[np.ndarray, np.ndarray]:
        return as_vec3(self.eye_pos), normalize(self.look)


@dataclass(frozen=True, eq=False)
class EntityAttacker:
    """Any other damage source; aims straight at the target's feet position."""

    pos: np.ndarray  # float64[3]
    entity_id: str = "entity"

    def aim(self, target_pos: np.ndarray, config: HeadshotConfig) -> tuple[np.ndarray, np.ndarray]:
        origin = as_vec3(self.pos)
        return origin, normalize(as_vec3(target_pos) - origin)


Attacker = Union[ProjectileAttacker, CombatantAttacker, EntityAttacker]


def resolve_attack_vector(
    attacker: Attacker, target_pos: np.ndarray, config: HeadshotConfig
) -> tuple[np.ndarray, np.ndarray]:
    """
    Effective ray origin and unit aim direction for an attacker.

    A zero direction means the aim is degenerate (stationary projectile,
    attacker standing on the target) and no headshot can qualify.
    """
    return attacker.aim(target_pos, config)
