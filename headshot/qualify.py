from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .geom import AABB, as_vec3, is_zero


@dataclass(frozen=True, eq=False)
class HeadshotContext:
    attacker_pos: np.ndarray  # float64[3]
    attack_direction: np.ndarray  # float64[3], unit length
    hit_position: np.ndarray  # float64[3], entry point into the head box

    def __post_init__(self) -> None:
        for name in ("attacker_pos", "attack_direction", "hit_position"):
            value = getattr(self, name)
            if value is None:
                raise ValueError(f"HeadshotContext.{name} cannot be None")
            object.__setattr__(self, name, as_vec3(value))


def qualify(
    origin: np.ndarray,
    direction: np.ndarray,
    head_box: AABB,
    max_distance: float,
) -> HeadshotContext | None:
    """
    Clip the attack ray against the head box.

    Returns None for a miss, which is the common outcome, and for a
    degenerate (zero) direction.
    """
    direction = as_vec3(direction)
    if is_zero(direction):
        return None

    origin = as_vec3(origin)
    ray_end = origin + direction * max_distance
    hit_pos = head_box.clip(origin, ray_end)
    if hit_pos is None:
        return None
    return HeadshotContext(attacker_pos=origin, attack_direction=direction, hit_position=hit_pos)
