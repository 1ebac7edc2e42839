from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numba
import numpy as np

from .constants import AXIS_PARALLEL_EPS, NORMALIZE_EPS


def vec3(x: float, y: float, z: float) -> np.ndarray:
    return np.asarray([x, y, z], dtype=np.float64)


def as_vec3(v) -> np.ndarray:
    # Always copies so callers' arrays are never aliased.
    return np.array(v, dtype=np.float64).reshape(3)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v, or the zero vector when v is too short to orient."""
    v = np.asarray(v, dtype=np.float64)
    n = float(np.linalg.norm(v))
    if n < NORMALIZE_EPS:
        return np.zeros(3, dtype=np.float64)
    return v / n


def is_zero(v: np.ndarray) -> bool:
    return float(np.dot(v, v)) < NORMALIZE_EPS * NORMALIZE_EPS


def look_vector(yaw_deg: float, pitch_deg: float) -> np.ndarray:
    # Yaw 0 faces +Z, yaw 90 faces -X; positive pitch looks down.
    yaw = math.radians(yaw_deg)
    pitch = math.radians(pitch_deg)
    cp = math.cos(pitch)
    return vec3(-math.sin(yaw) * cp, -math.sin(pitch), math.cos(yaw) * cp)


def _clip_segment_pure(
    box_min: np.ndarray,
    box_max: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
) -> Tuple[bool, float]:
    """
    Pure-Python slab clip of segment [start, end] against a box.

    Boundaries are inclusive: touching a face or edge counts as entering.
    A segment starting inside the box never enters it.

    Returns: (hit, t) with the entry point at start + t * (end - start).
             If no hit, t is -1.
    """
    t_enter = -1e30
    t_exit = 1e30

    for axis in range(3):
        s = start[axis]
        d = end[axis] - s
        lo = box_min[axis]
        hi = box_max[axis]
        if abs(d) <= AXIS_PARALLEL_EPS:
            # Parallel to this slab: must already lie within it.
            if s < lo or s > hi:
                return (False, -1.0)
            continue
        t0 = (lo - s) / d
        t1 = (hi - s) / d
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > t_enter:
            t_enter = t0
        if t1 < t_exit:
            t_exit = t1
        if t_enter > t_exit:
            return (False, -1.0)

    # Start inside (or box behind): entry precedes the segment.
    if t_enter < 0.0 or t_enter > 1.0:
        return (False, -1.0)
    return (True, t_enter)


@numba.njit(cache=True)
def _clip_segment_numba(
    box_min: np.ndarray,
    box_max: np.ndarray,
    start: np.ndarray,
    end: np.ndarray,
) -> Tuple[bool, float]:
    """
    Numba JIT-compiled slab clip.

    Returns: (hit, t) with the entry point at start + t * (end - start).
             If no hit, t is -1.
    """
    t_enter = -1e30
    t_exit = 1e30

    for axis in range(3):
        s = start[axis]
        d = end[axis] - s
        lo = box_min[axis]
        hi = box_max[axis]
        if abs(d) <= AXIS_PARALLEL_EPS:
            if s < lo or s > hi:
                return (False, -1.0)
            continue
        t0 = (lo - s) / d
        t1 = (hi - s) / d
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > t_enter:
            t_enter = t0
        if t1 < t_exit:
            t_exit = t1
        if t_enter > t_exit:
            return (False, -1.0)

    if t_enter < 0.0 or t_enter > 1.0:
        return (False, -1.0)
    return (True, t_enter)


@dataclass(frozen=True, eq=False)
class AABB:
    min: np.ndarray  # float64[3]
    max: np.ndarray  # float64[3]

    def __post_init__(self) -> None:
        lo = as_vec3(self.min)
        hi = as_vec3(self.max)
        if not bool(np.all(lo <= hi)):
            raise ValueError(f"AABB min {lo.tolist()} exceeds max {hi.tolist()}")
        lo.setflags(write=False)
        hi.setflags(write=False)
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @classmethod
    def from_bounds(
        cls, min_x: float, min_y: float, min_z: float, max_x: float, max_y: float, max_z: float
    ) -> AABB:
        return cls(vec3(min_x, min_y, min_z), vec3(max_x, max_y, max_z))

    @property
    def center(self) -> np.ndarray:
        return (self.min + self.max) * 0.5

    @property
    def size(self) -> np.ndarray:
        return self.max - self.min

    def contains(self, point: np.ndarray) -> bool:
        p = np.asarray(point, dtype=np.float64)
        return bool(np.all(self.min <= p) and np.all(p <= self.max))

    def clip(self, start: np.ndarray, end: np.ndarray) -> np.ndarray | None:
        """Point where segment [start, end] first enters the box, or None."""
        s = as_vec3(start)
        e = as_vec3(end)
        hit, t = _clip_segment_numba(self.min, self.max, s, e)
        if not hit:
            return None
        return s + (e - s) * t

    def __repr__(self) -> str:
        return f"AABB(min={self.min.tolist()}, max={self.max.tolist()})"
