from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .geom import AABB, as_vec3

if TYPE_CHECKING:
    from .config import HeadshotConfig


@dataclass(frozen=True, eq=False)
class TargetPose:
    pos: np.ndarray  # float64[3], feet position (bottom center of the bounding box)
    eye_height: float  # above pos
    bb_width: float
    bb_height: float


@dataclass
class TargetState:
    """Snapshot of the entity being hit, as handed over by the host."""

    target_id: str
    pose: TargetPose
    head_item: str | None = None  # Equipment id in the head slot, None when empty


def build_head_box(pose: TargetPose, config: HeadshotConfig) -> AABB:
    """
    Head volume around eye level, scaled by the target's own width.

    The width is capped by max_head_width so wide mobs keep a head-sized box.
    Bottom and top extents are split around the eye line by the configured
    ratios, so the box may sit asymmetrically (default: a third below, the
    rest above).
    """
    pos = as_vec3(pose.pos)
    width = min(pose.bb_width, config.max_head_width)
    half = width / 2
    eye_y = pos[1] + pose.eye_height

    return AABB.from_bounds(
        pos[0] - half,
        eye_y - width * config.head_height_bottom_ratio,
        pos[2] - half,
        pos[0] + half,
        eye_y + config.head_height_ratio * config.head_height_top_ratio,
        pos[2] + half,
    )
