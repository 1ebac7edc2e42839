import numpy as np
import pytest

from headshot.config import HeadshotConfig
from headshot.hitbox import TargetPose, TargetState


@pytest.fixture
def config() -> HeadshotConfig:
    return HeadshotConfig()


@pytest.fixture
def make_target():
    def _make(
        pos: list,
        eye_height: float = 1.62,
        bb_width: float = 0.6,
        bb_height: float = 1.8,
        head_item: str | None = None,
        tid: str = "zombie",
    ) -> TargetState:
        pose = TargetPose(
            pos=np.array(pos, dtype=np.float64),
            eye_height=eye_height,
            bb_width=bb_width,
            bb_height=bb_height,
        )
        return TargetState(target_id=tid, pose=pose, head_item=head_item)

    return _make
