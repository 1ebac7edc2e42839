"""Attack vector resolution for each attacker kind."""

import numpy as np
import pytest

from headshot.attacker import (
    CombatantAttacker,
    EntityAttacker,
    ProjectileAttacker,
    resolve_attack_vector,
)
from headshot.config import HeadshotConfig
from headshot.geom import vec3


class TestProjectile:
    def test_backtrack_along_velocity(self, config: HeadshotConfig):
        arrow = ProjectileAttacker(pos=vec3(0.0, 0.0, 5.0), vel=vec3(0.0, 0.0, 1.0))

        origin, direction = resolve_attack_vector(arrow, vec3(0.0, 0.0, 10.0), config)

        assert np.allclose(origin, [0.0, 0.0, 4.9])
        assert np.allclose(direction, [0.0, 0.0, 1.0])

    def test_direction_is_normalized(self, config: HeadshotConfig):
        arrow = ProjectileAttacker(pos=vec3(1.0, 2.0, 3.0), vel=vec3(3.0, 0.0, 4.0))

        _, direction = resolve_attack_vector(arrow, vec3(0.0, 0.0, 0.0), config)

        assert np.linalg.norm(direction) == pytest.approx(1.0)
        assert np.allclose(direction, [0.6, 0.0, 0.8])

    def test_zero_backtrack_keeps_position(self):
        cfg = HeadshotConfig(arrow_backtrack=0.0)
        arrow = ProjectileAttacker(pos=vec3(1.0, 2.0, 3.0), vel=vec3(0.0, -2.0, 0.0))

        origin, _ = resolve_attack_vector(arrow, vec3(0.0, 0.0, 0.0), cfg)

        assert np.allclose(origin, [1.0, 2.0, 3.0])

    def test_stationary_projectile_is_degenerate(self, config: HeadshotConfig):
        arrow = ProjectileAttacker(pos=vec3(0.0, 0.0, 5.0), vel=vec3(0.0, 0.0, 0.0))

        origin, direction = resolve_attack_vector(arrow, vec3(0.0, 0.0, 10.0), config)

        assert np.array_equal(direction, np.zeros(3))
        assert np.allclose(origin, [0.0, 0.0, 5.0])

    def test_does_not_mutate_inputs(self, config: HeadshotConfig):
        pos = vec3(0.0, 0.0, 5.0)
        vel = vec3(0.0, 0.0, 2.0)
        arrow = ProjectileAttacker(pos=pos, vel=vel)

        resolve_attack_vector(arrow, vec3(0.0, 0.0, 10.0), config)

        assert np.array_equal(pos, [0.0, 0.0, 5.0])
        assert np.array_equal(vel, [0.0, 0.0, 2.0])


class TestCombatant:
    def test_uses_eye_position_and_look(self, config: HeadshotConfig):
        player = CombatantAttacker(eye_pos=vec3(0.0, 65.62, -10.0), look=vec3(0.0, 0.0, 1.0))

        origin, direction = resolve_attack_vector(player, vec3(0.0, 64.0, 0.0), config)

        assert np.allclose(origin, [0.0, 65.62, -10.0])
        assert np.allclose(direction, [0.0, 0.0, 1.0])

    def test_look_is_normalized(self, config: HeadshotConfig):
        player = CombatantAttacker(eye_pos=vec3(0.0, 0.0, 0.0), look=vec3(0.0, 0.0, 5.0))

        _, direction = resolve_attack_vector(player, vec3(0.0, 0.0, 3.0), config)

        assert np.allclose(direction, [0.0, 0.0, 1.0])

    def test_ignores_target_position(self, config: HeadshotConfig):
        """Combatants aim where they look, not at the target."""
        player = CombatantAttacker(eye_pos=vec3(0.0, 0.0, 0.0), look=vec3(1.0, 0.0, 0.0))

        _, direction = resolve_attack_vector(player, vec3(0.0, 0.0, 3.0), config)

        assert np.allclose(direction, [1.0, 0.0, 0.0])

    def test_from_angles(self, config: HeadshotConfig):
        player = CombatantAttacker.from_angles(vec3(0.0, 1.62, 0.0), yaw_deg=0.0, pitch_deg=0.0)

        _, direction = resolve_attack_vector(player, vec3(0.0, 0.0, 3.0), config)

        assert np.allclose(direction, [0.0, 0.0, 1.0])


class TestGenericEntity:
    def test_aims_at_target_position(self, config: HeadshotConfig):
        source = EntityAttacker(pos=vec3(0.0, 64.0, -4.0))

        origin, direction = resolve_attack_vector(source, vec3(0.0, 64.0, 0.0), config)

        assert np.allclose(origin, [0.0, 64.0, -4.0])
        assert np.allclose(direction, [0.0, 0.0, 1.0])

    def test_coincident_positions_are_degenerate(self, config: HeadshotConfig):
        source = EntityAttacker(pos=vec3(1.0, 2.0, 3.0))

        _, direction = resolve_attack_vector(source, vec3(1.0, 2.0, 3.0), config)

        assert np.array_equal(direction, np.zeros(3))
