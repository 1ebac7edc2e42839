"""Status-effect application and particle bursts."""

import logging

import numpy as np
import pytest

from headshot.config import HeadshotConfig
from headshot.effects import (
    EffectSpec,
    ParticleBurstEmitter,
    StatusEffect,
    apply_status_effects,
    particle_burst,
)
from headshot.geom import vec3
from headshot.qualify import HeadshotContext


class RecordingApplier:
    def __init__(self, known: set[str] | None = None):
        self.known = known
        self.applied: list[tuple[str, StatusEffect]] = []

    def apply(self, target, effect: StatusEffect) -> None:
        if self.known is not None and effect.effect_id not in self.known:
            raise KeyError(effect.effect_id)
        self.applied.append((target.target_id, effect))


class RecordingWorld:
    def __init__(self):
        self.sent: list[tuple[np.ndarray, np.ndarray, float]] = []

    def send_particles(self, pos, motion, speed) -> None:
        self.sent.append((pos, motion, speed))


@pytest.fixture
def context() -> HeadshotContext:
    return HeadshotContext(
        attacker_pos=vec3(0.0, 65.62, -10.0),
        attack_direction=vec3(0.0, 0.0, 1.0),
        hit_position=vec3(0.0, 65.62, -0.25),
    )


class TestStatusEffects:
    def test_applies_in_order(self, make_target):
        target = make_target([0.0, 64.0, 0.0])
        spec = EffectSpec((StatusEffect("minecraft:blindness", 60), StatusEffect("minecraft:nausea", 40)))
        applier = RecordingApplier()

        events = apply_status_effects(target, spec, applier)

        assert [e.effect_id for _, e in applier.applied] == ["minecraft:blindness", "minecraft:nausea"]
        assert [ev["type"] for ev in events] == ["status_effect", "status_effect"]
        assert events[0]["duration"] == 60

    def test_malformed_entry_skipped(self, make_target, caplog):
        """An entry missing its duration does not stop later entries."""
        target = make_target([0.0, 64.0, 0.0])
        spec = EffectSpec(
            (
                StatusEffect("minecraft:blindness", 0),
                StatusEffect("", 20),
                StatusEffect("minecraft:nausea", 40),
            )
        )
        applier = RecordingApplier()

        with caplog.at_level(logging.WARNING, logger="headshot.effects"):
            events = apply_status_effects(target, spec, applier)

        assert [e.effect_id for _, e in applier.applied] == ["minecraft:nausea"]
        assert len(events) == 1
        assert "Invalid effect entry" in caplog.text

    def test_unknown_effect_skipped(self, make_target):
        target = make_target([0.0, 64.0, 0.0])
        spec = EffectSpec((StatusEffect("mod:missing", 20), StatusEffect("minecraft:slowness", 20)))
        applier = RecordingApplier(known={"minecraft:slowness"})

        events = apply_status_effects(target, spec, applier)

        assert [e.effect_id for _, e in applier.applied] == ["minecraft:slowness"]
        assert events[0]["effect"] == "minecraft:slowness"

    def test_empty_spec(self, make_target):
        assert apply_status_effects(make_target([0.0, 0.0, 0.0]), EffectSpec(), RecordingApplier()) == []


class TestParticles:
    def test_burst_shape_and_spread(self, context: HeadshotContext):
        rng = np.random.default_rng(0)

        positions, motions = particle_burst(context, 50, 0.5, 0.1, rng)

        assert positions.shape == (50, 3)
        assert motions.shape == (50, 3)
        assert np.all(np.abs(positions - context.hit_position) <= 0.25)

    def test_burst_flies_back_toward_attacker(self, context: HeadshotContext):
        """With no spread, every particle moves opposite the attack direction."""
        positions, motions = particle_burst(context, 5, 0.0, 0.1, np.random.default_rng(0))

        assert np.allclose(positions, context.hit_position)
        assert np.allclose(motions, [0.0, 0.0, -0.1])

    def test_zero_count(self, context: HeadshotContext):
        positions, motions = particle_burst(context, 0, 0.5, 0.1, np.random.default_rng(0))
        assert positions.shape == (0, 3)
        assert motions.shape == (0, 3)

    def test_burst_is_deterministic_for_seed(self, context: HeadshotContext):
        a = particle_burst(context, 10, 0.5, 0.1, np.random.default_rng(7))
        b = particle_burst(context, 10, 0.5, 0.1, np.random.default_rng(7))
        assert np.array_equal(a[0], b[0])
        assert np.array_equal(a[1], b[1])

    def test_emitter_sends_configured_count(self, context: HeadshotContext):
        world = RecordingWorld()
        emitter = ParticleBurstEmitter(rng=np.random.default_rng(1))

        emitter.emit(world, context, HeadshotConfig(particle_count=12))

        assert len(world.sent) == 12

    def test_emitter_without_world_is_noop(self, context: HeadshotContext, config: HeadshotConfig):
        ParticleBurstEmitter().emit(None, context, config)
