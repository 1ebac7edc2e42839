from .attacker import CombatantAttacker, EntityAttacker, ProjectileAttacker
from .config import DEFAULT_CONFIG, HeadshotConfig
from .hitbox import TargetPose, TargetState
from .system import DamageEvent, HeadshotSystem

__all__ = [
    "DEFAULT_CONFIG",
    "CombatantAttacker",
    "DamageEvent",
    "EntityAttacker",
    "HeadshotConfig",
    "HeadshotSystem",
    "ProjectileAttacker",
    "TargetPose",
    "TargetState",
]
