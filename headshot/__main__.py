# headshot/__main__.py
"""Entry point: python -m headshot"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any

from .attacker import CombatantAttacker
from .config import HeadshotConfig
from .constants import HUMANOID_BB_HEIGHT, HUMANOID_BB_WIDTH, HUMANOID_EYE_HEIGHT
from .geom import as_vec3
from .hitbox import TargetPose, TargetState
from .settings import ConfigStore
from .system import DamageEvent, HeadshotSystem


def config_to_dict(config: HeadshotConfig) -> dict[str, Any]:
    out = {}
    for f in dataclasses.fields(config):
        value = getattr(config, f.name)
        if f.name == "headshot_effects":
            value = [f"{e.effect_id}:{e.duration_ticks}" for e in value]
        elif f.name == "helmet_protections":
            value = dict(value)
        out[f.name] = value
    return out


def run_shot(args: argparse.Namespace, store: ConfigStore) -> list[dict]:
    pose = TargetPose(
        pos=as_vec3(args.target),
        eye_height=HUMANOID_EYE_HEIGHT,
        bb_width=HUMANOID_BB_WIDTH,
        bb_height=HUMANOID_BB_HEIGHT,
    )
    target = TargetState(target_id="target", pose=pose, head_item=args.helmet)
    attacker = CombatantAttacker(eye_pos=as_vec3(args.attacker), look=as_vec3(args.look))
    event = DamageEvent(target=target, attacker=attacker, damage=args.damage)

    events = HeadshotSystem(store).on_damage(event)
    if not events:
        events = [{"type": "hit", "target": target.target_id, "damage": float(event.damage)}]
    return events


def main(argv: list[str] | None = None) -> None:
    # Accepted before or after the subcommand; SUPPRESS keeps a subcommand
    # from resetting a value given at the top level.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--file", type=Path, default=argparse.SUPPRESS, help="JSON settings file")
    common.add_argument("--verbose", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging")

    parser = argparse.ArgumentParser(description="Headshot damage evaluator", parents=[common])
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("config", parents=[common], help="Print the effective configuration snapshot")

    shot = sub.add_parser("shot", parents=[common], help="Evaluate one combatant hit against a humanoid")
    shot.add_argument("--target", type=float, nargs=3, required=True, metavar=("X", "Y", "Z"))
    shot.add_argument("--attacker", type=float, nargs=3, required=True, metavar=("X", "Y", "Z"))
    shot.add_argument("--look", type=float, nargs=3, required=True, metavar=("X", "Y", "Z"))
    shot.add_argument("--damage", type=float, default=1.0)
    shot.add_argument("--helmet", type=str, default=None)

    args = parser.parse_args(argv)
    settings_file = getattr(args, "file", None)
    verbose = getattr(args, "verbose", False)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    store = ConfigStore()
    config = store.reload(settings_file)

    if args.command == "config":
        print(json.dumps(config_to_dict(config), indent=2))
    else:
        print(json.dumps(run_shot(args, store), indent=2))


if __name__ == "__main__":
    main()
