from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType


class ProtectionTable(Mapping[str, float]):
    """Read-only helmet id -> headshot protection fraction in [0, 1].

    1.0 cancels the headshot bonus entirely, 0.0 leaves it untouched.
    """

    def __init__(self, entries: Mapping[str, float] | None = None) -> None:
        table: dict[str, float] = {}
        for item_id, fraction in (entries or {}).items():
            value = float(fraction)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Protection for {item_id} out of range [0, 1]: {value}")
            table[item_id] = value
        self._table = MappingProxyType(table)

    def lookup(self, item_id: str | None) -> float:
        """Exact-match lookup; unknown or empty slots give no protection."""
        if item_id is None:
            return 0.0
        return self._table.get(item_id, 0.0)

    def __getitem__(self, item_id: str) -> float:
        return self._table[item_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __hash__(self) -> int:
        return hash(frozenset(self._table.items()))

    def __repr__(self) -> str:
        return f"ProtectionTable({dict(self._table)!r})"


def effective_multiplier(helmet_protection: float, headshot_multiplier: float) -> float:
    return headshot_multiplier * (1.0 - helmet_protection)


def compose_damage(base_damage: float, helmet_protection: float, headshot_multiplier: float) -> float:
    """Final headshot damage.

    No floor is applied: full protection (1.0) yields 0 damage, and the
    configured multiplier range keeps unprotected hits above base damage.
    """
    return base_damage * effective_multiplier(helmet_protection, headshot_multiplier)
