# rules/dice.py

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

_TERM_RE = re.compile(r"^(?P<count>\d+)?d(?P<sides>\d+)$")


class DiceError(ValueError):
    """Raised for malformed die parameters or dice expressions."""


def triangular(n: int) -> float:
    """T(N) = 1 + 2 + ... + N."""
    return (n**2 + n) / 2


@dataclass(frozen=True)
class Die:
    """Long-run average of one die with an optional reroll-once rule and a floor.

    reroll: any roll <= reroll is rerolled once and the second result kept (0 = off).
    min_roll: any kept roll below min_roll counts as min_roll.
    """

    sides: int
    reroll: int = 0
    min_roll: int = 1

    def __post_init__(self) -> None:
        if self.sides < 0:
            raise DiceError(f"sides must be >= 0, got {self.sides}")
        if self.reroll < 0:
            raise DiceError(f"reroll must be >= 0, got {self.reroll}")
        if self.min_roll < 1:
            raise DiceError(f"min_roll must be >= 1, got {self.min_roll}")

    def average_roll(self) -> float:
        S, R, M = self.sides, self.reroll, self.min_roll
        # A zero-sided die never contributes damage.
        if S == 0:
            return 0.0
        if R == 0:
            return (triangular(S) + triangular(M - 1)) / S
        avg_no_reroll = Die(S, 0, M).average_roll()
        if R > M:
            return (
                triangular(S)
                + triangular(M - 1)
                - R * M
                - triangular(R)
                + R * avg_no_reroll
            ) / S
        return (triangular(S) + triangular(M - 1) - R * M + R * avg_no_reroll) / S


def _to_die(entry: Any) -> Die:
    """Coerce a die, tuple, mapping or spec-like object into a Die.

    Opaque ids carried by UI entries are dropped here.
    """
    if isinstance(entry, Die):
        return entry
    if isinstance(entry, int):
        return Die(entry)
    if isinstance(entry, tuple | list):
        if not 1 <= len(entry) <= 4:
            raise DiceError(f"expected (sides, reroll, min_roll[, id]), got {entry!r}")
        sides, *rest = entry
        reroll = rest[0] if len(rest) > 0 else 0
        min_roll = rest[1] if len(rest) > 1 else 1
        return Die(int(sides), int(reroll), int(min_roll))
    if isinstance(entry, Mapping):
        return Die(
            int(entry["sides"]),
            int(entry.get("reroll", entry.get("rerollThreshold", 0))),
            int(entry.get("min_roll", entry.get("minRoll", 1))),
        )
    if hasattr(entry, "sides"):
        return Die(
            int(entry.sides),
            int(getattr(entry, "reroll", 0)),
            int(getattr(entry, "min_roll", 1)),
        )
    raise DiceError(f"cannot build a die from {entry!r}")


@dataclass(frozen=True, init=False)
class DiceSet:
    dice: tuple[Die, ...] = ()

    def __init__(self, dice: Iterable[Any] = ()) -> None:
        object.__setattr__(self, "dice", tuple(_to_die(d) for d in dice))

    @classmethod
    def parse(cls, expr: str) -> DiceSet:
        """Build a set from an expression such as '2d6' or '4d6+6d8'."""
        text = expr.replace(" ", "").lower()
        if not text:
            return cls()
        dice: list[Die] = []
        for term in text.split("+"):
            m = _TERM_RE.match(term)
            if not m:
                raise DiceError(f"Bad dice expression: {expr}")
            count = int(m.group("count") or 1)
            sides = int(m.group("sides"))
            dice.extend(Die(sides) for _ in range(count))
        return cls(dice)

    def average_rolls(self) -> float:
        return sum((d.average_roll() for d in self.dice), 0.0)

    def get_die(self, n: int) -> Die:
        return self.dice[n]

    def add_die(self, die: Die) -> DiceSet:
        """Return a new set with ``die`` appended."""
        return DiceSet((*self.dice, die))

    def sides(self) -> list[int]:
        return [d.sides for d in self.dice]

    def __getitem__(self, n: int) -> Die:
        return self.dice[n]

    def __len__(self) -> int:
        return len(self.dice)

    def __iter__(self) -> Iterator[Die]:
        return iter(self.dice)


def default_crit_dice(dice_set: DiceSet) -> DiceSet:
    """Double the dice for a crit: side counts only, the whole sequence twice."""
    n = len(dice_set)
    return DiceSet(Die(dice_set[i % n].sides) for i in range(n * 2))
