# schemas.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from DPRCalculator.rules.attack import Attack
from DPRCalculator.rules.dice import DiceSet, Die, default_crit_dice

ADVANTAGE_LABELS: dict[str, int] = {
    "normal": 1,
    "advantage": 2,
    "elven accuracy": 3,
}


class DieSpec(BaseModel):
    """One row of a dice list as edited by a UI.

    ``id`` is list bookkeeping only and never reaches the engine.
    """

    sides: int = Field(ge=0)
    reroll: int = Field(default=0, ge=0, alias="rerollThreshold")
    min_roll: int = Field(default=1, ge=1, alias="minRoll")
    id: Any = None

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    def to_die(self) -> Die:
        return Die(self.sides, self.reroll, self.min_roll)


class AttackConfig(BaseModel):
    """Immutable snapshot of the calculator form; defaults mirror the form's initial state."""

    name: str = ""
    attack_bonus: int = 1
    damage_bonus: int = 1
    power_attack: bool = Field(default=False, alias="gwmsharp")
    crit_range: int = Field(default=20, ge=1, le=20)
    advantage_modifier: int = Field(default=1, ge=1, le=3)
    target_ac: int = 12
    damage_dice: tuple[DieSpec, ...] = ()
    # None -> doubled damage dice
    crit_dice: tuple[DieSpec, ...] | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    @field_validator("crit_range", mode="before")
    @classmethod
    def parse_crit_range(cls, v: Any) -> Any:
        # Form labels look like "19-20"
        if isinstance(v, str) and "-" in v:
            low, _, high = v.partition("-")
            if high.strip() != "20":
                raise ValueError(f"crit range must end at 20: {v!r}")
            return int(low.strip())
        return v

    @field_validator("advantage_modifier", mode="before")
    @classmethod
    def parse_advantage(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip().isdigit():
            key = " ".join(v.replace("-", " ").replace("_", " ").lower().split())
            if key not in ADVANTAGE_LABELS:
                raise ValueError(f"unknown advantage label: {v!r}")
            return ADVANTAGE_LABELS[key]
        return v

    def damage_dice_set(self) -> DiceSet:
        return DiceSet(spec.to_die() for spec in self.damage_dice)

    def crit_dice_set(self) -> DiceSet:
        if self.crit_dice is None:
            return default_crit_dice(self.damage_dice_set())
        return DiceSet(spec.to_die() for spec in self.crit_dice)

    def to_attack(self) -> Attack:
        return Attack(
            name=self.name,
            attack_bonus=self.attack_bonus,
            damage_bonus=self.damage_bonus,
            damage_dice=self.damage_dice_set(),
            crit_dice=self.crit_dice_set(),
            advantage_modifier=self.advantage_modifier,
            power_attack=self.power_attack,
            crit_range=self.crit_range,
            target_ac=self.target_ac,
        )
