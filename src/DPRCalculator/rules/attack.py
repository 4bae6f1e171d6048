# rules/attack.py

from __future__ import annotations

from dataclasses import dataclass

from .dice import DiceSet
from .probability import p_crit, p_hit
from .types import DamageBreakdown

# Great Weapon Master / Sharpshooter trade-off.
POWER_ATTACK_PENALTY = 5
POWER_ATTACK_BONUS = 10


@dataclass(frozen=True)
class Attack:
    """A D&D 5e weapon attack and its expected damage per attack.

    crit_dice holds every die rolled on a critical hit (e.g. 4d6 for a
    greatsword plus 6d8 for a smite kept for crits), not only the extra ones.
    """

    name: str
    attack_bonus: int
    damage_bonus: int
    damage_dice: DiceSet
    crit_dice: DiceSet
    advantage_modifier: int = 1  # 1 normal, 2 advantage, 3 elven accuracy
    power_attack: bool = False
    crit_range: int = 20  # 19 crits on 19-20
    target_ac: int = 12

    def effective_attack_bonus(self) -> int:
        if self.power_attack:
            return self.attack_bonus - POWER_ATTACK_PENALTY
        return self.attack_bonus

    def effective_damage_bonus(self) -> int:
        if self.power_attack:
            return self.damage_bonus + POWER_ATTACK_BONUS
        return self.damage_bonus

    def hit_probability(self) -> float:
        return p_hit(self.target_ac, self.effective_attack_bonus(), self.advantage_modifier)

    def crit_probability(self) -> float:
        return p_crit(self.crit_range, self.advantage_modifier)

    def average_from_dice(self) -> float:
        """Dice damage weighted by the chance to hit.

        65% to hit with a greatsword and advantage: (1 - 0.35 ** 2) * 7 = 6.1425.
        """
        return self.hit_probability() * self.damage_dice.average_rolls()

    def average_from_bonus(self) -> float:
        return self.hit_probability() * self.effective_damage_bonus()

    def average_from_crit_factor(self) -> float:
        """Per-attack damage contributed by crits on top of a normal hit.

        This is not the average damage of a critical hit: only the dice a crit
        adds beyond damage_dice are counted, weighted by the chance to crit.
        """
        extra = self.crit_dice.average_rolls() - self.damage_dice.average_rolls()
        return self.crit_probability() * extra

    def average_total(self) -> float:
        return self.average_from_dice() + self.average_from_bonus() + self.average_from_crit_factor()

    def breakdown(self) -> DamageBreakdown:
        from_dice = self.average_from_dice()
        from_bonus = self.average_from_bonus()
        from_crit = self.average_from_crit_factor()
        return DamageBreakdown(
            name=self.name,
            effective_attack_bonus=self.effective_attack_bonus(),
            effective_damage_bonus=self.effective_damage_bonus(),
            hit_probability=self.hit_probability(),
            crit_probability=self.crit_probability(),
            average_from_dice=from_dice,
            average_from_bonus=from_bonus,
            average_from_crit_factor=from_crit,
            average_total=from_dice + from_bonus + from_crit,
        )
