from typing import TYPE_CHECKING, Protocol

from .attack import Attack
from .types import DamageBreakdown

if TYPE_CHECKING:
    from DPRCalculator.schemas import AttackConfig


class Ruleset(Protocol):
    """
    Defines the interface for a game system's damage math, abstracting away
    how calculator input becomes an attack and its expected damage.
    """
    def build_attack(self, config: "AttackConfig") -> Attack:
        ...

    def evaluate(self, config: "AttackConfig") -> DamageBreakdown:
        ...


class Dnd5eRuleset:
    """
    D&D 5e implementation of the Ruleset interface.
    """
    def build_attack(self, config: "AttackConfig") -> Attack:
        return config.to_attack()

    def evaluate(self, config: "AttackConfig") -> DamageBreakdown:
        return self.build_attack(config).breakdown()
