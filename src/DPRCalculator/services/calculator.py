from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from DPRCalculator.rules.engine import Dnd5eRuleset, Ruleset
from DPRCalculator.rules.types import DamageBreakdown
from DPRCalculator.schemas import AttackConfig

log = structlog.get_logger()


@dataclass(frozen=True)
class PowerAttackComparison:
    normal: DamageBreakdown
    power_attack: DamageBreakdown

    @property
    def gain(self) -> float:
        """Expected damage gained (negative: lost) by taking the power attack."""
        return self.power_attack.average_total - self.normal.average_total

    @property
    def recommended(self) -> bool:
        return self.gain > 0


def calculate(config: AttackConfig, *, ruleset: Ruleset | None = None) -> DamageBreakdown:
    rs = ruleset or Dnd5eRuleset()
    result = rs.evaluate(config)
    log.debug(
        "calculator.evaluate",
        name=config.name,
        target_ac=config.target_ac,
        hit_probability=result.hit_probability,
        average_total=result.average_total,
    )
    return result


def compare_power_attack(
    config: AttackConfig, *, ruleset: Ruleset | None = None
) -> PowerAttackComparison:
    rs = ruleset or Dnd5eRuleset()
    normal = calculate(config.model_copy(update={"power_attack": False}), ruleset=rs)
    power = calculate(config.model_copy(update={"power_attack": True}), ruleset=rs)
    out = PowerAttackComparison(normal=normal, power_attack=power)
    log.debug("calculator.compare_power_attack", name=config.name, gain=out.gain)
    return out


def sweep_target_ac(
    config: AttackConfig, ac_values: Iterable[int], *, ruleset: Ruleset | None = None
) -> list[tuple[int, DamageBreakdown]]:
    """Evaluate the same attack against each target AC in order."""
    rs = ruleset or Dnd5eRuleset()
    return [
        (ac, calculate(config.model_copy(update={"target_ac": ac}), ruleset=rs))
        for ac in ac_values
    ]
