# tests/conftest.py

import logging

import pytest
import structlog

from DPRCalculator.rules.attack import Attack
from DPRCalculator.rules.dice import DiceSet, Die
from DPRCalculator.schemas import AttackConfig


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging so streams don't leak across tests."""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    logging.captureWarnings(False)
    structlog.reset_defaults()


@pytest.fixture
def two_d6() -> DiceSet:
    return DiceSet([Die(6), Die(6)])


@pytest.fixture
def smite_crit_dice() -> DiceSet:
    # 4d6 greatsword crit plus a 3rd level smite (6d8) saved for crits
    return DiceSet([Die(6)] * 4 + [Die(8)] * 6)


@pytest.fixture
def holy_attack(two_d6, smite_crit_dice) -> Attack:
    return Attack(
        name="Holy Attack",
        attack_bonus=9,
        damage_bonus=5,
        damage_dice=two_d6,
        crit_dice=smite_crit_dice,
        advantage_modifier=2,
        power_attack=True,
        crit_range=20,
        target_ac=15,
    )


@pytest.fixture
def holy_config() -> AttackConfig:
    return AttackConfig(
        name="Holy Attack",
        attack_bonus=9,
        damage_bonus=5,
        damage_dice=[{"sides": 6}, {"sides": 6}],
        crit_dice=[{"sides": 6}] * 4 + [{"sides": 8}] * 6,
        advantage_modifier=2,
        power_attack=True,
        crit_range=20,
        target_ac=15,
    )
