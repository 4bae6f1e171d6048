import dataclasses

import pytest

from DPRCalculator.rules.attack import Attack
from DPRCalculator.rules.dice import DiceSet, Die
from DPRCalculator.rules.types import DamageBreakdown


def test_effective_bonuses_with_power_attack(holy_attack):
    assert holy_attack.effective_attack_bonus() == 4
    assert holy_attack.effective_damage_bonus() == 15


def test_effective_bonuses_without_power_attack(holy_attack):
    plain = dataclasses.replace(holy_attack, power_attack=False)
    assert plain.effective_attack_bonus() == 9
    assert plain.effective_damage_bonus() == 5


def test_holy_attack_worked_example(holy_attack):
    assert holy_attack.hit_probability() == pytest.approx(0.75)
    assert holy_attack.crit_probability() == pytest.approx(0.0975)
    assert holy_attack.average_from_dice() == pytest.approx(5.25)
    assert holy_attack.average_from_bonus() == pytest.approx(11.25)
    assert holy_attack.average_from_crit_factor() == pytest.approx(3.315)
    assert holy_attack.average_total() == pytest.approx(19.815)


def test_crit_factor_counts_only_extra_dice():
    # Greatsword with advantage at 65%, crit 19-20, smite kept for crits
    attack = Attack(
        name="GS",
        attack_bonus=7,
        damage_bonus=0,
        damage_dice=DiceSet([Die(6), Die(6)]),
        crit_dice=DiceSet([Die(6)] * 4 + [Die(8)] * 6),
        advantage_modifier=2,
        power_attack=False,
        crit_range=19,
        target_ac=15,
    )
    assert attack.average_from_dice() == pytest.approx(6.1425)
    assert attack.average_from_crit_factor() == pytest.approx(0.19 * 34)


def test_crit_dice_equal_to_damage_dice_adds_nothing(two_d6):
    attack = Attack("flat", 5, 3, two_d6, two_d6)
    assert attack.average_from_crit_factor() == 0.0


def test_elven_accuracy_beats_advantage(holy_attack):
    elven = dataclasses.replace(holy_attack, advantage_modifier=3)
    assert elven.average_total() > holy_attack.average_total()


def test_queries_are_idempotent(holy_attack):
    first = (
        holy_attack.average_from_dice(),
        holy_attack.average_from_bonus(),
        holy_attack.average_from_crit_factor(),
        holy_attack.average_total(),
    )
    second = (
        holy_attack.average_from_dice(),
        holy_attack.average_from_bonus(),
        holy_attack.average_from_crit_factor(),
        holy_attack.average_total(),
    )
    assert first == second


def test_attack_is_immutable(holy_attack):
    with pytest.raises(dataclasses.FrozenInstanceError):
        holy_attack.target_ac = 20  # type: ignore[misc]


def test_breakdown_matches_queries(holy_attack):
    b = holy_attack.breakdown()
    assert isinstance(b, DamageBreakdown)
    assert b.name == "Holy Attack"
    assert b.effective_attack_bonus == 4
    assert b.effective_damage_bonus == 15
    assert b.average_from_dice == holy_attack.average_from_dice()
    assert b.average_from_bonus == holy_attack.average_from_bonus()
    assert b.average_from_crit_factor == holy_attack.average_from_crit_factor()
    assert b.average_total == holy_attack.average_total()
    assert b.as_dict()["average_total"] == pytest.approx(19.815)
