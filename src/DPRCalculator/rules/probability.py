# rules/probability.py

# A natural 20 always hits and a natural 1 always misses; both extremes
# collapse to this per-roll chance.
NATURAL_ROLL_CHANCE = 0.05


def p_hit(target_ac: int, attack_bonus: int, advantage_modifier: int = 1) -> float:
    """Probability to hit given the target's AC, the attack bonus and the number of d20s kept-best.

    For example, +7 against AC 15 is a single-roll chance of 0.65; with
    advantage that becomes 1 - (1 - 0.65) ** 2 = 0.8775.
    """
    diff = target_ac - attack_bonus
    if diff >= 20 or diff <= 2:
        single = NATURAL_ROLL_CHANCE
    else:
        single = (21 + attack_bonus - target_ac) / 20
    return 1 - (1 - single) ** advantage_modifier


def p_crit(crit_range: int, advantage_modifier: int = 1) -> float:
    """Probability of a critical hit given the lowest critting d20 face."""
    single = (21 - crit_range) / 20
    return 1 - (1 - single) ** advantage_modifier
