from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DamageBreakdown:
    name: str
    effective_attack_bonus: int
    effective_damage_bonus: int
    hit_probability: float
    crit_probability: float
    average_from_dice: float
    average_from_bonus: float
    average_from_crit_factor: float
    average_total: float

    def as_dict(self) -> dict:
        return asdict(self)
