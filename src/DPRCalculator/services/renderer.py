from __future__ import annotations

from DPRCalculator.rules.types import DamageBreakdown
from DPRCalculator.services.calculator import PowerAttackComparison

_LABELS = (
    ("Chance to Hit", "hit_probability"),
    ("Damage From Dice", "average_from_dice"),
    ("Damage From Bonus", "average_from_bonus"),
    ("Damage From Crit Factor", "average_from_crit_factor"),
    ("Damage Total", "average_total"),
)
_WIDTH = max(len(label) for label, _ in _LABELS)


def _fmt(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def render_breakdown(b: DamageBreakdown, *, precision: int = 3) -> str:
    lines = []
    if b.name:
        lines.append(b.name)
    for label, attr in _LABELS:
        lines.append(f"{label:>{_WIDTH}}: {_fmt(getattr(b, attr), precision)}")
    return "\n".join(lines)


def render_comparison(c: PowerAttackComparison, *, precision: int = 3) -> str:
    verdict = "use power attack" if c.recommended else "skip power attack"
    return "\n".join(
        [
            f"{'Without':>{_WIDTH}}: {_fmt(c.normal.average_total, precision)}",
            f"{'With':>{_WIDTH}}: {_fmt(c.power_attack.average_total, precision)}",
            f"{'Gain':>{_WIDTH}}: {c.gain:+.{precision}f} ({verdict})",
        ]
    )


def render_sweep(rows: list[tuple[int, DamageBreakdown]], *, precision: int = 3) -> str:
    out = ["  AC  to-hit    total"]
    for ac, b in rows:
        out.append(f"{ac:>4}  {b.hit_probability:>6.2f}  {_fmt(b.average_total, precision):>7}")
    return "\n".join(out)
