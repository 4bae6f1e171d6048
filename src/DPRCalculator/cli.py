"""
Command-line front end for the DPR calculator.

Examples:
  dpr calc --attack-bonus 9 --damage-bonus 5 --damage-dice 2d6 \\
      --crit-dice 4d6+6d8 --advantage advantage --power-attack --target-ac 15
  dpr compare --attack-bonus 7 --damage-bonus 4 --damage-dice 2d6
  dpr sweep --attack-bonus 7 --damage-dice 1d8 --ac-from 10 --ac-to 20
"""
from __future__ import annotations

import functools
import json
from typing import Any

import click
import structlog
from pydantic import ValidationError

from DPRCalculator.config import Settings, load_settings
from DPRCalculator.logging import setup_logging
from DPRCalculator.rules.dice import DiceError, DiceSet
from DPRCalculator.schemas import AttackConfig, DieSpec
from DPRCalculator.services.calculator import calculate, compare_power_attack, sweep_target_ac
from DPRCalculator.services.renderer import render_breakdown, render_comparison, render_sweep

log = structlog.get_logger()


def _dice_specs(expr: str, reroll: int = 0, min_roll: int = 1) -> tuple[DieSpec, ...]:
    return tuple(
        DieSpec(sides=d.sides, reroll=reroll, min_roll=min_roll) for d in DiceSet.parse(expr)
    )


def _attack_options(fn):
    options = [
        click.option("--name", default="", help="Label shown in the report."),
        click.option("--attack-bonus", type=int, default=1, show_default=True),
        click.option("--damage-bonus", type=int, default=1, show_default=True),
        click.option("--damage-dice", default="1d6", show_default=True, help="e.g. 2d6 or 1d8+1d6"),
        click.option("--reroll", type=int, default=0, show_default=True,
                     help="Reroll damage dice showing this value or lower, once."),
        click.option("--min-roll", type=int, default=1, show_default=True,
                     help="Treat damage dice below this value as this value."),
        click.option("--crit-dice", default=None,
                     help="Every die rolled on a crit; defaults to the damage dice doubled."),
        click.option("--advantage", default="normal", show_default=True,
                     help="normal, advantage, elven accuracy, or 1-3."),
        click.option("--power-attack/--no-power-attack", default=False,
                     help="Great Weapon Master / Sharpshooter: -5 to hit, +10 damage."),
        click.option("--crit-range", default="20", show_default=True, help="e.g. 20 or 19-20"),
        click.option("--target-ac", type=int, default=None,
                     help="Defaults to the configured default_target_ac."),
        click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON."),
    ]
    for opt in reversed(options):
        fn = opt(fn)
    return fn


def _with_config(fn):
    """Turn the shared attack options into an AttackConfig plus loaded settings."""

    @functools.wraps(fn)
    def wrapper(**kwargs: Any):
        settings = _init_settings()
        as_json = kwargs.pop("as_json")
        try:
            damage_dice = _dice_specs(kwargs.pop("damage_dice"), kwargs.pop("reroll"), kwargs.pop("min_roll"))
            crit_expr = kwargs.pop("crit_dice")
            crit_dice = _dice_specs(crit_expr) if crit_expr else None
            target_ac = kwargs.pop("target_ac")
            config = AttackConfig(
                name=kwargs.pop("name"),
                attack_bonus=kwargs.pop("attack_bonus"),
                damage_bonus=kwargs.pop("damage_bonus"),
                damage_dice=damage_dice,
                crit_dice=crit_dice,
                advantage_modifier=kwargs.pop("advantage"),
                power_attack=kwargs.pop("power_attack"),
                crit_range=kwargs.pop("crit_range"),
                target_ac=target_ac if target_ac is not None else settings.default_target_ac,
            )
        except (DiceError, ValidationError) as exc:
            raise click.UsageError(str(exc)) from exc
        return fn(config=config, settings=settings, as_json=as_json, **kwargs)

    return wrapper


def _init_settings() -> Settings:
    try:
        settings = load_settings()
    except ValidationError:
        click.echo(
            click.style("WARNING: invalid settings, continuing with defaults.", fg="yellow"),
            err=True,
        )
        settings = Settings.model_construct()
    setup_logging(settings)
    log.debug("cli.start", config=settings.model_dump())
    return settings


@click.group()
def app() -> None:
    """Expected damage per attack for D&D 5e weapon attacks."""


@app.command("calc")
@_attack_options
@_with_config
def calc_command(config: AttackConfig, settings: Settings, as_json: bool) -> None:
    result = calculate(config)
    if as_json:
        click.echo(json.dumps(result.as_dict(), indent=2))
    else:
        click.echo(render_breakdown(result, precision=settings.display_precision))


@app.command("compare")
@_attack_options
@_with_config
def compare_command(config: AttackConfig, settings: Settings, as_json: bool) -> None:
    result = compare_power_attack(config)
    if as_json:
        payload = {
            "normal": result.normal.as_dict(),
            "power_attack": result.power_attack.as_dict(),
            "gain": result.gain,
            "recommended": result.recommended,
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(render_comparison(result, precision=settings.display_precision))


@app.command("sweep")
@_attack_options
@click.option("--ac-from", type=int, default=10, show_default=True)
@click.option("--ac-to", type=int, default=20, show_default=True)
@_with_config
def sweep_command(
    config: AttackConfig, settings: Settings, as_json: bool, ac_from: int, ac_to: int
) -> None:
    if ac_to < ac_from:
        raise click.UsageError("--ac-to must not be lower than --ac-from")
    rows = sweep_target_ac(config, range(ac_from, ac_to + 1))
    if as_json:
        click.echo(json.dumps([{"target_ac": ac, **b.as_dict()} for ac, b in rows], indent=2))
    else:
        click.echo(render_sweep(rows, precision=settings.display_precision))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
