"""Command-line interface for rodchain."""

from __future__ import annotations

import json
import logging

import click

from rodchain.catalog import DEFAULT_CATALOG
from rodchain.config import get_settings
from rodchain.core.dimensions import DimensionalError
from rodchain.core.quantity import Quantity
from rodchain.observability import log_event, new_run_id
from rodchain.units.parse import UnitParseError, parse_unit_expr
from rodchain.units.resolve import resolve
from rodchain.version import __version__

logger = logging.getLogger(__name__)


def _parse_number(raw: str):
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        raise click.BadParameter(f"'{raw}' is not a number", param_hint="VALUE") from None


@click.group()
@click.version_option(__version__, prog_name="rodchain")
@click.option("--verbose", is_flag=True, help="Log engine activity at DEBUG level.")
def cli(verbose: bool) -> None:
    """rodchain unit conversion tools."""

    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    new_run_id()


@cli.command()
@click.argument("value")
@click.argument("from_unit")
@click.argument("to_unit")
@click.option("--json", "as_json", is_flag=True, help="Emit structured JSON.")
@click.option("--precision", type=int, default=None, help="Decimal places in text output.")
def convert(value: str, from_unit: str, to_unit: str, as_json: bool, precision: int | None) -> None:
    """Convert VALUE from FROM_UNIT into TO_UNIT."""

    number = _parse_number(value)
    try:
        source = parse_unit_expr(from_unit)
        target = parse_unit_expr(to_unit)
        converted = Quantity(number, source).into(target)
    except (UnitParseError, DimensionalError) as exc:
        raise click.ClickException(str(exc)) from exc

    log_event("cli.convert", source=from_unit, target=to_unit)
    if as_json:
        payload = {
            "value": float(converted.value),
            "unit": converted.unit.symbol,
            "dimension": str(converted.dimension),
        }
        click.echo(json.dumps(payload, indent=2))
        return
    spec = "" if precision is None else f".{precision}"
    click.echo(format(converted, spec))


@cli.command()
@click.argument("from_unit")
@click.argument("to_unit")
@click.option("--json", "as_json", is_flag=True, help="Emit structured JSON.")
def factor(from_unit: str, to_unit: str, as_json: bool) -> None:
    """Print how many TO_UNIT make up one FROM_UNIT."""

    try:
        result = resolve(parse_unit_expr(from_unit), parse_unit_expr(to_unit))
    except (UnitParseError, DimensionalError) as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        payload = {
            "real": result.real,
            "numerator": result.numerator,
            "denominator": result.denominator,
            "exact": result.is_exact,
        }
        click.echo(json.dumps(payload, indent=2))
        return
    if result.is_exact and result.denominator != 1:
        click.echo(f"{result} ({result.real!r})")
    else:
        click.echo(str(result))


@cli.command("units")
@click.option("--json", "as_json", is_flag=True, help="Emit structured JSON.")
def list_units(as_json: bool) -> None:
    """List the symbols of the reference catalog."""

    rows = [
        {
            "symbol": symbol,
            "name": unit.name,
            "system": unit.system.name,
            "dimension": str(unit.dimension),
        }
        for symbol, unit in DEFAULT_CATALOG.items()
    ]
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return
    for row in rows:
        click.echo(f"{row['symbol']:<6} {row['name'] or '':<12} {row['system']:<9} {row['dimension']}")


if __name__ == "__main__":
    cli()
