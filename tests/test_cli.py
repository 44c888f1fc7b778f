from __future__ import annotations

import json

from click.testing import CliRunner

from rodchain.cli.main import cli


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "convert" in result.output


def test_convert_text_output() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["convert", "2", "km", "m"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output.strip() == "2000.00 m"


def test_convert_precision_and_json() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["convert", "3", "ft", "m", "--precision", "4"])
    assert result.output.strip() == "0.9144 m"

    result = runner.invoke(cli, ["convert", "1", "m^2", "ft^2", "--json"])
    payload = json.loads(result.output)
    assert payload["unit"] == "ft^2"
    assert abs(payload["value"] - 10.7639104167) < 1e-9


def test_factor_command() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["factor", "yd", "m"])
    assert result.exit_code == 0
    assert result.output.startswith("1143/1250")

    result = runner.invoke(cli, ["factor", "km", "m", "--json"])
    assert json.loads(result.output)["numerator"] == 1000


def test_units_command_lists_catalog() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["units", "--json"])
    symbols = [row["symbol"] for row in json.loads(result.output)]
    assert "m" in symbols
    assert "slug" in symbols


def test_engine_errors_exit_with_code_one() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["convert", "1", "m", "s"])
    assert result.exit_code == 1
    assert "Cannot convert" in result.output

    result = runner.invoke(cli, ["factor", "m", "furlong"])
    assert result.exit_code == 1
    assert "Unknown unit symbol" in result.output


def test_bad_value_is_usage_error() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["convert", "ten", "m", "ft"])
    assert result.exit_code == 2
