"""Tests for CLI date and amount helpers."""

from datetime import date
from decimal import Decimal

import click
import pytest

from ledgerdesk.cli.date_filters import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_cli_date_range,
)
from ledgerdesk.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"last-year": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-week": True, "this-month": False},
    )

    assert (start, end) == get_date_range("last-week")


def test_resolve_cli_date_range_explicit_dates_override_default():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date=None,
        period_flags={},
        default_range=(date(2020, 1, 1), date(2020, 1, 31)),
    )

    assert start == date(2024, 1, 2)
    assert end is None


def test_resolve_cli_date_range_applies_default_range():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
        default_range=default_range,
    )

    assert (start, end) == default_range


def test_resolve_cli_date_range_invalid_end_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date="not-a-date",
            period_flags={},
        )

    assert excinfo.value.exit_code == 1
    assert "Invalid end date" in capsys.readouterr().err


def test_parse_helpers_pass_none_through():
    assert parse_date_or_exit(_ctx(), None) is None
    assert parse_amount_or_exit(_ctx(), None) is None


def test_parse_amount_or_exit(capsys):
    assert parse_amount_or_exit(_ctx(), "₹1,500") == Decimal("1500")

    with pytest.raises(click.exceptions.Exit):
        parse_amount_or_exit(_ctx(), "ten", "shipping tax")

    assert "Invalid shipping tax" in capsys.readouterr().err
