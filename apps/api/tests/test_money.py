from decimal import Decimal

import pytest

from taxoga.services.money import (
    format_amount,
    format_percent,
    format_rate,
    parse_amount,
    parse_whole_amount,
    parse_year,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("₦1,250,000", Decimal("1250000")),
        ("  2 500 000 ", Decimal("2500000")),
        ("1,234.56", Decimal("1234.56")),
        ("12abc", Decimal("12")),
        (".5", Decimal("0.5")),
        (3500, Decimal("3500")),
        (1200.75, Decimal("1200.75")),
    ],
)
def test_parse_amount_reads_currency_text(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "abc",
        "₦",
        None,
        "-5000",
        -12,
        float("nan"),
        float("inf"),
        True,
        "Infinity",
        "1e9999999",
        "9" * 40,
        1e300,
        Decimal("1E+21"),
    ],
)
def test_parse_amount_never_fails_or_goes_negative(raw):
    assert parse_amount(raw) == Decimal("0")


def test_parse_whole_amount_rounds_half_up():
    assert parse_whole_amount("₦1,000.50") == Decimal("1001")
    assert parse_whole_amount("1000.49") == Decimal("1000")
    assert parse_whole_amount("junk") == Decimal("0")
    assert parse_whole_amount("1e9999999") == Decimal("0")


def test_parse_amount_keeps_large_but_plausible_values():
    assert parse_amount("1e20") == Decimal("1E+20")
    assert parse_whole_amount("₦" + "9" * 21) == Decimal("9" * 21)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("2021", 2021), (" 2019 ", 2019), ("2020abc", 2020), ("", None), ("year", None), (None, None), (2018, 2018)],
)
def test_parse_year(raw, expected):
    assert parse_year(raw) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "₦0"),
        (Decimal("0.00"), "₦0"),
        (1250000, "₦1,250,000"),
        (Decimal("1250.5"), "₦1,250.50"),
        (999.999, "₦1,000.00"),
        (Decimal("0.125"), "₦0.13"),
        (Decimal("2.675"), "₦2.68"),
        (Decimal("3000000.00"), "₦3,000,000"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


@pytest.mark.parametrize("text", ["₦0", "₦1,250,000", "₦1,250.50", "₦42"])
def test_format_of_parse_is_stable_for_canonical_text(text):
    assert format_amount(parse_amount(text)) == text


@pytest.mark.parametrize("value", [Decimal("0"), Decimal("17.25"), Decimal("1234567.89"), Decimal("5000000")])
def test_parse_of_format_round_trips_two_decimals(value):
    assert parse_amount(format_amount(value)) == value


def test_format_percent_and_rate():
    assert format_percent(Decimal("12.3456")) == "12.35%"
    assert format_percent(0) == "0.00%"
    assert format_rate(Decimal("25.00")) == "25"
    assert format_rate(Decimal("100")) == "100"
    assert format_rate(Decimal("7.50")) == "7.5"
