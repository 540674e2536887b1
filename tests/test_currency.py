# tests/test_currency.py
import math

import pytest

from crm_totals.core.currency import (
    CurrencyFormatter,
    currency_symbol,
    format_currency,
    normalize_currency,
    rate_for,
)

# -----------------------------
# Normalization
# -----------------------------
@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "TRY"),
        ("", "TRY"),
        ("   ", "TRY"),
        ("tl", "TRY"),
        (" TL ", "TRY"),
        ("try", "TRY"),
        ("Dolar", "USD"),
        ("dollar", "USD"),
        ("usd", "USD"),
        ("Euro", "EUR"),
        ("eur", "EUR"),
        ("gbp", "GBP"),
        ("xyz", "XYZ"),
    ],
)
def test_normalize_currency(raw, expected):
    assert normalize_currency(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "tl", "Dolar", "euro", " usd ", "abc", "Lira"])
def test_normalize_is_idempotent(raw):
    once = normalize_currency(raw)
    assert normalize_currency(once) == once


# -----------------------------
# Rates
# -----------------------------
def test_rate_for_known_currencies():
    assert rate_for("USD", 30, 33) == 30
    assert rate_for("EUR", 30, 33) == 33
    assert rate_for("TRY", 30, 33) == 1


def test_rate_for_missing_rate_falls_back_to_one():
    assert rate_for("USD", 0, 0) == 1
    assert rate_for("EUR", None, None) == 1


def test_rate_for_unknown_currency_is_base():
    # GBP kuru tutulmuyor; TRY gibi davranır
    assert rate_for("GBP", 30, 33) == 1


# -----------------------------
# Formatting
# -----------------------------
@pytest.fixture
def fmt():
    return CurrencyFormatter(symbols={"TRY": "₺", "USD": "$", "EUR": "€"})


def test_format_basic(fmt):
    assert fmt.format(1234.5, "TRY") == "₺1.234,50"
    assert fmt.format(1000, "USD") == "$1.000,00"
    assert fmt.format(200, "EUR") == "€200,00"
    assert fmt.format(0, "TRY") == "₺0,00"
    assert fmt.format(1234567.891, "TRY") == "₺1.234.567,89"


def test_format_normalizes_code(fmt):
    assert fmt.format(10, "tl") == "₺10,00"
    assert fmt.format(10, "Dolar") == "$10,00"
    assert fmt.format(10, None) == "₺10,00"


def test_format_negative(fmt):
    assert fmt.format(-10, "TRY") == "-₺10,00"
    assert fmt.format(-1500.25, "EUR") == "-€1.500,25"


def test_format_rounds_half_away_from_zero(fmt):
    # 0.125 ve 0.375 float'ta tam temsil edilir
    assert fmt.format(0.125, "TRY") == "₺0,13"
    assert fmt.format(0.375, "TRY") == "₺0,38"
    assert fmt.format(-0.125, "TRY") == "-₺0,13"
    # 2.675 aslında 2.67499999... olarak saklanır
    assert fmt.format(2.675, "TRY") == "₺2,67"


def test_format_unknown_code_passes_through(fmt):
    assert fmt.format(10, "gbp") == "GBP 10,00"
    assert fmt.symbol("gbp") == "GBP"


def test_format_non_finite(fmt):
    assert fmt.format(math.nan, "TRY") == "₺NaN"
    assert fmt.format(math.inf, "USD") == "$∞"
    assert fmt.format(-math.inf, "USD") == "-$∞"


def test_injected_symbols_and_separators():
    custom = CurrencyFormatter(symbols={"tl": "TL "}, thousands_sep=" ", decimal_sep=".")
    assert custom.format(1234.5, "TRY") == "TL 1 234.50"
    assert custom.symbol("TL") == "TL "


def test_module_helpers_use_settings_defaults():
    assert format_currency(118) == "₺118,00"
    assert format_currency(27118, "TRY") == "₺27.118,00"
    assert currency_symbol("Euro") == "€"


@pytest.mark.parametrize("value", [1e26, 1e30, 1e300])
def test_format_large_amounts(fmt, value):
    # float değeri tam sayıdır; kuruş kısmı her zaman ,00
    expected = "₺" + f"{int(value):,}".replace(",", ".") + ",00"
    assert fmt.format(value, "TRY") == expected
    assert fmt.format(-value, "TRY") == "-" + expected


def test_normalize_strips_bom():
    assert normalize_currency("\ufefftl") == "TRY"
    assert normalize_currency(" \ufeffDolar\ufeff ") == "USD"
    assert normalize_currency("\ufeff") == "TRY"
