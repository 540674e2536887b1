# crm_totals/core/currency.py
from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Mapping, Optional

from .config import settings

BASE_CURRENCY = "TRY"

# Serbest metin kur adları → ISO kodu
_SYNONYMS = {
    "TL": "TRY",
    "DOLAR": "USD",
    "DOLLAR": "USD",
    "EURO": "EUR",
}

_CENTS = Decimal("0.01")

# JS trim() BOM (\ufeff) dahil baştaki/sondaki boşlukları siler
_TRIM = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


# ---------------------------
# Normalization & rates
# ---------------------------
def normalize_currency(value: Optional[str]) -> str:
    """
    "tl" / " TL " -> "TRY", "Dolar" -> "USD", "euro" -> "EUR".
    Bilinmeyen kodlar büyük harfe çevrilip aynen döner; boş → TRY.
    """
    if not value:
        return BASE_CURRENCY
    code = _TRIM.sub("", str(value)).upper()
    if not code:
        return BASE_CURRENCY
    return _SYNONYMS.get(code, code)


def rate_for(currency: str, usd_rate: Optional[float], eur_rate: Optional[float]) -> float:
    # 0 / None kur henüz girilmemiş demek: toplamı sıfırlamamak için 1 kullan
    if currency == "USD":
        return usd_rate or 1
    if currency == "EUR":
        return eur_rate or 1
    return 1


# ---------------------------
# Display formatting (tr-TR)
# ---------------------------
class CurrencyFormatter:
    """
    Formats amounts as ``₺1.234,56``. Symbols and separators are injected;
    codes without a symbol are written as a prefix (``GBP 10,00``).
    Rounding is half-away-from-zero on the exact float value.
    """

    def __init__(
        self,
        symbols: Optional[Mapping[str, str]] = None,
        thousands_sep: str = ".",
        decimal_sep: str = ",",
    ):
        self.symbols = {normalize_currency(k): v for k, v in (symbols or {}).items()}
        self.thousands_sep = thousands_sep
        self.decimal_sep = decimal_sep

    @classmethod
    def from_settings(cls) -> "CurrencyFormatter":
        return cls(
            symbols=settings.CURRENCY_SYMBOLS,
            thousands_sep=settings.THOUSANDS_SEPARATOR,
            decimal_sep=settings.DECIMAL_SEPARATOR,
        )

    def symbol(self, currency: Optional[str]) -> str:
        code = normalize_currency(currency)
        return self.symbols.get(code, code)

    def _prefix(self, code: str) -> str:
        sym = self.symbols.get(code)
        return sym if sym is not None else f"{code} "

    def format(self, value: float, currency: Optional[str] = BASE_CURRENCY) -> str:
        code = normalize_currency(currency)
        prefix = self._prefix(code)
        v = float(value)
        if math.isnan(v):
            return f"{prefix}NaN"
        sign = "-" if v < 0 else ""
        if math.isinf(v):
            return f"{sign}{prefix}∞"

        exact = Decimal(v).copy_abs()
        with localcontext() as ctx:
            # varsayılan 28 basamak büyük tutarlarda quantize'i patlatır
            ctx.prec = max(28, exact.adjusted() + 4)
            amount = exact.quantize(_CENTS, rounding=ROUND_HALF_UP)
            # 1,234.56 -> 1.234,56
            text = f"{amount:,.2f}"
        text = text.replace(",", "\0").replace(".", self.decimal_sep).replace("\0", self.thousands_sep)
        return f"{sign}{prefix}{text}"


_default_formatter: Optional[CurrencyFormatter] = None


def get_formatter() -> CurrencyFormatter:
    global _default_formatter
    if _default_formatter is None:
        _default_formatter = CurrencyFormatter.from_settings()
    return _default_formatter


def format_currency(
    value: float,
    currency: Optional[str] = BASE_CURRENCY,
    formatter: Optional[CurrencyFormatter] = None,
) -> str:
    return (formatter or get_formatter()).format(value, currency)


def currency_symbol(currency: Optional[str], formatter: Optional[CurrencyFormatter] = None) -> str:
    return (formatter or get_formatter()).symbol(currency)
