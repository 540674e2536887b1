# crm_totals/core/display.py
"""
Teklif / satış formunun altındaki "Toplamlar" paneli.

Builds the formatted view of an ``AggregationResult``: one card per currency,
a TRY card when more than one currency is involved, and the payments strip.
"""
from __future__ import annotations

from typing import List, Optional

from ..models import AggregationResult, TotalsBreakdown, CamelModel
from .currency import BASE_CURRENCY, CurrencyFormatter, get_formatter

LABEL_SUB_TOTAL = "Ara Toplam"
LABEL_DISCOUNT = "İskonto"
LABEL_TAX = "KDV"
LABEL_GRAND_TOTAL = "Genel Toplam"


# ---------------------------
# Schemas
# ---------------------------
class TotalRow(CamelModel):
    label: str
    value: str
    is_discount: bool = False
    is_total: bool = False


class TotalsCard(CamelModel):
    currency: str
    symbol: str
    rows: List[TotalRow]


class PaymentRow(CamelModel):
    currency: str
    total: str


class PaymentsDisplay(CamelModel):
    rows: List[PaymentRow]
    overall: Optional[str] = None  # sadece birden fazla kur varsa


class TotalsDisplay(CamelModel):
    has_items: bool
    has_payments: bool
    has_multiple_currencies: bool
    is_empty: bool
    cards: List[TotalsCard]
    overall: Optional[TotalsCard] = None
    payments: Optional[PaymentsDisplay] = None


# ---------------------------
# Builders
# ---------------------------
def _rows(totals: TotalsBreakdown, currency: str, fmt: CurrencyFormatter) -> List[TotalRow]:
    discount = fmt.format(totals.discount_total, currency)
    if totals.discount_total > 0 and discount != fmt.format(0, currency):
        discount = f"-{discount}"
    return [
        TotalRow(label=LABEL_SUB_TOTAL, value=fmt.format(totals.sub_total, currency)),
        TotalRow(label=LABEL_DISCOUNT, value=discount, is_discount=True),
        TotalRow(label=LABEL_TAX, value=fmt.format(totals.tax_total, currency)),
        TotalRow(label=LABEL_GRAND_TOTAL, value=fmt.format(totals.grand_total, currency), is_total=True),
    ]


def _card(totals: TotalsBreakdown, currency: str, fmt: CurrencyFormatter) -> TotalsCard:
    return TotalsCard(currency=currency, symbol=fmt.symbol(currency), rows=_rows(totals, currency, fmt))


def build_totals_display(
    result: AggregationResult,
    formatter: Optional[CurrencyFormatter] = None,
) -> TotalsDisplay:
    fmt = formatter or get_formatter()

    has_items = len(result.by_currency) > 0
    has_payments = len(result.payments.by_currency) > 0
    has_multiple = len(result.by_currency) > 1

    cards = [_card(c, c.currency, fmt) for c in result.by_currency]
    overall = _card(result.overall, BASE_CURRENCY, fmt) if has_multiple else None

    payments = None
    if has_payments:
        payments = PaymentsDisplay(
            rows=[
                PaymentRow(currency=p.currency, total=fmt.format(p.total, p.currency))
                for p in result.payments.by_currency
            ],
            overall=(
                fmt.format(result.payments.overall, BASE_CURRENCY)
                if len(result.payments.by_currency) > 1
                else None
            ),
        )

    return TotalsDisplay(
        has_items=has_items,
        has_payments=has_payments,
        has_multiple_currencies=has_multiple,
        is_empty=not has_items and not has_payments,
        cards=cards,
        overall=overall,
        payments=payments,
    )
