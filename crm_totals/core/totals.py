# crm_totals/core/totals.py
"""
Multi-currency totals for Offer / Sale line items.

Kalemler (product + license + rental) kur bazında gruplanır, her grup
``rate_for`` ile TRY'ye çevrilip ``overall`` altında toplanır. Ödemeler için
aynı işlem tek bir ``amount`` alanı üzerinden yapılır.

Pure functions: no I/O, no shared state, inputs are never mutated. Numeric
fields are not validated; NaN / negative values flow into the totals.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..models import (
    AggregationResult,
    CurrencyTotal,
    LineItem,
    Payment,
    PaymentTotal,
    PaymentsSummary,
    TotalsBreakdown,
)
from .currency import normalize_currency, rate_for

logger = logging.getLogger(__name__)

LineLike = Union[LineItem, Mapping[str, Any]]
PaymentLike = Union[Payment, Mapping[str, Any]]


# ---------------------------
# Helpers
# ---------------------------
def _as_line(item: LineLike) -> LineItem:
    if isinstance(item, LineItem):
        return item
    return LineItem.model_validate(item)


def _as_payment(payment: PaymentLike) -> Payment:
    if isinstance(payment, Payment):
        return payment
    return Payment.model_validate(payment)


def _authoritative(value: Optional[float]) -> bool:
    # 0 "girilmemiş" sayılır ve yeniden hesaplanır
    return bool(value) and value > 0


# ---------------------------
# Line aggregation
# ---------------------------
def line_totals(item: LineLike) -> CurrencyTotal:
    """Totals of a single line, in the line's own (normalized) currency."""
    line = _as_line(item)
    currency = normalize_currency(line.sale_currency or line.currency)

    qty = line.qty or 0
    price = line.price or 0
    discount_rate = line.discount_rate or 0
    vat_rate = line.vat_rate or 0

    sub_total = line.sub_total if _authoritative(line.sub_total) else qty * price
    discount_total = (
        line.discount_total
        if _authoritative(line.discount_total)
        else sub_total * (discount_rate / 100)
    )
    after_discount = sub_total - discount_total
    tax_total = line.tax_total if _authoritative(line.tax_total) else after_discount * (vat_rate / 100)
    grand_total = line.grand_total if _authoritative(line.grand_total) else after_discount + tax_total

    return CurrencyTotal(
        currency=currency,
        sub_total=sub_total,
        discount_total=discount_total,
        tax_total=tax_total,
        grand_total=grand_total,
    )


def aggregate_lines(items: Iterable[LineLike]) -> Dict[str, CurrencyTotal]:
    buckets: Dict[str, CurrencyTotal] = {}
    for item in items:
        line = line_totals(item)
        bucket = buckets.get(line.currency)
        if bucket is None:
            bucket = buckets[line.currency] = CurrencyTotal(currency=line.currency)
        bucket.sub_total += line.sub_total
        bucket.discount_total += line.discount_total
        bucket.tax_total += line.tax_total
        bucket.grand_total += line.grand_total
    return buckets


def sorted_by_currency(buckets: Mapping[str, CurrencyTotal]) -> List[CurrencyTotal]:
    # ordinal (code-point) sıralama
    return [buckets[code] for code in sorted(buckets)]


# ---------------------------
# Base currency rollup
# ---------------------------
def rollup(
    by_currency: Iterable[CurrencyTotal],
    usd_rate: Optional[float] = 0,
    eur_rate: Optional[float] = 0,
) -> TotalsBreakdown:
    overall = TotalsBreakdown()
    for curr in by_currency:
        rate = rate_for(curr.currency, usd_rate, eur_rate)
        overall.sub_total += curr.sub_total * rate
        overall.discount_total += curr.discount_total * rate
        overall.tax_total += curr.tax_total * rate
        overall.grand_total += curr.grand_total * rate
    return overall


def aggregate_payments(
    payments: Iterable[PaymentLike],
    usd_rate: Optional[float] = 0,
    eur_rate: Optional[float] = 0,
) -> PaymentsSummary:
    sums: Dict[str, float] = {}
    for p in payments:
        payment = _as_payment(p)
        currency = normalize_currency(payment.currency)
        sums[currency] = sums.get(currency, 0) + (payment.amount or 0)

    by_currency = [PaymentTotal(currency=code, total=sums[code]) for code in sorted(sums)]
    overall = 0.0
    for p in by_currency:
        overall += p.total * rate_for(p.currency, usd_rate, eur_rate)
    return PaymentsSummary(by_currency=by_currency, overall=overall)


# ---------------------------
# Entry point
# ---------------------------
def aggregate(
    products: Optional[Iterable[LineLike]] = None,
    licenses: Optional[Iterable[LineLike]] = None,
    rentals: Optional[Iterable[LineLike]] = None,
    payments: Optional[Iterable[PaymentLike]] = None,
    usd_rate: Optional[float] = 0,
    eur_rate: Optional[float] = 0,
) -> AggregationResult:
    """
    Per-currency and base-currency (TRY) totals for an offer or a sale.

    usd_rate / eur_rate: 1 USD / 1 EUR in TRY. 0 or None falls back to 1.
    """
    items: List[LineLike] = [*(products or []), *(licenses or []), *(rentals or [])]
    payment_rows: List[PaymentLike] = list(payments or [])

    by_currency = sorted_by_currency(aggregate_lines(items))
    overall = rollup(by_currency, usd_rate, eur_rate)
    payments_summary = aggregate_payments(payment_rows, usd_rate, eur_rate)

    logger.debug(
        "aggregate: %d items, %d payments, currencies=%s",
        len(items),
        len(payment_rows),
        [c.currency for c in by_currency],
    )
    return AggregationResult(by_currency=by_currency, overall=overall, payments=payments_summary)
