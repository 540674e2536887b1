# crm_totals/api/totals.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import ConfigDict, Field

from ..core.currency import CurrencyFormatter
from ..core.display import TotalsDisplay, build_totals_display
from ..core.totals import aggregate
from ..models import AggregationResult, CamelModel, LineItem, Payment
from .deps import get_currency_formatter

logger = logging.getLogger(__name__)

offers_router = APIRouter(prefix="/offers", tags=["offers"])
sales_router = APIRouter(prefix="/sales", tags=["sales"])


# =========================
# Schemas (request boundary)
# =========================
# Motor değerleri doğrulamaz; negatif / NaN girişler burada 422 ile reddedilir.
class LineItemIn(LineItem):
    model_config = ConfigDict(allow_inf_nan=False)

    qty: Optional[float] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    discount_rate: Optional[float] = Field(None, ge=0, le=100)
    vat_rate: Optional[float] = Field(None, ge=0, le=100)

    sub_total: Optional[float] = Field(None, ge=0)
    discount_total: Optional[float] = Field(None, ge=0)
    tax_total: Optional[float] = Field(None, ge=0)
    grand_total: Optional[float] = Field(None, ge=0)


class PaymentIn(Payment):
    model_config = ConfigDict(allow_inf_nan=False)

    amount: Optional[float] = Field(None, ge=0)


class TotalsRequest(CamelModel):
    """Offer / Sale kaydının toplam hesabına giren kısmı."""

    model_config = ConfigDict(allow_inf_nan=False)

    products: List[LineItemIn] = Field(default_factory=list)
    licenses: List[LineItemIn] = Field(default_factory=list)
    rentals: List[LineItemIn] = Field(default_factory=list)
    payments: List[PaymentIn] = Field(default_factory=list)
    usd_rate: Optional[float] = Field(0, ge=0)
    eur_rate: Optional[float] = Field(0, ge=0)


# =========================
# Helpers
# =========================
def _aggregate(payload: TotalsRequest) -> AggregationResult:
    return aggregate(
        payload.products,
        payload.licenses,
        payload.rentals,
        payload.payments,
        payload.usd_rate,
        payload.eur_rate,
    )


def _register(router: APIRouter, entity: str) -> None:
    @router.post(
        "/totals/preview",
        response_model=AggregationResult,
        summary=f"Preview {entity} totals per currency and in TRY",
    )
    def preview_totals(payload: TotalsRequest):
        result = _aggregate(payload)
        logger.info(
            "%s totals preview: currencies=%s grand_total_try=%s",
            entity,
            [c.currency for c in result.by_currency],
            result.overall.grand_total,
        )
        return result

    @router.post(
        "/totals/display",
        response_model=TotalsDisplay,
        summary=f"Formatted {entity} totals panel (tr-TR)",
    )
    def display_totals(
        payload: TotalsRequest,
        formatter: CurrencyFormatter = Depends(get_currency_formatter),
    ):
        return build_totals_display(_aggregate(payload), formatter)


# =========================
# Routes
# =========================
_register(offers_router, "offer")
_register(sales_router, "sale")
