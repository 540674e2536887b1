# crm_totals/models/__init__.py
"""
Offer / Sale totals veri modeli.

Product, License ve Rental kalemleri toplam hesabı için aynı şekle sahiptir;
hepsi ``LineItem`` ile temsil edilir. Giriş tarafında camelCase alanlar
(``subTotal``, ``discountRate`` ...) kabul edilir, çıkış camelCase serileşir.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =========================
# Inputs
# =========================
class LineItem(CamelModel):
    """Sale line (product / license / rental). No range validation here."""

    currency: Optional[str] = None
    sale_currency: Optional[str] = None

    qty: Optional[float] = None
    price: Optional[float] = None
    discount_rate: Optional[float] = None  # 0..100
    vat_rate: Optional[float] = None       # 0..100

    # upstream'den gelen hazır değerler (> 0 ise geçerli)
    sub_total: Optional[float] = None
    discount_total: Optional[float] = None
    tax_total: Optional[float] = None
    grand_total: Optional[float] = None


class Payment(CamelModel):
    currency: Optional[str] = None
    amount: Optional[float] = None


# =========================
# Outputs
# =========================
class TotalsBreakdown(CamelModel):
    sub_total: float = 0.0
    discount_total: float = 0.0
    tax_total: float = 0.0
    grand_total: float = 0.0


class CurrencyTotal(TotalsBreakdown):
    currency: str


class PaymentTotal(CamelModel):
    currency: str
    total: float = 0.0


class PaymentsSummary(CamelModel):
    by_currency: List[PaymentTotal] = Field(default_factory=list)
    overall: float = 0.0


class AggregationResult(CamelModel):
    by_currency: List[CurrencyTotal] = Field(default_factory=list)
    overall: TotalsBreakdown = Field(default_factory=TotalsBreakdown)
    payments: PaymentsSummary = Field(default_factory=PaymentsSummary)
