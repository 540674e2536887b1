# crm_totals/api/currencies.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.currency import CurrencyFormatter, normalize_currency
from .deps import get_currency_formatter

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("/normalize", summary="Normalize a free-text currency code")
def normalize(code: Optional[str] = Query(None, max_length=20)):
    return {"input": code, "currency": normalize_currency(code)}


@router.get("/format", summary="Format an amount for display (tr-TR)")
def format_amount(
    value: float = Query(...),
    currency: Optional[str] = Query("TRY", max_length=20),
    formatter: CurrencyFormatter = Depends(get_currency_formatter),
):
    code = normalize_currency(currency)
    return {
        "currency": code,
        "symbol": formatter.symbol(code),
        "value": value,
        "formatted": formatter.format(value, code),
    }
