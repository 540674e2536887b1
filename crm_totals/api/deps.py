# crm_totals/api/deps.py
from ..core.currency import CurrencyFormatter, get_formatter


# ---------------------------
# Formatter Dependency
# ---------------------------
def get_currency_formatter() -> CurrencyFormatter:
    """Settings'ten kurulan varsayılan formatter; testlerde override edilebilir."""
    return get_formatter()
