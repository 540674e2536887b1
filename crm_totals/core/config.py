# crm_totals/core/config.py
from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Display (tr-TR) ---
    CURRENCY_SYMBOLS: Dict[str, str] = {"TRY": "₺", "USD": "$", "EUR": "€"}
    THOUSANDS_SEPARATOR: str = "."
    DECIMAL_SEPARATOR: str = ","

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    # --- CORS ---
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
