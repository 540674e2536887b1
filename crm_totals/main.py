# crm_totals/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .api import currencies
from .api.totals import offers_router, sales_router


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Logging import sırasında değil, uygulama ayağa kalkarken kurulur
@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="CRM Totals API", lifespan=lifespan)

# ---------------------------
# CORS (frontend dev servers)
# ---------------------------
DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _resolve_allowed_origins() -> list[str]:
    raw = settings.CORS_ALLOW_ORIGINS
    vals = [str(x).strip().rstrip("/") for x in raw if str(x).strip()]
    # "*" credentials ile birlikte kullanılamaz: dev listesine in
    if len(vals) == 1 and vals[0] == "*":
        return DEFAULT_CORS_ORIGINS
    return vals or DEFAULT_CORS_ORIGINS


ALLOW_ORIGINS = _resolve_allowed_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Health
# ---------------------------
@app.get("/health", tags=["system"])
def health():
    return {"status": "ok"}


# ---------------------------
# Routers
# ---------------------------
app.include_router(offers_router)     # OFFERS totals
app.include_router(sales_router)      # SALES totals
app.include_router(currencies.router)
