from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging
from vibepay.core.config import settings
from vibepay.api.v1 import payments
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def init(app:FastAPI):
    if not settings.FLW_SECRET_KEY:
        logger.warning("FLW_SECRET_KEY is not set; upstream payment calls will be rejected")
    logger.info("Payment relay ready | env=%s | upstream=%s", settings.APP_ENV, settings.FLW_PAYMENTS_URL)
    yield
    logger.info("Payment relay stopped")

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=init,
    openapi_url="/openapi.json"
)

logging.basicConfig(
    level=getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET","POST","OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# the page posts to /pay directly, so no version prefix here
app.include_router(payments.router)
