from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from vibepay.models.payments import PaymentRequest
from vibepay.services import payments_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])

LIVENESS_MESSAGE = "Vibe Hackathon Payment API is running 🎉"


@router.get("/", response_class=PlainTextResponse)
async def root():
    return LIVENESS_MESSAGE


@router.post("/pay")
async def pay(request: Request):
    """
    Forwards `{amount, email, name}` to Flutterwave and returns its JSON body.

    Any failure (unreadable body, network, upstream rejection) answers 500
    with `{"error": <message>}`; the cause is not distinguished.
    """
    try:
        body = PaymentRequest.model_validate(await request.json())
        return await payments_service.create_payment(body)
    except Exception as exc:
        logger.warning("Payment relay failed | %s: %s", type(exc).__name__, exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})
