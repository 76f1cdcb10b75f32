from __future__ import annotations

from typing import Any, Dict
import asyncio
import json
import logging
import time
from urllib import request, error

from vibepay.core.config import settings
from vibepay.models.payments import (
    FlutterwavePaymentBody,
    PaymentCustomer,
    PaymentRequest,
)


class FlutterwaveError(Exception):
    def __init__(self, status_code: int, body: Any, message: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Request failed with status code {status_code}")


logger = logging.getLogger(__name__)


def _new_tx_ref() -> str:
    # milliseconds since epoch; unique only to clock resolution
    return str(int(time.time() * 1000))


def build_payment_body(payload: PaymentRequest) -> FlutterwavePaymentBody:
    return FlutterwavePaymentBody(
        tx_ref=_new_tx_ref(),
        amount=payload.amount,
        currency=settings.FLW_CURRENCY,
        redirect_url=settings.FLW_REDIRECT_URL,
        customer=PaymentCustomer(email=payload.email, name=payload.name),
        payment_options=settings.FLW_PAYMENT_OPTIONS,
    )


def _build_request(url: str, json_payload: Dict[str, Any], bearer_token: str):
    data_bytes = json.dumps(json_payload).encode("utf-8")
    req = request.Request(url, data=data_bytes, method="POST")
    req.add_header("Content-Type", "application/json")
    req.add_header("Accept", "application/json")
    req.add_header("Authorization", f"Bearer {bearer_token}")
    return req


def _parse_body(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except Exception:
        return raw.decode("utf-8", errors="replace")


def _timeout_seconds() -> int:
    try:
        timeout_value = int(settings.FLW_TIMEOUT_SECONDS)
    except (TypeError, ValueError):
        timeout_value = 30
    return timeout_value if timeout_value > 0 else 30


async def create_payment(payload: PaymentRequest) -> Any:
    """Create a payment upstream and return the JSON body Flutterwave answered with."""
    url = settings.FLW_PAYMENTS_URL
    body = build_payment_body(payload).model_dump(mode="json")
    logger.info(
        "Sending payment to Flutterwave | url=%s | tx_ref=%s | amount=%s | currency=%s",
        url,
        body["tx_ref"],
        body["amount"],
        body["currency"],
    )

    req = _build_request(url, body, settings.FLW_SECRET_KEY)
    timeout_seconds = _timeout_seconds()

    def _do_request():
        try:
            with request.urlopen(req, timeout=timeout_seconds) as resp:
                content = resp.read()
                status = resp.status
        except error.HTTPError as exc:
            raise FlutterwaveError(exc.code, _parse_body(exc.read())) from exc
        except error.URLError as exc:
            raise FlutterwaveError(503, None, f"Connection error with Flutterwave: {exc.reason}") from exc
        return status, content

    status_code, raw_body = await asyncio.to_thread(_do_request)
    parsed = _parse_body(raw_body)

    if status_code >= 400:
        raise FlutterwaveError(status_code, parsed)

    logger.info("Flutterwave response | status=%s | tx_ref=%s", status_code, body["tx_ref"])
    return parsed
