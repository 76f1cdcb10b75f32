from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
    amount: Any = Field(None, description="Amount to charge, forwarded as received.")
    email: Any = None
    name: Any = None

    model_config = ConfigDict(extra="ignore")


class PaymentCustomer(BaseModel):
    email: Any = None
    name: Any = None


class FlutterwavePaymentBody(BaseModel):
    tx_ref: str = Field(..., min_length=1)
    amount: Any = None
    currency: str
    redirect_url: str
    customer: PaymentCustomer
    payment_options: str
