from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class PaymentIntent(BaseModel):
    """Body of ``POST /api/payment/create``; field names follow the browser client."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    order_id: str = Field(alias="orderId", min_length=1, max_length=50)
    amount: int = Field(gt=0, strict=True)
    name: Optional[str] = None
    bill_title: Optional[str] = Field(default=None, alias="billTitle")
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")


class GatewaySession(BaseModel):
    token: str = Field(min_length=1)
    redirect_url: str = Field(min_length=1)


class PaymentErrorOut(BaseModel):
    error: str
    details: Any = None


class VaNumber(BaseModel):
    bank: str
    va_number: str


class GatewayCallbackResult(BaseModel):
    """Result object handed to the checkout callbacks."""

    model_config = ConfigDict(extra="ignore")

    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    status_code: Optional[str] = None
    status_message: Optional[str] = None
    transaction_status: Optional[str] = None
    gross_amount: Optional[str] = None
    payment_type: Optional[str] = None
    transaction_time: Optional[str] = None
    fraud_status: Optional[str] = None
    va_numbers: Optional[List[VaNumber]] = None
    payment_code: Optional[str] = None


class HealthOut(BaseModel):
    status: str
    environment: str
    service: str


class KeyCheckOut(BaseModel):
    status: str
    message: str
    token: Optional[str] = None
    server_key_used: Optional[str] = None


def dump_intent(intent: PaymentIntent) -> Dict[str, Any]:
    return intent.model_dump(by_alias=True, exclude_none=True)
