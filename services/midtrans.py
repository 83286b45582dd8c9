import logging
import requests
from typing import Any, Dict, Optional

from core.config import settings
from core.errors import ConfigurationError, GatewayError
from schemas.payment import GatewaySession, PaymentIntent

logger = logging.getLogger(__name__)

SNAP_URL_SANDBOX = "https://app.sandbox.midtrans.com/snap/snap.js"
SNAP_URL_PRODUCTION = "https://app.midtrans.com/snap/snap.js"
SNAP_API_SANDBOX = "https://app.sandbox.midtrans.com/snap/v1"
SNAP_API_PRODUCTION = "https://app.midtrans.com/snap/v1"
API_URL_SANDBOX = "https://api.sandbox.midtrans.com"
API_URL_PRODUCTION = "https://api.midtrans.com"

DEFAULT_ITEM_NAME = "Pembayaran SPP"
DEFAULT_CUSTOMER_NAME = "Student"

# Methods offered in the payment view: id -> (label, Snap enabled_payments code)
PAYMENT_METHODS: Dict[str, tuple] = {
    "bca_va": ("BCA Virtual Account", "bca_va"),
    "bni_va": ("BNI Virtual Account", "bni_va"),
    "mandiri_va": ("Mandiri Virtual Account", "echannel"),
    "gopay": ("GoPay", "gopay"),
    "qris": ("QRIS", "other_qris"),
}


def get_snap_url() -> str:
    return SNAP_URL_PRODUCTION if settings.MIDTRANS_IS_PRODUCTION else SNAP_URL_SANDBOX


def get_api_url() -> str:
    return API_URL_PRODUCTION if settings.MIDTRANS_IS_PRODUCTION else API_URL_SANDBOX


def get_snap_api_url() -> str:
    return SNAP_API_PRODUCTION if settings.MIDTRANS_IS_PRODUCTION else SNAP_API_SANDBOX


def environment_name() -> str:
    return "production" if settings.MIDTRANS_IS_PRODUCTION else "sandbox"


def ensure_credentials() -> None:
    if not settings.MIDTRANS_SERVER_KEY or not settings.MIDTRANS_CLIENT_KEY:
        raise ConfigurationError("Midtrans keys missing in environment variables")


def gateway_method_code(method: str) -> str:
    """Translate a payment view method id to its Snap code; unknown values pass through."""
    entry = PAYMENT_METHODS.get(method)
    return entry[1] if entry else method


def build_transaction_parameter(intent: PaymentIntent) -> Dict[str, Any]:
    parameter: Dict[str, Any] = {
        "transaction_details": {
            "order_id": intent.order_id,
            "gross_amount": intent.amount,
        },
        "item_details": [{
            "id": intent.order_id,
            "price": intent.amount,
            "quantity": 1,
            "name": intent.bill_title or DEFAULT_ITEM_NAME,
        }],
        "customer_details": {
            "first_name": intent.name or DEFAULT_CUSTOMER_NAME,
        },
    }
    if intent.payment_method:
        parameter["enabled_payments"] = [gateway_method_code(intent.payment_method)]
    return parameter


def create_transaction(parameter: Dict[str, Any]) -> Dict[str, Any]:
    """Create a Snap transaction and return the raw provider reply."""
    try:
        resp = requests.post(
            f"{get_snap_api_url()}/transactions",
            json=parameter,
            auth=(settings.MIDTRANS_SERVER_KEY, ""),
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise GatewayError(f"Midtrans API is unreachable: {e}") from e

    try:
        body = resp.json()
    except ValueError:
        body = None

    if resp.status_code >= 400:
        raise GatewayError(
            f"Midtrans API is returning API error. HTTP status code: {resp.status_code}. "
            f"API response: {resp.text}",
            http_status_code=resp.status_code,
            api_response=body if isinstance(body, dict) else None,
        )
    if not isinstance(body, dict):
        raise GatewayError("Midtrans API returned a non-JSON response", http_status_code=resp.status_code)
    return body


def create_session(intent: PaymentIntent) -> GatewaySession:
    ensure_credentials()
    parameter = build_transaction_parameter(intent)
    logger.info("Creating transaction", extra={"gross_amount": intent.amount})
    resp = create_transaction(parameter)
    token = resp.get("token")
    if not token:
        raise GatewayError("Missing token from provider", api_response=resp)
    redirect_url = resp.get("redirect_url")
    if not redirect_url:
        raise GatewayError("Missing redirect_url from provider", api_response=resp)
    return GatewaySession(token=token, redirect_url=redirect_url)
