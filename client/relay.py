import logging
import requests
from typing import Any, Dict, Optional

from pydantic import ValidationError

from core.config import settings
from core.errors import NetworkError
from schemas.payment import GatewaySession, PaymentIntent, dump_intent

logger = logging.getLogger(__name__)


class RelayClient:
    """HTTP client for the EduPay relay service."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: float = 30):
        self.base_url = (base_url or settings.RELAY_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, path: str, payload: Dict[str, Any], default_error: str) -> Dict[str, Any]:
        try:
            resp = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"Relay unreachable: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if not resp.ok:
            message = body.get("error") or body.get("detail") if isinstance(body, dict) else None
            if not isinstance(message, str):
                message = default_error
            raise NetworkError(message, status_code=resp.status_code)
        return body

    def create_payment(self, intent: PaymentIntent) -> GatewaySession:
        body = self._post("/api/payment/create", dump_intent(intent), "Failed to create transaction")
        try:
            return GatewaySession.model_validate(body)
        except ValidationError as e:
            raise NetworkError("Relay returned an invalid payment session") from e

    def login_student(self, nisn: str) -> Dict[str, Any]:
        return self._post("/api/auth/student", {"nisn": nisn}, "Login failed")

    def login_admin(self, username: str, password: str) -> Dict[str, Any]:
        return self._post("/api/auth/admin", {"username": username, "password": password}, "Login failed")
