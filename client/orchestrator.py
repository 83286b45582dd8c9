"""Client-side payment flow for a single bill.

The orchestrator walks one payment attempt through the states below. Every
failure ends the attempt; the user starts a new one by selecting a method
again.

    IDLE -> METHOD_SELECTED -> SUBMITTING -> AWAITING_GATEWAY_UI
         -> SUCCESS | PENDING | ERROR | CANCELLED
"""

import enum
import logging
import random
import string
import threading
import time
from typing import Any, Callable, List, Optional

from core.config import settings
from core.errors import EduPayError
from client.relay import RelayClient
from client.snap import SnapCallbacks, SnapCheckout, SnapLoader, get_snap_loader
from schemas.payment import GatewayCallbackResult, GatewaySession, PaymentIntent
from services.midtrans import PAYMENT_METHODS

logger = logging.getLogger(__name__)

HISTORY_PATH = "/student/history"
ORDER_PREFIX = "EDU"
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


class PaymentState(str, enum.Enum):
    IDLE = "IDLE"
    METHOD_SELECTED = "METHOD_SELECTED"
    SUBMITTING = "SUBMITTING"
    AWAITING_GATEWAY_UI = "AWAITING_GATEWAY_UI"
    SUCCESS = "SUCCESS"
    PENDING = "PENDING"
    ERROR = "ERROR"
    CANCELLED = "CANCELLED"


ALLOWED_TRANSITIONS: dict[PaymentState, set[PaymentState]] = {
    PaymentState.IDLE: {PaymentState.METHOD_SELECTED},
    PaymentState.METHOD_SELECTED: {PaymentState.METHOD_SELECTED, PaymentState.SUBMITTING},
    PaymentState.SUBMITTING: {PaymentState.AWAITING_GATEWAY_UI, PaymentState.ERROR},
    PaymentState.AWAITING_GATEWAY_UI: {
        PaymentState.SUCCESS,
        PaymentState.PENDING,
        PaymentState.ERROR,
        PaymentState.CANCELLED,
    },
    PaymentState.ERROR: {PaymentState.IDLE},
    PaymentState.CANCELLED: {PaymentState.IDLE},
    PaymentState.SUCCESS: set(),
    PaymentState.PENDING: set(),
}


def validate_transition(current: PaymentState, new: PaymentState) -> None:
    """Raise when a transition is not allowed by the state machine."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid transition: {current.value} -> {new.value}")


def generate_order_id(now_ms: Optional[int] = None) -> str:
    """``EDU-<epoch ms>-<6 chars>``; unique enough per attempt, not guaranteed."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=6))
    return f"{ORDER_PREFIX}-{timestamp}-{suffix}"


class Notifier:
    """Transient user notifications. The default only logs them."""

    def success(self, title: str, description: str = "") -> None:
        logger.info(title, extra={"description": description})

    def info(self, title: str, description: str = "") -> None:
        logger.info(title, extra={"description": description})

    def error(self, title: str, description: str = "") -> None:
        logger.warning(title, extra={"description": description})


def _timer_scheduler(delay: float, fn: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()
    return timer


class PaymentOrchestrator:
    def __init__(
        self,
        amount: int,
        bill_title: str,
        payer_name: str,
        relay: Optional[RelayClient] = None,
        loader: Optional[SnapLoader] = None,
        notifier: Optional[Notifier] = None,
        navigate: Optional[Callable[[str], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        scheduler: Callable[[float, Callable[[], None]], Any] = _timer_scheduler,
        success_delay: Optional[float] = None,
    ):
        self.amount = amount
        self.bill_title = bill_title
        self.payer_name = payer_name
        self.relay = relay or RelayClient()
        self.loader = loader or get_snap_loader()
        self.notifier = notifier or Notifier()
        self.navigate = navigate or (lambda path: logger.info("Navigate", extra={"path": path}))
        self.on_close = on_close or (lambda: None)
        self.scheduler = scheduler
        self.success_delay = settings.SUCCESS_REDIRECT_DELAY_SECONDS if success_delay is None else success_delay

        self.state = PaymentState.IDLE
        self.history: List[PaymentState] = [PaymentState.IDLE]
        self.selected_method: Optional[str] = None
        self.order_id: Optional[str] = None
        self.session: Optional[GatewaySession] = None
        self.last_result: Optional[GatewayCallbackResult] = None
        self.last_error: Optional[str] = None
        self.outcome: Optional[PaymentState] = None

    def _transition(self, new: PaymentState) -> None:
        validate_transition(self.state, new)
        logger.debug("Payment state %s -> %s", self.state.value, new.value)
        self.state = new
        self.history.append(new)

    @property
    def can_confirm(self) -> bool:
        return self.state is PaymentState.METHOD_SELECTED and self.selected_method is not None

    def prepare(self) -> bool:
        """Warm the Snap script when the payment view opens."""
        try:
            self.loader.load()
        except EduPayError:
            self.notifier.error("Failed to load the payment system")
            return False
        return True

    def select_method(self, method_id: str) -> None:
        if method_id not in PAYMENT_METHODS:
            raise ValueError(f"Unknown payment method: {method_id}")
        self._transition(PaymentState.METHOD_SELECTED)
        self.selected_method = method_id

    def confirm(self) -> None:
        if not self.can_confirm:
            return

        self._transition(PaymentState.SUBMITTING)
        self.outcome = None
        self.last_error = None
        self.last_result = None
        self.order_id = generate_order_id()
        intent = PaymentIntent(
            order_id=self.order_id,
            amount=self.amount,
            name=self.payer_name,
            bill_title=self.bill_title,
            payment_method=self.selected_method,
        )

        try:
            self.session = self.relay.create_payment(intent)
            checkout = self.loader.load()
        except EduPayError as e:
            logger.error("Payment error: %s", e.message)
            self._fail("Payment failed", e.message)
            return

        self._transition(PaymentState.AWAITING_GATEWAY_UI)
        try:
            self._open_checkout(checkout)
        except Exception as e:
            # The checkout window never opened, so no callback will arrive
            logger.error("Could not open checkout: %s", e)
            self._fail("Payment failed", str(e) or "Could not open the payment window")

    def _open_checkout(self, checkout: SnapCheckout) -> None:
        checkout.pay(
            self.session,
            SnapCallbacks(
                on_success=self.handle_success,
                on_pending=self.handle_pending,
                on_error=self.handle_error,
                on_close=self.handle_close,
            ),
        )

    def _awaiting(self, event: str) -> bool:
        if self.state is not PaymentState.AWAITING_GATEWAY_UI:
            logger.info("Ignoring %s callback in state %s", event, self.state.value)
            return False
        return True

    def handle_success(self, result: GatewayCallbackResult) -> None:
        if not self._awaiting("success"):
            return
        self.last_result = result
        self.outcome = PaymentState.SUCCESS
        self._transition(PaymentState.SUCCESS)
        self.notifier.success("Payment successful!", f"Transaction {result.order_id} has been processed")
        self.scheduler(self.success_delay, self._finish_success)

    def _finish_success(self) -> None:
        self.on_close()
        self.navigate(HISTORY_PATH)

    def handle_pending(self, result: GatewayCallbackResult) -> None:
        if not self._awaiting("pending"):
            return
        self.last_result = result
        self.outcome = PaymentState.PENDING
        self._transition(PaymentState.PENDING)
        self.notifier.info("Payment pending", f"Complete your payment. Order ID: {result.order_id}")
        self.on_close()

    def handle_error(self, result: GatewayCallbackResult) -> None:
        if not self._awaiting("error"):
            return
        self.last_result = result
        self._fail("Payment failed", result.status_message or "Something went wrong")

    def handle_close(self) -> None:
        if not self._awaiting("close"):
            return
        self.outcome = PaymentState.CANCELLED
        self._transition(PaymentState.CANCELLED)
        self.notifier.info("Payment cancelled", "You closed the payment window")
        self._reset()

    def _fail(self, title: str, message: str) -> None:
        self.outcome = PaymentState.ERROR
        self.last_error = message
        self._transition(PaymentState.ERROR)
        self.notifier.error(title, message)
        self._reset()

    def _reset(self) -> None:
        self._transition(PaymentState.IDLE)
        self.selected_method = None
        self.session = None
