"""Snap hosted checkout: script loading and callback dispatch."""

import logging
import threading
import webbrowser
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests
from pydantic import ValidationError

from core.config import settings
from core.errors import ScriptLoadError
from schemas.payment import GatewayCallbackResult, GatewaySession
from services.midtrans import get_snap_url

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = ("settlement", "capture", "success")
PENDING_STATUSES = ("pending",)

ResultCallback = Callable[[GatewayCallbackResult], None]


@dataclass
class SnapCallbacks:
    on_success: Optional[ResultCallback] = None
    on_pending: Optional[ResultCallback] = None
    on_error: Optional[ResultCallback] = None
    on_close: Optional[Callable[[], None]] = None


class SnapCheckout:
    """Handle on a loaded Snap script; opens one checkout at a time."""

    def __init__(self, script_url: str, client_key: str, opener: Callable[[str], Any] = webbrowser.open):
        self.script_url = script_url
        self.client_key = client_key
        self._opener = opener
        self._callbacks: Optional[SnapCallbacks] = None

    def pay(self, session: GatewaySession, callbacks: SnapCallbacks) -> None:
        self._callbacks = callbacks
        try:
            self._opener(session.redirect_url)
        except Exception:
            self._callbacks = None
            raise

    def deliver(self, result: Dict[str, Any]) -> None:
        """Route a gateway result to the callback matching its transaction status."""
        try:
            parsed = GatewayCallbackResult.model_validate(result)
        except ValidationError:
            logger.warning("Malformed gateway result routed to the error callback")
            parsed = GatewayCallbackResult(status_message="Invalid payment result")
        callbacks = self._take_callbacks()

        status = (parsed.transaction_status or "").lower()
        fraud = (parsed.fraud_status or "").lower()
        if status == "capture" and fraud == "challenge":
            handler = callbacks.on_pending
        elif status == "capture" and fraud == "deny":
            handler = callbacks.on_error
        elif status in SUCCESS_STATUSES:
            handler = callbacks.on_success
        elif status in PENDING_STATUSES:
            handler = callbacks.on_pending
        else:
            handler = callbacks.on_error
        if handler:
            handler(parsed)

    def close(self) -> None:
        callbacks = self._take_callbacks()
        if callbacks.on_close:
            callbacks.on_close()

    def _take_callbacks(self) -> SnapCallbacks:
        if self._callbacks is None:
            raise RuntimeError("No checkout is open")
        callbacks, self._callbacks = self._callbacks, None
        return callbacks


def fetch_snap_script(script_url: str, client_key: str) -> SnapCheckout:
    try:
        resp = requests.get(script_url, timeout=20)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise ScriptLoadError("Failed to load MidTrans Snap script") from e
    return SnapCheckout(script_url, client_key)


class SnapLoader:
    """Loads the Snap script once; concurrent callers share the in-flight load."""

    def __init__(
        self,
        script_url: Optional[str] = None,
        client_key: Optional[str] = None,
        fetch: Callable[[str, str], SnapCheckout] = fetch_snap_script,
    ):
        self.script_url = script_url or get_snap_url()
        self.client_key = client_key if client_key is not None else settings.MIDTRANS_CLIENT_KEY
        self._fetch = fetch
        self._lock = threading.Lock()
        self._future: Optional[Future] = None

    @property
    def loaded(self) -> bool:
        future = self._future
        return future is not None and future.done() and future.exception() is None

    def load(self) -> SnapCheckout:
        with self._lock:
            future = self._future
            owner = future is None
            if owner:
                future = self._future = Future()

        if owner:
            try:
                checkout = self._fetch(self.script_url, self.client_key)
            except Exception as e:
                # Forget the failed load so the next attempt fetches again
                with self._lock:
                    self._future = None
                logger.warning("Snap script load failed", extra={"script_url": self.script_url})
                error = e if isinstance(e, ScriptLoadError) else ScriptLoadError(str(e))
                future.set_exception(error)
                raise error
            future.set_result(checkout)
            logger.info("Snap script loaded", extra={"script_url": self.script_url})

        return future.result()


_loader: Optional[SnapLoader] = None
_loader_lock = threading.Lock()


def get_snap_loader() -> SnapLoader:
    """Process-wide loader, created on first use."""
    global _loader
    with _loader_lock:
        if _loader is None:
            _loader = SnapLoader()
        return _loader
