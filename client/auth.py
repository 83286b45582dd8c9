import logging
from typing import Any, Dict, Optional

from core.errors import NetworkError
from client.relay import RelayClient
from client.session import SessionRepository

logger = logging.getLogger(__name__)


class AuthManager:
    """Signs students and admins in through the relay and keeps the result in a session repository."""

    def __init__(self, relay: RelayClient, sessions: SessionRepository):
        self.relay = relay
        self.sessions = sessions

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.sessions.get()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        user = self.user
        return user.get("role") if user else None

    @property
    def access_token(self) -> Optional[str]:
        user = self.user
        return user.get("access_token") if user else None

    def login(
        self,
        role: str,
        nisn: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> bool:
        try:
            if role == "student" and nisn:
                resp = self.relay.login_student(nisn)
            elif role == "admin" and username and password:
                resp = self.relay.login_admin(username, password)
            else:
                return False
        except NetworkError as e:
            logger.info("Login rejected for role %s: %s", role, e.message)
            return False

        identity = dict(resp.get("user") or {})
        identity["access_token"] = resp.get("access_token")
        self.sessions.set(identity)
        return True

    def logout(self) -> None:
        self.sessions.clear()
