import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SessionRepository(ABC):
    """Holds the identity of whoever is signed in on this client."""

    @abstractmethod
    def get(self) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def set(self, identity: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class InMemorySessionRepository(SessionRepository):
    def __init__(self):
        self._identity: Optional[Dict[str, Any]] = None

    def get(self) -> Optional[Dict[str, Any]]:
        return self._identity

    def set(self, identity: Dict[str, Any]) -> None:
        self._identity = identity

    def clear(self) -> None:
        self._identity = None


class FileSessionRepository(SessionRepository):
    """JSON file store; an unreadable file counts as signed out."""

    def __init__(self, path: str):
        self.path = path

    def get(self) -> Optional[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None
        return data if isinstance(data, dict) else None

    def set(self, identity: Dict[str, Any]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(identity, f)
            os.replace(tmp_path, self.path)
        except Exception:
            # Leave any previous session file untouched
            try:
                os.remove(tmp_path)
            except FileNotFoundError:
                pass
            raise

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
