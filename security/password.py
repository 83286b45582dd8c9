from functools import lru_cache

from passlib.context import CryptContext

from core.config import settings

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password[:72])


def verify_password(password: str, password_hash: str) -> bool:
    return _pwd_context.verify(password[:72], password_hash)


@lru_cache(maxsize=None)
def _admin_password_hash(password: str) -> str:
    return hash_password(password)


def verify_admin_credentials(username: str, password: str) -> bool:
    expected_hash = _admin_password_hash(settings.ADMIN_PASSWORD)
    return username == settings.ADMIN_USERNAME and verify_password(password, expected_hash)
