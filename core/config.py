import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file
load_dotenv('.env')


def get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return val


class Settings:
    def __init__(self):
        self.APP_NAME: str = get_env("APP_NAME", "EduPay API")
        self.APP_VERSION: str = get_env("APP_VERSION", "1.0.0")

        self.DEBUG: bool = get_env("DEBUG", "False").lower() == "true"
        self.TESTING: bool = get_env("TESTING", "False").lower() == "true"
        self.LOG_LEVEL: str = get_env("LOG_LEVEL", "DEBUG" if self.DEBUG else "INFO")

        # School data backend: "memory" serves the seeded demo data, "sql" reads the database
        self.DATA_BACKEND: str = get_env("DATA_BACKEND", "memory").lower()
        if self.TESTING:
            self.DATABASE_URL: str = "sqlite:///:memory:"
            self.SQLALCHEMY_ECHO: bool = False
        else:
            self.DATABASE_URL: str = get_env("DATABASE_URL", "sqlite:///./edupay.sqlite3")
            self.SQLALCHEMY_ECHO: bool = self.DEBUG

        self.JWT_SECRET: str = get_env("JWT_SECRET", "dev-secret-change")
        self.JWT_ALG: str = get_env("JWT_ALG", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES: int = int(get_env("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

        self.ADMIN_USERNAME: str = get_env("ADMIN_USERNAME", "admin")
        self.ADMIN_PASSWORD: str = get_env("ADMIN_PASSWORD", "admin123")
        self.ADMIN_NAME: str = get_env("ADMIN_NAME", "Administrator")

        # Midtrans settings. Missing keys are reported per request, not at startup.
        self.MIDTRANS_SERVER_KEY: str = get_env("MIDTRANS_SERVER_KEY", "")
        self.MIDTRANS_CLIENT_KEY: str = get_env("MIDTRANS_CLIENT_KEY", "")
        self.MIDTRANS_MERCHANT_ID: str = get_env("MIDTRANS_MERCHANT_ID", "")
        self.MIDTRANS_IS_PRODUCTION: bool = get_env("MIDTRANS_IS_PRODUCTION", "false").lower() == "true"
        self.GATEWAY_TIMEOUT_SECONDS: float = float(get_env("GATEWAY_TIMEOUT_SECONDS", "20"))

        # Client side
        self.RELAY_BASE_URL: str = get_env("RELAY_BASE_URL", "http://localhost:3001")
        self.SUCCESS_REDIRECT_DELAY_SECONDS: float = float(get_env("SUCCESS_REDIRECT_DELAY_SECONDS", "2"))


settings = Settings()
