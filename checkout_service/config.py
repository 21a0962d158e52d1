"""
config.py — Environment-driven settings for the Checkout Service

All settings are read once at process start and handed to the app factory,
so handlers never reach into os.environ themselves.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Attributes:
        mongodb_uri (str): Connection string of the document store.
        mongodb_db (str): Database name holding the `orders` and `payments` collections.
        razorpay_key_id (str): Public gateway key, also handed to the browser checkout.
        razorpay_key_secret (str): Gateway secret, used for API auth and signature checks.
        razorpay_base_url (str): Base URL of the gateway REST API.
        jwt_secret (str): HS256 secret used to verify bearer tokens.
        environment (str): "production" hides raw error text from 500 responses.
        cors_origins (list[str]): Browser origins allowed to call the API.
        log_level (str): Root log level.
        log_file (str, optional): Extra log file destination.
    """
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "loopxpress"
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_base_url: str = "https://api.razorpay.com/v1"
    jwt_secret: str = "your_jwt_secret"
    environment: str = "development"
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _split_origins(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Builds a Settings instance from environment variables."""
    return Settings(
        mongodb_uri=os.environ.get("MONGODB_URI", "mongodb://localhost:27017"),
        mongodb_db=os.environ.get("MONGODB_DB", "loopxpress"),
        razorpay_key_id=os.environ.get("RAZORPAY_API_KEY", ""),
        razorpay_key_secret=os.environ.get("RAZORPAY_API_SECRET", ""),
        razorpay_base_url=os.environ.get("RAZORPAY_BASE_URL", "https://api.razorpay.com/v1"),
        jwt_secret=os.environ.get("JWT_SECRET", "your_jwt_secret"),
        environment=os.environ.get("ENVIRONMENT", "development"),
        cors_origins=_split_origins(os.environ.get("CORS_ORIGINS")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_file=os.environ.get("LOG_FILE") or None,
    )
