"""Configuration helpers for the gsc command line."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .auth import CLIENTLOGIN_URI
from .client import BASE


@dataclass(frozen=True)
class Settings:
    merchant_id: str
    email: str
    password: str
    api_base: str
    login_uri: str
    timeout: float
    log_level: str


def load_settings() -> Settings:
    load_dotenv()

    try:
        timeout = float(os.getenv("GSC_TIMEOUT", "30"))
    except ValueError as exc:
        raise RuntimeError(f"GSC_TIMEOUT must be a number of seconds: {exc}") from exc

    return Settings(
        merchant_id=os.getenv("GSC_MERCHANT_ID", ""),
        email=os.getenv("GSC_EMAIL", ""),
        password=os.getenv("GSC_PASSWORD", ""),
        api_base=os.getenv("GSC_API_BASE", BASE),
        login_uri=os.getenv("GSC_LOGIN_URI", CLIENTLOGIN_URI),
        timeout=timeout,
        log_level=os.getenv("GSC_LOG_LEVEL", "INFO"),
    )


def ensure_required_credentials(settings: Settings) -> None:
    missing = []
    if not settings.merchant_id:
        missing.append("GSC_MERCHANT_ID")
    if not settings.email:
        missing.append("GSC_EMAIL")
    if not settings.password:
        missing.append("GSC_PASSWORD")

    if missing:
        msg = ", ".join(missing)
        raise RuntimeError(f"Missing required Shopping Content configuration: {msg}")
