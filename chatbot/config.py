"""Chatbot service configuration read from the environment and an optional .env file."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str) -> str:
    # An empty variable still overrides the default so a credential can be blanked out.
    return os.environ.get(name, default)


@dataclass(frozen=True)
class Settings:
    """Credentials, upstream endpoints and catalog location for the chatbot.

    Defaults are resolved from the environment at import time; tests build their
    own instances with explicit values.
    """

    openai_api_key: str = _env("OPENAI_API_KEY", "")
    openai_base_url: str = _env("OPENAI_BASE_URL", "")
    chat_model: str = _env("CHAT_MODEL", "gpt-4o-mini")
    openai_timeout_seconds: float = float(_env("OPENAI_TIMEOUT_SECONDS", "60"))
    open_exchange_api_key: str = _env("OPEN_EXCHANGE_API_KEY", "")
    exchange_rates_url: str = _env("EXCHANGE_RATES_URL", "https://openexchangerates.org/api/latest.json")
    rates_timeout_seconds: float = float(_env("RATES_TIMEOUT_SECONDS", "10"))
    products_path: str = _env("PRODUCTS_PATH", "data/products_list.csv")
    search_result_size: int = int(_env("SEARCH_RESULT_SIZE", "2"))
    log_level: str = _env("LOG_LEVEL", "INFO")


settings = Settings()
