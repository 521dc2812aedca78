"""Currency conversion against a live exchange-rate table.

The rate service expresses every currency relative to one base currency, so a
conversion goes through that base: ``amount / rate[from] * rate[to]``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from .config import Settings
from .errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


def format_amount(value: float) -> str:
    """Render integral amounts without a trailing ``.0``."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    currency: str

    def __str__(self) -> str:
        return f"{format_amount(self.amount)} {self.currency}"


class CurrencyConverter:
    def __init__(
        self,
        api_key: str,
        rates_url: str,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.api_key = api_key
        self.rates_url = rates_url
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings, http_client: Optional[httpx.Client] = None) -> "CurrencyConverter":
        return cls(
            api_key=settings.open_exchange_api_key,
            rates_url=settings.exchange_rates_url,
            timeout=settings.rates_timeout_seconds,
            http_client=http_client,
        )

    def _get(self, client: httpx.Client) -> httpx.Response:
        response = client.get(self.rates_url, params={"app_id": self.api_key})
        response.raise_for_status()
        return response

    def fetch_rates(self) -> Dict[str, float]:
        """Fetch the global rate table keyed by currency code."""
        if not self.api_key:
            logger.error("Exchange rate API key is missing")
            raise ConfigurationError("Open Exchange Rates API key is missing")
        try:
            if self._http_client is not None:
                response = self._get(self._http_client)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = self._get(client)
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.error("Error fetching currency data: %s", exc)
            raise UpstreamError("Error fetching currency data") from exc
        except ValueError as exc:
            logger.error("Currency service returned a non-JSON body: %s", exc)
            raise UpstreamError("Error fetching currency data") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            logger.error("Currency service response has no rates table: %r", payload)
            raise UpstreamError("Currency service response has no rates table")
        return rates

    @staticmethod
    def _rate(rates: Dict[str, float], code: str) -> float:
        rate = rates.get(code)
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            logger.error("No usable rate for currency %r (got %r)", code, rate)
            raise UpstreamError(f"No exchange rate available for {code}")
        return float(rate)

    def convert_amount(self, amount: float, from_currency: str, to_currency: str) -> ConversionResult:
        from_code = from_currency.strip().upper()
        to_code = to_currency.strip().upper()
        rates = self.fetch_rates()
        from_rate = self._rate(rates, from_code)
        to_rate = self._rate(rates, to_code)
        # Multiply by the ratio so equal codes give back ``amount`` exactly.
        converted = amount * (to_rate / from_rate)
        logger.info("convert %s %s -> %s %s", amount, from_code, converted, to_code)
        return ConversionResult(amount=converted, currency=to_code)

    def convert(self, amount: float, from_currency: str, to_currency: str) -> str:
        return str(self.convert_amount(amount, from_currency, to_currency))
