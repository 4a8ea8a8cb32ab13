"""
Runtime configuration read from the environment.

Values are read at call time (not import time) so the cron route can report
missing configuration on each request.
"""

import os
from dataclasses import dataclass
from typing import Optional

CRON_SECRET_ENV = "CRON_SECRET"
# The dashboard exposes the address to the browser under the NEXT_PUBLIC_ name
RECEIVE_WALLET_ENVS = ("EAP_RECEIVE_WALLET_ADDRESS", "NEXT_PUBLIC_EAP_RECEIVE_WALLET_ADDRESS")

DEFAULT_SUBSCRIPTION_PRICE_SOL = "0.1"
DEFAULT_HELIUS_RPC_URL = "https://mainnet.helius-rpc.com"
DEFAULT_HTTP_TIMEOUT_SECONDS = 20.0


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _getenv_bool(name: str, default: bool = False) -> bool:
    raw = _getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


@dataclass
class CronConfig:
    cron_secret: Optional[str]
    receive_wallet: Optional[str]

    def missing(self) -> Optional[str]:
        """Name of the first required variable that is not set, if any."""
        if not self.cron_secret:
            return CRON_SECRET_ENV
        if not self.receive_wallet:
            return RECEIVE_WALLET_ENVS[0]
        return None


def get_cron_config() -> CronConfig:
    receive_wallet = None
    for name in RECEIVE_WALLET_ENVS:
        receive_wallet = _getenv(name)
        if receive_wallet:
            break
    return CronConfig(cron_secret=_getenv(CRON_SECRET_ENV), receive_wallet=receive_wallet)


def get_subscription_price_raw() -> str:
    return _getenv("EAP_SUBSCRIPTION_PRICE_SOL", DEFAULT_SUBSCRIPTION_PRICE_SOL)


def get_http_timeout() -> float:
    return float(_getenv("HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS)))


def get_helius_settings() -> tuple[str, Optional[str]]:
    """(rpc_url, api_key) for the Helius DAS API."""
    return (
        _getenv("HELIUS_RPC_URL", DEFAULT_HELIUS_RPC_URL),
        _getenv("HELIUS_API_KEY"),
    )


def get_transfer_settings() -> tuple[Optional[str], Optional[str]]:
    """(base_url, api_key) of the server-side wallet transfer service."""
    return _getenv("TRANSFER_API_URL"), _getenv("TRANSFER_API_KEY")


def scheduler_enabled() -> bool:
    return _getenv_bool("SUBSCRIPTION_SCHEDULER_ENABLED", default=False)


def get_scheduler_time() -> tuple[int, int]:
    """(hour, minute) of the daily in-process billing run, UTC."""
    return (
        int(_getenv("SUBSCRIPTION_CRON_HOUR", "0")),
        int(_getenv("SUBSCRIPTION_CRON_MINUTE", "0")),
    )


def get_log_level() -> str:
    return (_getenv("LOG_LEVEL", "INFO") or "INFO").upper()
