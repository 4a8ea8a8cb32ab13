"""
Run the subscription billing job once, outside the API.

Usage (from the project root, with .env configured):
    python scripts/run-subscription-cron.py

Needs EAP_RECEIVE_WALLET_ADDRESS plus the Helius and transfer service settings.
"""

import asyncio
import os
import sys
from pathlib import Path

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.chdir(root)

from dotenv import load_dotenv
load_dotenv()

from app.core.config import RECEIVE_WALLET_ENVS, get_cron_config
from app.core.logging import setup_logger
from app.core.services.subscription_billing import run_subscription_cron
from app.payments import get_transfer_executor, get_wallet_assets_provider


async def main() -> int:
    setup_logger()
    config = get_cron_config()
    if not config.receive_wallet:
        print(f"{RECEIVE_WALLET_ENVS[0]} env var not set")
        return 1

    summary = await run_subscription_cron(
        wallet_assets=get_wallet_assets_provider(),
        transfer_executor=get_transfer_executor(),
        receive_wallet=config.receive_wallet,
    )
    print(summary.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
