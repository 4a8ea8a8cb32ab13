"""
Cron Router - scheduled jobs triggered over HTTP by the platform scheduler.

Every request must carry `Authorization: Bearer <CRON_SECRET>`.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.core.config import get_cron_config
from app.core.services.subscription_billing import run_subscription_cron
from app.payments import (
    TransferExecutor,
    WalletAssetsProvider,
    get_transfer_executor,
    get_wallet_assets_provider,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/cron/subscription")
async def subscription_cron(
    request: Request,
    wallet_assets: WalletAssetsProvider = Depends(get_wallet_assets_provider),
    transfer_executor: TransferExecutor = Depends(get_transfer_executor),
):
    """Charge due subscriptions, then cancel expired ones."""
    config = get_cron_config()
    missing = config.missing()
    if missing:
        logger.error(f"[cron/subscription] {missing} env var not set")
        return PlainTextResponse(f"{missing} env var not set", status_code=500)

    auth_header = request.headers.get("authorization")
    if auth_header != f"Bearer {config.cron_secret}":
        logger.warning("[cron/subscription] Rejected request with invalid authorization")
        return PlainTextResponse("Unauthorized", status_code=401)

    await run_subscription_cron(
        wallet_assets=wallet_assets,
        transfer_executor=transfer_executor,
        receive_wallet=config.receive_wallet,
    )
    return {"success": True}
