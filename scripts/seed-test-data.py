"""
Seed data for trying the subscription billing job locally.

Creates:
- User dev-user-001 with one active wallet (DEV_WALLET_PUBLIC_KEY)
- A subscription whose next payment is due now
- A second subscription whose end date has already passed (cancellation pass)

Usage (from the project root, with .env configured):
    python scripts/seed-test-data.py

Requires: database reachable, migrations applied (alembic upgrade head).
"""

import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

# Make sure .env is loaded before importing app (session reads DATABASE_URL)
from pathlib import Path
root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.chdir(root)

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select

from app.database.session import session_scope
from app.database.models.user import User
from app.database.models.wallet import Wallet
from app.database.models.subscription import Subscription


DEV_AUTH_ID = "dev-user-001"
DEV_EMAIL = "dev@eap.local"
DEV_WALLET_PUBLIC_KEY = os.getenv(
    "DEV_WALLET_PUBLIC_KEY",
    "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
)


async def main() -> None:
    now = datetime.now(timezone.utc)
    async with session_scope() as session:
        result = await session.execute(select(User).where(User.auth_provider_id == DEV_AUTH_ID))
        user = result.scalar_one_or_none()
        if not user:
            user = User(auth_provider_id=DEV_AUTH_ID, email=DEV_EMAIL, display_name="Developer")
            session.add(user)
            await session.flush()
            print(f"  Created user: {DEV_EMAIL} (id={user.id})")
        else:
            print(f"  User already exists: {DEV_EMAIL} (id={user.id})")

        result = await session.execute(
            select(Wallet).where(Wallet.user_id == user.id, Wallet.public_key == DEV_WALLET_PUBLIC_KEY)
        )
        wallet = result.scalar_one_or_none()
        if not wallet:
            wallet = Wallet(user_id=user.id, name="Main", public_key=DEV_WALLET_PUBLIC_KEY, active=True)
            session.add(wallet)
            await session.flush()
            print(f"  Created wallet: {DEV_WALLET_PUBLIC_KEY} (id={wallet.id})")
        else:
            wallet.active = True
            print(f"  Wallet already exists (id={wallet.id}), marked active")

        due = Subscription(user_id=user.id, active=True, start_date=now, next_payment_date=now)
        expired = Subscription(
            user_id=user.id,
            active=True,
            start_date=now - timedelta(days=60),
            next_payment_date=now + timedelta(days=15),
            end_date=now - timedelta(days=1),
        )
        session.add_all([due, expired])
        await session.flush()
        print(f"  Created due subscription (id={due.id})")
        print(f"  Created expired subscription (id={expired.id})")

    print("\nSeed done. Trigger the job with:")
    print('  curl -H "Authorization: Bearer $CRON_SECRET" http://localhost:8000/api/cron/subscription')


if __name__ == "__main__":
    asyncio.run(main())
