"""
Billing collaborators - abstract bases for the on-chain services the job uses.

Implementations: HeliusClient (wallet-asset lookup),
ServerWalletTransferExecutor (server-side token transfer).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

LAMPORTS_PER_SOL = 1_000_000_000
SOL_MINT = "So11111111111111111111111111111111111111112"
SOL_SYMBOL = "SOL"


@dataclass
class TokenHolding:
    """Fungible token balance held by a wallet."""
    mint: str
    symbol: Optional[str]
    amount: Decimal  # UI amount (already divided by 10**decimals)
    decimals: int = 0
    usd_value: Optional[float] = None


@dataclass
class Portfolio:
    """Aggregated on-chain holdings of one wallet."""
    owner: str
    native_lamports: int = 0
    tokens: List[TokenHolding] = field(default_factory=list)
    total_usd_value: Optional[float] = None

    @property
    def sol_balance(self) -> Decimal:
        return Decimal(self.native_lamports) / Decimal(LAMPORTS_PER_SOL)

    def token_balance(self, mint: str) -> Decimal:
        """UI balance for a mint; SOL_MINT resolves to the native balance."""
        if mint == SOL_MINT:
            return self.sol_balance
        return sum((t.amount for t in self.tokens if t.mint == mint), Decimal(0))


@dataclass
class TransferData:
    signature: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TransferResult:
    """Result of a server-side transfer. `data` is None when nothing was sent."""
    success: bool
    data: Optional[TransferData] = None
    error: Optional[str] = None


class WalletAssetsProvider(ABC):
    """Looks up the assets held by a wallet (blockchain indexer)."""

    @abstractmethod
    async def search_wallet_assets(self, owner: str) -> Portfolio:
        """Return the portfolio of `owner`. Raises WalletAssetsError on failure."""
        pass


class TransferExecutor(ABC):
    """Executes token transfers from user wallets held by the server."""

    @abstractmethod
    async def transfer_token(
        self,
        user_id: int,
        wallet_id: int,
        receiver_address: str,
        token_address: str,
        amount: float,
        token_symbol: str,
    ) -> Optional[TransferResult]:
        """Send `amount` of `token_address` from the wallet to `receiver_address`."""
        pass
