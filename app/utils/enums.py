"""
String constants for billing fields.
Using plain strings (not Enums) so values map 1:1 to the database columns.
"""


class PaymentStatus:
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class WalletChain:
    SOLANA = "SOLANA"
