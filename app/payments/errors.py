"""Billing error taxonomy."""


class PaymentErrorCode:
    BAD_WALLET = "BAD_WALLET"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    TRANSFER_FAILED = "TRANSFER_FAILED"
    EXTERNAL_ERROR = "EXTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"


UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class PaymentError(Exception):
    """Expected failure of a billing cycle, carrying the code stored on the payment."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"PaymentError(code={self.code!r}, message={self.message!r})"


class WalletAssetsError(Exception):
    """The wallet-asset indexer could not be queried."""


def classify_payment_error(err: BaseException) -> tuple[str, str]:
    """
    Map an exception raised during a billing cycle to (failure_code, failure_reason).

    PaymentError keeps its own code, any other Exception is an EXTERNAL_ERROR,
    and anything else is UNKNOWN.
    """
    if isinstance(err, PaymentError):
        return err.code, err.message
    if isinstance(err, Exception):
        return PaymentErrorCode.EXTERNAL_ERROR, str(err) or err.__class__.__name__
    return PaymentErrorCode.UNKNOWN, UNKNOWN_ERROR_MESSAGE
