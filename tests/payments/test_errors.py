"""Billing error taxonomy and classification."""

from app.payments.errors import (
    PaymentError,
    PaymentErrorCode,
    WalletAssetsError,
    classify_payment_error,
)


class TestClassifyPaymentError:

    def test_payment_error_keeps_code_and_message(self):
        err = PaymentError(PaymentErrorCode.BAD_WALLET, "User does not have an active wallet")
        assert classify_payment_error(err) == (
            PaymentErrorCode.BAD_WALLET,
            "User does not have an active wallet",
        )

    def test_generic_exception_is_external_error(self):
        assert classify_payment_error(ValueError("bad json")) == (
            PaymentErrorCode.EXTERNAL_ERROR,
            "bad json",
        )

    def test_indexer_error_is_external_error(self):
        code, _ = classify_payment_error(WalletAssetsError("down"))
        assert code == PaymentErrorCode.EXTERNAL_ERROR

    def test_exception_without_message_uses_class_name(self):
        assert classify_payment_error(TimeoutError()) == (
            PaymentErrorCode.EXTERNAL_ERROR,
            "TimeoutError",
        )

    def test_base_exception_is_unknown(self):
        class Halt(BaseException):
            pass

        assert classify_payment_error(Halt("x")) == (
            PaymentErrorCode.UNKNOWN,
            "Unknown error occurred",
        )
