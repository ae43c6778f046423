"""
Billing module exceptions.
"""

from aura.shared.exceptions import AuraError


class BillingError(AuraError):
    """Base exception for billing-related errors."""

    pass


class MissingBillingCustomerError(BillingError):
    """
    Raised when the billing portal is requested for a profile without a
    billing customer. The request would fail, so it is never sent.
    """

    def __init__(self):
        super().__init__(
            "請求情報が登録されていないため、管理ページを開けません。",
            code="MISSING_BILLING_CUSTOMER",
        )


class VerificationError(BillingError):
    """Raised when the backend rejects a payment verification or sync."""

    def __init__(self, message: str, status_code: int):
        super().__init__(
            message,
            code="PAYMENT_VERIFICATION_FAILED",
            details={"status_code": status_code},
        )
