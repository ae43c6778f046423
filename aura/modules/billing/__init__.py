"""
Billing module.

Drives the hosted checkout and customer-portal flows and reconciles the
plan record when the user returns.

Public API:
- BillingWorkflow: start_upgrade / manage_billing
- PaymentReconciler: verify_checkout / sync_subscription / return_to_app
- available_action: which action the plan section offers
- Billing exceptions: BillingError, MissingBillingCustomerError, VerificationError
"""

from .models import BillingAction, BillingStatus, RedirectSession, ReconciliationStatus
from .exceptions import BillingError, MissingBillingCustomerError, VerificationError
from .service import BillingWorkflow, available_action, CHECKOUT_PATH, PORTAL_PATH
from .reconciliation import PaymentReconciler, VERIFY_PATH, SYNC_PATH, SERVER_ERROR_MESSAGE

__all__ = [
    # Models
    "BillingAction",
    "BillingStatus",
    "RedirectSession",
    "ReconciliationStatus",
    # Exceptions
    "BillingError",
    "MissingBillingCustomerError",
    "VerificationError",
    # Workflows
    "BillingWorkflow",
    "PaymentReconciler",
    "available_action",
    # Endpoints
    "CHECKOUT_PATH",
    "PORTAL_PATH",
    "VERIFY_PATH",
    "SYNC_PATH",
    "SERVER_ERROR_MESSAGE",
]
