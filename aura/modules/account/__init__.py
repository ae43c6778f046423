"""
Account module.

Public API:
- AccountService: delete_account / send_password_reset
"""

from .exceptions import MissingEmailError
from .service import AccountService, ACCOUNT_PATH, PASSWORD_RESET_SENT_MESSAGE

__all__ = [
    "AccountService",
    "ACCOUNT_PATH",
    "PASSWORD_RESET_SENT_MESSAGE",
    "MissingEmailError",
]
