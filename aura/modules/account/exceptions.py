"""
Account module exceptions.
"""

from aura.shared.exceptions import AuraError


class MissingEmailError(AuraError):
    """Raised when an email-based operation runs for an account without an email."""

    def __init__(self):
        super().__init__(
            "このアカウントにはメールアドレスが登録されていません。",
            code="MISSING_EMAIL",
        )
