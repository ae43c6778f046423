"""
Account management.

Deleting the account removes the profile, the detection history and any
subscription on the backend, then ends the session. A password reset is
delegated to the identity provider.
"""

import logging
from typing import Optional

from aura.modules.session.models import Session
from aura.modules.session.service import SessionStore
from aura.shared.exceptions import SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.navigation import HOME_PATH, INavigator
from aura.shared.workflow import WorkflowError, describe_error

from .exceptions import MissingEmailError

logger = logging.getLogger(__name__)

ACCOUNT_PATH = "/v1/users/me"
PASSWORD_RESET_SENT_MESSAGE = "パスワード再設定用のメールを送信しました。メールボックスをご確認ください。"


class AccountService:
    """Destructive and credential operations on the signed-in account."""

    def __init__(
        self,
        client: BackendClient,
        sessions: SessionStore,
        navigator: INavigator,
        app_url: str,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._sessions = sessions
        self._navigator = navigator
        self._app_url = app_url.rstrip("/")
        self._timeout = timeout

        self.is_loading = False
        self.error: Optional[WorkflowError] = None
        self.notice: Optional[str] = None

    def _reset_messages(self) -> None:
        self.error = None
        self.notice = None

    async def delete_account(self, session: Optional[Session]) -> bool:
        """
        Delete the account, sign out and return home.

        Returns:
            True if the account was deleted
        """
        self._reset_messages()
        if session is None:
            self.error = describe_error(SessionMissingError(), "account")
            return False

        self.is_loading = True
        try:
            await self._client.delete(
                ACCOUNT_PATH,
                token=session.access_token,
                timeout=self._timeout,
            )
        except Exception as e:
            self.error = describe_error(e, "account")
            return False
        finally:
            self.is_loading = False

        logger.info(f"Account {session.user.id} deleted")
        try:
            await self._sessions.sign_out()
        except Exception as e:
            # The account is gone either way; the store has already cleared its session
            logger.warning(f"Sign-out after account deletion failed: {e}")
        self._navigator.replace(HOME_PATH)
        return True

    async def send_password_reset(self, session: Optional[Session]) -> bool:
        """
        Mail a password-reset link to the session's address.

        Returns:
            True if the provider accepted the request
        """
        self._reset_messages()
        if session is None:
            self.error = describe_error(SessionMissingError(), "account")
            return False
        if not session.user.email:
            self.error = describe_error(MissingEmailError(), "account")
            return False

        try:
            await self._sessions.provider.send_password_reset(
                session.user.email,
                redirect_to=f"{self._app_url}/",
            )
        except Exception as e:
            self.error = describe_error(e, "account")
            return False

        self.notice = PASSWORD_RESET_SENT_MESSAGE
        return True
