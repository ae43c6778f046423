"""
Entitlement service implementation.

Classifies the result of a profile read:
- row found          -> ProfileLoaded
- zero rows          -> DeletedAccount (terminal, force sign-out)
- query raised       -> TransientError (session preserved)
"""

import logging

from aura.modules.session.models import Session
from aura.shared.exceptions import AccountDeletedError, ValidationError, UNEXPECTED_MESSAGE
from aura.shared.schemas import parse_payload

from .exceptions import ProfileUnavailableError
from .interfaces import IEntitlementService
from .models import DeletedAccount, Profile, ProfileLoaded, ProfileOutcome, TransientError
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

PROFILE_FETCH_FAILED_MESSAGE = "プロフィールの取得に失敗しました。"


class EntitlementService(IEntitlementService):
    """Reads plan records through a ProfileRepository."""

    def __init__(self, repository: ProfileRepository):
        self._repository = repository

    async def fetch_profile(self, session: Session) -> ProfileOutcome:
        try:
            row = self._repository.fetch_row(session.user.id, session.access_token)
        except Exception as e:
            logger.warning(f"Profile fetch failed for {session.user.id}: {e}")
            return TransientError(message=PROFILE_FETCH_FAILED_MESSAGE)

        if row is None:
            logger.warning(f"No profile row for {session.user.id}; account was deleted")
            return DeletedAccount()

        try:
            profile = parse_payload(Profile, row)
        except ValidationError as e:
            logger.error(
                f"Profile row failed validation (code={e.code}, field={e.field}): {e.reason}"
            )
            return TransientError(message=UNEXPECTED_MESSAGE)

        return ProfileLoaded(profile=profile)


def require_profile(outcome: ProfileOutcome) -> Profile:
    """
    Unwrap a fetch outcome for callers that need a profile or nothing.

    Raises:
        AccountDeletedError: For DeletedAccount
        ProfileUnavailableError: For TransientError
    """
    if isinstance(outcome, ProfileLoaded):
        return outcome.profile
    if isinstance(outcome, DeletedAccount):
        raise AccountDeletedError()
    raise ProfileUnavailableError(outcome.message)
