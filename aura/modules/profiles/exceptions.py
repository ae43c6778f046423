"""
Profiles module exceptions.

fetch_profile() itself never raises; these are for callers that need a
Profile or nothing, such as the dashboard.
"""

from aura.shared.exceptions import AuraError


class ProfileUnavailableError(AuraError):
    """Raised when the profile could not be read but the account still exists."""

    def __init__(self, message: str):
        super().__init__(message, code="PROFILE_UNAVAILABLE")
