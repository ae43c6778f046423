"""
Session module data models.

A Session mirrors what the identity provider (Supabase Auth) issued:
a bearer token plus the identity it belongs to.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import jwt
from pydantic import BaseModel, Field


class AuthEvent(str, Enum):
    """Session-change notifications emitted by the identity provider."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"

    @classmethod
    def parse(cls, value: object) -> "AuthEvent":
        """Map a provider event (enum member or plain string) to AuthEvent."""
        raw = getattr(value, "value", value)
        try:
            return cls(str(raw))
        except ValueError:
            return cls.USER_UPDATED


class SessionUser(BaseModel):
    """The identity a session belongs to."""

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")

    model_config = {"frozen": True}


class Session(BaseModel):
    """
    An authenticated session.

    Exists only while the user is signed in. The access token is opaque
    to this client; it is forwarded as a bearer credential.
    """

    access_token: str = Field(..., min_length=1, description="Bearer credential")
    user: SessionUser = Field(..., description="Authenticated identity")
    expires_at: Optional[int] = Field(None, description="Expiry as a Unix timestamp")

    model_config = {"frozen": True}

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the token has passed its expiry. Unknown expiry never expires."""
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now.timestamp() >= self.expires_at

    @classmethod
    def from_access_token(cls, token: str) -> "Session":
        """
        Build a session from a Supabase access token.

        Reads the sub, email and exp claims. The signature is not checked:
        the token is only ever forwarded to services that verify it.

        Raises:
            jwt.InvalidTokenError: If the token cannot be decoded or has no subject
        """
        claims = jwt.decode(token, options={"verify_signature": False})
        subject = claims.get("sub")
        if not subject:
            raise jwt.InvalidTokenError("token has no subject")
        return cls(
            access_token=token,
            user=SessionUser(id=subject, email=claims.get("email")),
            expires_at=claims.get("exp"),
        )
