"""
OAuth token envelope.
Defines the token record persisted in the credential store and its JSON form.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class TokenInfo(BaseModel):
    """OAuth token data stored as a single credential entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    access_token: str
    token_type: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None
    scope: Optional[str] = None

    @field_validator("expiry")
    @classmethod
    def ensure_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Treat naive expiry timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def has_expiry(self) -> bool:
        """False when expiry is unset or the zero time Go clients write for it."""
        return self.expiry is not None and self.expiry.year > 1

    def is_expired(self, leeway: int = 0) -> bool:
        """
        Check if token is expired.

        Args:
            leeway: Seconds before the real expiry at which the token
                already counts as expired

        Returns:
            True if the token has an expiry and it has passed
        """
        if not self.has_expiry:
            return False
        return datetime.now(timezone.utc) + timedelta(seconds=leeway) >= self.expiry

    def expires_in(self) -> Optional[int]:
        """Get seconds until expiration."""
        if not self.has_expiry:
            return None
        delta = self.expiry - datetime.now(timezone.utc)
        return max(0, int(delta.total_seconds()))

    def authorization_header(self) -> str:
        """Value for the HTTP Authorization header."""
        return f"{self.token_type or 'Bearer'} {self.access_token}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self) -> str:
        """Serialize to the stored JSON form."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenInfo":
        """Create from dictionary."""
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, raw: str) -> "TokenInfo":
        """Create from the stored JSON form."""
        return cls.model_validate_json(raw)
