"""
User models — per-user encoder configuration and user details.
"""

from typing import Any, Optional

from pydantic import BaseModel

USER_DETAIL_FIELDS = (
    "name", "username", "email", "organization", "phone", "picture", "gender", "byear", "custom",
)


class UserConfig(BaseModel):
    device_id: str
    country_code: Optional[str] = None
    city: Optional[str] = None
    ip_address: Optional[str] = None


class UserDetails(BaseModel):
    """user_details payload. Only fields that were explicitly given are sent."""
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    organization: Optional[str] = None
    phone: Optional[str] = None
    picture: Optional[str] = None  # URL
    gender: Optional[str] = None   # "M" | "F"
    byear: Optional[int] = None
    custom: Optional[dict[str, Any]] = None

    def to_fragment(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
