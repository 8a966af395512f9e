# -*- coding: utf-8 -*-
"""
app/modules/user_profile/schemas/profile_schemas.py

Respuesta de GET /profile/me.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.modules.user_profile.enums import SubscriptionTier
from app.modules.user_profile.models import UserProfile


class UserProfileResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    subscription: SubscriptionTier
    is_premium: bool
    purchased_content: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, profile: UserProfile) -> "UserProfileResponse":
        return cls(
            user_id=profile.uid,
            email=profile.email,
            subscription=profile.subscription,
            is_premium=profile.is_premium,
            purchased_content=sorted(profile.purchased_content),
            created_at=profile.created_at,
        )


__all__ = ["UserProfileResponse"]
