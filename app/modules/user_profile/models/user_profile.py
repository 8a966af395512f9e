# -*- coding: utf-8 -*-
"""
app/modules/user_profile/models/user_profile.py

Perfil del usuario en la colección `users` (id del documento = id del usuario).

Campos de acceso:
- subscription: free | premium
- purchasedContent: conjunto de ids comprados (solo crece)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.modules.user_profile.enums import SubscriptionTier

USERS_COLLECTION = "users"


class UserProfile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: str = Field(validation_alias=AliasChoices("id", "uid"))
    email: Optional[str] = None
    subscription: SubscriptionTier = SubscriptionTier.FREE
    purchased_content: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_premium(self) -> bool:
        return self.subscription == SubscriptionTier.PREMIUM

    def has_access_to(self, content_id: Optional[str]) -> bool:
        """Premium, o el contenido está en el conjunto comprado."""
        if self.is_premium:
            return True
        return content_id is not None and content_id in self.purchased_content


__all__ = ["USERS_COLLECTION", "UserProfile"]
