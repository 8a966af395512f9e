# -*- coding: utf-8 -*-
"""
app/modules/user_profile/repositories/profile_repository.py

Repositorio de perfiles de usuario sobre el almacén de documentos.

Responsabilidades:
- Alta perezosa del perfil (primer acceso autenticado)
- Unión idempotente de contenido comprado
- Subida a premium
- Suscripción en vivo a un perfil (la usa el gate de vista previa)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from app.shared.database import SERVER_TIMESTAMP, ArrayUnion, DocumentStore, Record, Unsubscribe
from app.shared.database.repository import BaseRepository
from app.modules.user_profile.enums import SubscriptionTier
from app.modules.user_profile.models import USERS_COLLECTION, UserProfile

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[UserProfile]):
    collection = USERS_COLLECTION

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store, UserProfile)

    async def ensure_profile(self, uid: str, email: Optional[str] = None) -> UserProfile:
        profile = await self.get(uid)
        if profile is not None:
            return profile
        await self.store.set(
            self.collection,
            uid,
            {
                "email": email,
                "subscription": SubscriptionTier.FREE.value,
                "purchasedContent": [],
                "createdAt": SERVER_TIMESTAMP,
                "updatedAt": SERVER_TIMESTAMP,
            },
        )
        logger.info("profile_created uid=%s", uid)
        created = await self.get(uid)
        return created if created is not None else UserProfile(uid=uid, email=email)

    async def add_purchased_content(self, uid: str, content_id: str) -> None:
        """Unión de conjuntos: repetir la llamada no duplica. Falla si el perfil no existe."""
        await self.store.update(
            self.collection,
            uid,
            {"purchasedContent": ArrayUnion([content_id]), "updatedAt": SERVER_TIMESTAMP},
        )

    async def upgrade_to_premium(self, uid: str) -> None:
        await self.store.update(
            self.collection,
            uid,
            {"subscription": SubscriptionTier.PREMIUM.value, "updatedAt": SERVER_TIMESTAMP},
        )

    async def subscribe(
        self,
        uid: str,
        on_change: Callable[[Optional[UserProfile]], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> Unsubscribe:
        def _forward(record: Optional[Record]) -> None:
            on_change(self._to_model(record) if record is not None else None)

        return await self.store.subscribe_document(self.collection, uid, _forward, on_error)


__all__ = ["ProfileRepository"]
