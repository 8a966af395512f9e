# -*- coding: utf-8 -*-
"""
app/modules/user_profile/routes/profile_routes.py

GET /profile/me → perfil y campos de acceso del usuario autenticado.
El documento se crea en la primera consulta (tier free, sin compras).

⚠️ Requiere autenticación JWT
"""

from fastapi import APIRouter, Depends

from app.shared.database import DocumentStore, get_document_store
from app.modules.auth import CurrentUser, get_current_user
from app.modules.user_profile.repositories import ProfileRepository
from app.modules.user_profile.schemas import UserProfileResponse

router = APIRouter(prefix="/profile", tags=["User Profile"])


def get_profile_repository(store: DocumentStore = Depends(get_document_store)) -> ProfileRepository:
    return ProfileRepository(store)


@router.get("/me", response_model=UserProfileResponse)
async def get_my_profile(
    user: CurrentUser = Depends(get_current_user),
    profiles: ProfileRepository = Depends(get_profile_repository),
):
    profile = await profiles.ensure_profile(user.user_id, user.email)
    return UserProfileResponse.from_model(profile)


# Fin del archivo app/modules/user_profile/routes/profile_routes.py
