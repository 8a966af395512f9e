# -*- coding: utf-8 -*-
"""
tests/modules/user_profile/test_profile_repository.py

Perfiles: alta perezosa, unión de compras, premium y suscripción en vivo.
"""

import pytest

from app.modules.user_profile.enums import SubscriptionTier
from app.modules.user_profile.models import UserProfile
from app.modules.user_profile.repositories import ProfileRepository
from app.shared.database import DocumentNotFound


@pytest.fixture
def profiles(store):
    return ProfileRepository(store)


async def test_ensure_profile_creates_once(profiles):
    created = await profiles.ensure_profile("user-1", "viajero@example.com")

    assert created.uid == "user-1"
    assert created.subscription == SubscriptionTier.FREE
    assert created.purchased_content == []
    assert created.created_at is not None

    await profiles.add_purchased_content("user-1", "goa")
    again = await profiles.ensure_profile("user-1", "otro@example.com")
    assert again.email == "viajero@example.com"
    assert again.purchased_content == ["goa"]


async def test_purchases_are_a_set(profiles):
    await profiles.ensure_profile("user-1")
    for content_id in ("goa", "kerala", "goa"):
        await profiles.add_purchased_content("user-1", content_id)

    profile = await profiles.get("user-1")
    assert sorted(profile.purchased_content) == ["goa", "kerala"]
    assert profile.has_access_to("kerala")
    assert not profile.has_access_to("taj")
    assert not profile.has_access_to(None)


async def test_upgrade_to_premium(profiles):
    await profiles.ensure_profile("user-1")
    await profiles.upgrade_to_premium("user-1")

    profile = await profiles.get("user-1")
    assert profile.is_premium
    assert profile.has_access_to("anything")


async def test_writes_require_existing_profile(profiles):
    with pytest.raises(DocumentNotFound):
        await profiles.add_purchased_content("ghost", "goa")
    with pytest.raises(DocumentNotFound):
        await profiles.upgrade_to_premium("ghost")


async def test_subscribe_delivers_snapshots(profiles):
    seen = []
    unsubscribe = await profiles.subscribe("user-1", seen.append)
    assert seen == [None]

    await profiles.ensure_profile("user-1")
    await profiles.upgrade_to_premium("user-1")
    assert isinstance(seen[-1], UserProfile)
    assert seen[-1].is_premium

    unsubscribe()
    await profiles.add_purchased_content("user-1", "goa")
    assert "goa" not in seen[-1].purchased_content


def test_model_accepts_stored_camel_case():
    profile = UserProfile.model_validate(
        {"id": "u", "subscription": "premium", "purchasedContent": ["a"], "createdAt": "2026-01-01T00:00:00Z"}
    )
    assert profile.uid == "u"
    assert profile.purchased_content == ["a"]
    assert profile.created_at.year == 2026
