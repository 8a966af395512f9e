# -*- coding: utf-8 -*-
"""
tests/modules/payments/services/test_entitlement_service.py
"""

import pytest

from app.modules.payments.enums import ContentKind, TransactionStatus
from app.modules.payments.exceptions import EntitlementGrantError
from app.modules.payments.services.entitlement_service import EntitlementService
from app.modules.user_profile.enums import SubscriptionTier
from app.shared.database import DocumentNotFound


@pytest.fixture
def service(profiles):
    return EntitlementService(profiles)


async def _completed(transactions, data):
    tx_id = await transactions.create_transaction(data)
    return await transactions.update_status(tx_id, TransactionStatus.COMPLETED, "pay_1")


async def test_grant_is_idempotent(service, profiles, transactions, make_transaction_data):
    await profiles.ensure_profile("user-1")
    tx = await _completed(transactions, make_transaction_data())

    await service.grant(tx)
    await service.grant(tx)

    profile = await profiles.get("user-1")
    assert profile.purchased_content == ["taj-mahal-360"]
    assert profile.subscription == SubscriptionTier.FREE


async def test_premium_grant(service, profiles, transactions, make_transaction_data):
    await profiles.ensure_profile("user-1")
    tx = await _completed(transactions, make_transaction_data(content_type=ContentKind.PREMIUM, content_id="premium"))

    await service.grant(tx)

    profile = await profiles.get("user-1")
    assert profile.is_premium
    assert profile.purchased_content == ["premium"]


async def test_pending_transaction_is_rejected(service, profiles, transactions, make_transaction_data):
    await profiles.ensure_profile("user-1")
    tx = await transactions.get(await transactions.create_transaction(make_transaction_data()))

    with pytest.raises(EntitlementGrantError):
        await service.grant(tx)
    assert (await profiles.get("user-1")).purchased_content == []


async def test_missing_profile(service, transactions, make_transaction_data):
    tx = await _completed(transactions, make_transaction_data())
    with pytest.raises(DocumentNotFound):
        await service.grant(tx)
