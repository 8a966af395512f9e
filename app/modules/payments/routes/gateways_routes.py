# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/gateways_routes.py

GET /payments/gateways/available → pasarelas presentes y activas (sin secretos).
"""

from fastapi import APIRouter, Depends

from app.modules.payments.dependencies import get_gateway_config_repository
from app.modules.payments.repositories import GatewayConfigRepository
from app.modules.payments.schemas import AvailableGatewaysOut

router = APIRouter(prefix="/gateways", tags=["payments:gateways"])


@router.get("/available", response_model=AvailableGatewaysOut)
async def available_gateways(
    config_repo: GatewayConfigRepository = Depends(get_gateway_config_repository),
):
    config = await config_repo.load()
    if config is None:
        return AvailableGatewaysOut()
    return AvailableGatewaysOut(gateways=[g.value for g in config.enabled_gateways()])
