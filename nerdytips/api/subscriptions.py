"""
@file: subscriptions.py
@description:
Public subscription catalogue for the pricing page.

Routes:
- GET /api/subscriptions/plans: paid tiers and whether card payments are configured
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from nerdytips.api.deps import get_app_settings
from nerdytips.core.config import Settings
from nerdytips.services.plans import SubscriptionPlan, list_plans

router = APIRouter()


class PlansResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plans: List[SubscriptionPlan]
    payments_enabled: bool


@router.get("/plans", response_model=PlansResponse, tags=["Subscriptions"])
def get_plans(settings: Settings = Depends(get_app_settings)) -> PlansResponse:
    return PlansResponse(plans=list_plans(), payments_enabled=bool(settings.STRIPE_SECRET_KEY))
