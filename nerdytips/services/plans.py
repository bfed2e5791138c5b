"""
@file: plans.py
@description
Catalogue of paid subscription tiers offered on the pricing page.
Checkout itself is handled by the payment provider and is not part of this API.
"""

from typing import List

from pydantic import BaseModel

from nerdytips.db.models import Tier


class SubscriptionPlan(BaseModel):
    tier: Tier
    name: str
    price: float
    currency: str = "USD"
    features: List[str]
    highlighted: bool = False


SUBSCRIPTION_PLANS: List[SubscriptionPlan] = [
    SubscriptionPlan(
        tier=Tier.BASIC,
        name="Basic",
        price=9.99,
        features=["10 Standard Tips/Day", "Basic AI Analysis", "Email Support", "No Ads"],
    ),
    SubscriptionPlan(
        tier=Tier.PRO,
        name="Pro",
        price=24.99,
        highlighted=True,
        features=[
            "Unlimited Standard Tips",
            "3 Elite Tips/Day",
            "Advanced Neural Analysis",
            "Real-time Notifications",
            "Priority Support",
        ],
    ),
    SubscriptionPlan(
        tier=Tier.ELITE,
        name="Elite",
        price=49.99,
        features=[
            "Full Access to All Tips",
            "Unlimited Elite Tips",
            "Betting Master Class",
            "1-on-1 Strategy Call",
            "Exclusive Discord Access",
        ],
    ),
]


def list_plans() -> List[SubscriptionPlan]:
    return list(SUBSCRIPTION_PLANS)
