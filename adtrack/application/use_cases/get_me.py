from __future__ import annotations

from adtrack.application.dto.me import MeOutput
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.domain.entities.user import User


class GetMeUseCase:
    def __init__(self, *, subscription_port: SubscriptionPort):
        self._subscription_port = subscription_port

    def execute(self, *, user: User) -> MeOutput:
        plan_name = None
        subscription = self._subscription_port.get_active_subscription_for_user(user_id=user.id)
        if subscription is not None:
            plan = self._subscription_port.get_plan_by_id(plan_id=subscription.plan_id)
            if plan is not None:
                plan_name = plan.name

        return MeOutput(
            user_id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            is_admin=user.is_admin,
            plan_name=plan_name,
        )
