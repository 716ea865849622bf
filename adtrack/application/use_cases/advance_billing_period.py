from __future__ import annotations

import logging

from adtrack.application.dto.admin import AdvanceBillingPeriodInput, BillingPeriodOutput
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.domain.exceptions import SubscriptionNotFoundError


logger = logging.getLogger(__name__)


class AdvanceBillingPeriodUseCase:
    """Roll a subscription into its next billing period.

    Usage rows are keyed by period start, so moving the start is enough to
    reset every counter; rows of the previous period are left as they are.
    """

    def __init__(self, *, subscription_port: SubscriptionPort):
        self._subscription_port = subscription_port

    def execute(self, command: AdvanceBillingPeriodInput) -> BillingPeriodOutput:
        subscription = self._subscription_port.get_subscription_by_id(
            subscription_id=command.subscription_id
        )
        if subscription is None or not subscription.is_active:
            raise SubscriptionNotFoundError("Active subscription not found.")

        if subscription.current_period_end is not None:
            new_start = subscription.current_period_end
        else:
            new_start = command.now

        new_end = None
        if subscription.current_period_start is not None and subscription.current_period_end is not None:
            new_end = new_start + (subscription.current_period_end - subscription.current_period_start)

        updated = self._subscription_port.update_subscription_period(
            subscription_id=subscription.id,
            current_period_start=new_start,
            current_period_end=new_end,
            now=command.now,
        )
        logger.info(
            "billing_period_advanced subscription_id=%s period_start=%s period_end=%s",
            updated.id,
            updated.current_period_start,
            updated.current_period_end,
        )
        return BillingPeriodOutput(
            subscription_id=updated.id,
            current_period_start=updated.period_start,
            current_period_end=updated.current_period_end,
        )
