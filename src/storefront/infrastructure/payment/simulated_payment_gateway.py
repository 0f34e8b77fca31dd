"""Payment gateway that only pretends: it waits, then approves."""

from __future__ import annotations

import asyncio
import logging
import uuid

from storefront.domain.model.checkout import CheckoutDraft, PaymentDetails
from storefront.domain.repository.gateways import PaymentGateway

logger = logging.getLogger(__name__)


class SimulatedPaymentGateway(PaymentGateway):

    def __init__(self, latency: float = 2.0) -> None:
        self._latency = latency

    async def authorize(self, draft: CheckoutDraft, payment: PaymentDetails) -> str:
        logger.debug("Authorizing %s for %r", draft.total, payment)
        await asyncio.sleep(self._latency)
        return f"SIM-{uuid.uuid4().hex[:10]}"
