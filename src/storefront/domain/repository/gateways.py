"""Ports to collaborators outside the engine: sign-in and payment."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.checkout import CheckoutDraft, PaymentDetails
from storefront.domain.model.identity import Identity, UserProfile


class AuthGateway(ABC):

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Identity:
        """Return the identity, or raise InvalidCredentialsError."""

    @abstractmethod
    def register(self, profile: UserProfile, password: str) -> Identity:
        """Create a customer account, or raise UsernameTakenError."""


class PaymentGateway(ABC):

    @abstractmethod
    async def authorize(self, draft: CheckoutDraft, payment: PaymentDetails) -> str:
        """Authorize payment for ``draft`` and return a reference.

        May suspend for as long as the gateway takes to answer.
        """
