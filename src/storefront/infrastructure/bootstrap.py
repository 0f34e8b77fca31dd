"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. One store, one catalog
and one ledger are built per process and passed down explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.application.session import Session
from storefront.domain.exceptions import ValidationError
from storefront.infrastructure.auth.local_auth_gateway import LocalAuthGateway
from storefront.infrastructure.payment.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from storefront.infrastructure.persistence.json_file_store import JsonFileStore
from storefront.infrastructure.persistence.store_catalog_repository import (
    StoreCatalogRepository,
)
from storefront.infrastructure.persistence.store_session_stash import (
    StoreSessionStash,
)
from storefront.infrastructure.persistence.store_user_order_ledger import (
    StoreUserOrderLedger,
)

DEFAULT_DATA_DIR = Path("data")
DEFAULT_ADMIN_PASSWORD = "timeisgold"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if value < 0:
        raise ValidationError(f"{name} cannot be negative")
    return value


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    payment_latency: float = 2.0
    payment_timeout: float = 10.0

    @staticmethod
    def from_env(data_dir: Path | None = None) -> Settings:
        """Read settings from STOREFRONT_* environment variables.

        ``data_dir`` (from the command line) wins over STOREFRONT_DATA_DIR.
        """
        if data_dir is None:
            data_dir = Path(os.environ.get("STOREFRONT_DATA_DIR") or DEFAULT_DATA_DIR)
        return Settings(
            data_dir=data_dir,
            admin_password=os.environ.get("STOREFRONT_ADMIN_PASSWORD")
            or DEFAULT_ADMIN_PASSWORD,
            payment_latency=_float_env("STOREFRONT_PAYMENT_LATENCY", 2.0),
            payment_timeout=_float_env("STOREFRONT_PAYMENT_TIMEOUT", 10.0),
        )


class Container:
    """Holds the per-process singletons built from Settings."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store = JsonFileStore(settings.data_dir)
        self.catalog = StoreCatalogRepository(self.store)
        self.ledger = StoreUserOrderLedger(self.store)
        self.auth = LocalAuthGateway(self.store, settings.admin_password)
        self.payment = SimulatedPaymentGateway(settings.payment_latency)
        self._stash = StoreSessionStash(self.store)

    def restore_session(self) -> Session:
        identity = self._stash.load_identity()
        cart = self._stash.load_cart(identity.username) if identity else None
        return Session(self.catalog, self.ledger, identity=identity, cart=cart)

    def persist_session(self, session: Session) -> None:
        self._stash.save(session.identity, session.cart_engine.cart)

    def discard_session(self, username: str) -> None:
        self._stash.discard(username)
