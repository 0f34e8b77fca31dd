"""Abstract key-value store that every repository persists through.

Keys are composite: an entity kind plus an optional owner, so a per-user
key can never collide with a global one whatever the username contains.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError

_FORBIDDEN_OWNER_CHARS = frozenset(":/\\")


@dataclass(frozen=True)
class StoreKey:
    kind: str
    owner: str | None = None

    def __post_init__(self) -> None:
        if not self.kind or not self.kind.isidentifier():
            raise ValidationError(f"Invalid store key kind: {self.kind!r}")
        if self.owner is not None:
            if not self.owner or self.owner.startswith("."):
                raise ValidationError(f"Invalid store key owner: {self.owner!r}")
            if _FORBIDDEN_OWNER_CHARS & set(self.owner):
                raise ValidationError(f"Invalid store key owner: {self.owner!r}")

    def __str__(self) -> str:
        if self.owner is None:
            return self.kind
        return f"{self.kind}:{self.owner}"


CATALOG = StoreKey("catalog")
USERS = StoreKey("users")
SESSION = StoreKey("session")


def wishlist_key(username: str) -> StoreKey:
    return StoreKey("wishlist", username)


def orders_key(username: str) -> StoreKey:
    return StoreKey("orders", username)


def credentials_key(username: str) -> StoreKey:
    return StoreKey("credentials", username)


def cart_key(username: str) -> StoreKey:
    return StoreKey("cart", username)


class KeyValueStore(ABC):

    @abstractmethod
    def load(self, key: StoreKey) -> object | None:
        """Return the decoded value, or None if the key is absent.

        Raises CorruptStateError if the stored content cannot be decoded.
        """

    @abstractmethod
    def save(self, key: StoreKey, value: object) -> None:
        """Encode and store a JSON-shaped value under ``key``."""

    @abstractmethod
    def delete(self, key: StoreKey) -> None:
        """Remove ``key`` if present."""
