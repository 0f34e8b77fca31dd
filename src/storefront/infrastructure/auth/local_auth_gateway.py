"""AuthGateway backed by the local store.

Profiles go in the ``users`` key without credentials. Password hashes are
kept per user under ``credentials:<username>``. The admin account is not
in the user table; its password comes from configuration.
"""

from __future__ import annotations

import hmac
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from storefront.domain.exceptions import (
    CorruptStateError,
    InvalidCredentialsError,
    UsernameTakenError,
    ValidationError,
)
from storefront.domain.model.identity import (
    ADMIN,
    ADMIN_USERNAME,
    Identity,
    Role,
    UserProfile,
)
from storefront.domain.repository.gateways import AuthGateway
from storefront.domain.repository.key_value_store import (
    USERS,
    KeyValueStore,
    credentials_key,
)

logger = logging.getLogger(__name__)


class LocalAuthGateway(AuthGateway):

    def __init__(self, store: KeyValueStore, admin_password: str) -> None:
        self._store = store
        self._admin_password = admin_password

    def authenticate(self, username: str, password: str) -> Identity:
        if username == ADMIN_USERNAME:
            if hmac.compare_digest(password.encode(), self._admin_password.encode()):
                return ADMIN
            raise InvalidCredentialsError("Invalid username or password")

        profile = self._find_profile(username)
        stored = self._load_credentials(username) if profile is not None else None
        if profile is None or stored is None:
            raise InvalidCredentialsError("Invalid username or password")

        if not check_password_hash(stored["hash"], password):
            raise InvalidCredentialsError("Invalid username or password")
        return profile.identity()

    def register(self, profile: UserProfile, password: str) -> Identity:
        username = profile.username.strip()
        if not username:
            raise ValidationError("Username is required")
        # Raises ValidationError for names that cannot be a store key.
        credentials_key(username)
        if not password:
            raise ValidationError("Password is required")
        if username == ADMIN_USERNAME or self._find_profile(username) is not None:
            raise UsernameTakenError("Username already exists")

        profiles = self._load_profiles()
        new_profile = UserProfile(
            username=username, name=profile.name, email=profile.email, role=Role.CUSTOMER
        )
        profiles.append(new_profile)
        self._store.save(
            credentials_key(username),
            {"hash": generate_password_hash(password)},
        )
        self._store.save(USERS, [self._to_raw(p) for p in profiles])
        logger.info("Registered user %s", username)
        return new_profile.identity()

    def list_profiles(self) -> list[UserProfile]:
        return self._load_profiles()

    # --- Helpers --------------------------------------------------------------

    def _find_profile(self, username: str) -> UserProfile | None:
        for profile in self._load_profiles():
            if profile.username == username:
                return profile
        return None

    def _load_profiles(self) -> list[UserProfile]:
        try:
            raw = self._store.load(USERS)
        except CorruptStateError:
            logger.warning("Stored user table is corrupt; treating it as empty")
            return []
        if not isinstance(raw, list):
            return []
        return [
            self._to_domain(item)
            for item in raw
            if isinstance(item, dict) and "username" in item
        ]

    def _load_credentials(self, username: str) -> dict | None:
        try:
            raw = self._store.load(credentials_key(username))
        except CorruptStateError:
            logger.warning("Stored credentials for %s are corrupt", username)
            return None
        if isinstance(raw, dict) and isinstance(raw.get("hash"), str):
            return raw
        return None

    @staticmethod
    def _to_raw(profile: UserProfile) -> dict:
        return {
            "username": profile.username,
            "name": profile.name,
            "email": profile.email,
            "role": profile.role.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> UserProfile:
        return UserProfile(
            username=raw["username"],
            name=raw.get("name") or "",
            email=raw.get("email") or "",
            role=Role.CUSTOMER,
        )
