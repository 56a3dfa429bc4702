"""
Admin credential check.

Deliberately minimal: one plaintext credential, a known default that
provisions it on first login, and an unconditional reset. No sessions,
hashing or rate limiting.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from storefront.database.credentials import CredentialStore
from storefront.errors import AuthFailure, CatalogValidationError

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


class AdminAuth:
    def __init__(
        self,
        credentials: CredentialStore,
        username: str = ADMIN_USERNAME,
        default_password: str = DEFAULT_ADMIN_PASSWORD,
    ) -> None:
        self.credentials = credentials
        self.username = username
        self.default_password = default_password

    def login(self, password: Any) -> bool:
        """
        Check `password` against the stored admin credential.

        When no credential exists yet, only the default password succeeds,
        and doing so provisions the credential.

        Raises:
            AuthFailure: password does not match.
        """
        user = self.credentials.get_user_by_username(self.username)
        if user is None:
            if password == self.default_password:
                self.credentials.create_user(self.username, password)
                logger.info("Admin credential provisioned with default password")
                return True
            logger.warning("Admin login rejected: no credential provisioned")
            raise AuthFailure()

        if isinstance(password, str) and user.password == password:
            return True
        logger.warning("Admin login rejected: wrong password")
        raise AuthFailure()

    def reset_password(self, new_password: Optional[str]) -> bool:
        if not new_password:
            raise CatalogValidationError({"newPassword": "is required"}, message="Password required")
        self.credentials.set_password(self.username, new_password)
        logger.info("Admin password reset")
        return True
