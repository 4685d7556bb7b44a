"""Admin credential check.

A single email/password pair comes from configuration. There is no session or
token; callers decide what a successful check unlocks.
"""

import logging
import secrets

from brightwire.api.errors import AuthError, ValidationError
from brightwire.api.models import AdminIdentity

logger = logging.getLogger(__name__)


class CredentialCheck:
    """Compare supplied credentials against the configured admin pair."""

    def __init__(self, admin_email: str, admin_password: str) -> None:
        self._admin_email = admin_email
        self._admin_password = admin_password

    def authenticate(self, email: str | None, password: str | None) -> AdminIdentity:
        """Check an email/password pair.

        Both fields are always compared, so a failure says nothing about which
        one was wrong.

        Args:
            email: Supplied email, compared exactly and case-sensitively
            password: Supplied password

        Returns:
            AdminIdentity carrying the email

        Raises:
            ValidationError: If either field is missing
            AuthError: If the pair does not match
        """
        if not email or not password:
            raise ValidationError("Missing credentials")

        email_ok = secrets.compare_digest(email.encode(), self._admin_email.encode())
        password_ok = secrets.compare_digest(password.encode(), self._admin_password.encode())
        if not (email_ok and password_ok):
            logger.warning("Admin login failed")
            raise AuthError("Invalid credentials")

        logger.info("Admin login succeeded")
        return AdminIdentity(email=email)
