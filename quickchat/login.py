"""
Design (login.py)
- Purpose: Verify login attempts against one Registration.
- Inputs: Attempted username/password strings.
- Outputs: bool per attempt; a status text for the last attempt.
- Side effects: Updates access_granted.
- Thread-safety: Single-session object.
"""

import logging

from .config import LOGIN_MISMATCH, LOGIN_WELCOME
from .registration import Registration

logger = logging.getLogger(__name__)


class Login:
    """Plaintext credential check bound to a single Registration."""

    def __init__(self, registration: Registration) -> None:
        self.registration = registration
        self.access_granted = False

    @property
    def username(self) -> str | None:
        return self.registration.username

    def login_user(self, username: str | None, password: str | None) -> bool:
        """
        Purpose: Compare attempted credentials with the stored ones (case-sensitive).
        Inputs: username, password (None never matches).
        Outputs: True if both match.
        Side effects: Sets access_granted to the result.
        """
        self.access_granted = (
            username is not None
            and password is not None
            and username == self.registration.username
            and password == self.registration.password
        )
        logger.info("Login attempt for username=%r: %s", username, "granted" if self.access_granted else "denied")
        return self.access_granted

    def return_login_status(self) -> str:
        if self.access_granted:
            return LOGIN_WELCOME.format(
                first=self.registration.first_name,
                last=self.registration.last_name,
            )
        return LOGIN_MISMATCH
