"""
Design (registration.py)
- Purpose: Hold the single user's registration fields behind validating setters.
- Inputs: Raw strings from the registration form.
- Outputs: bool per setter; RegistrationResult for a full registration.
- Side effects: Mutates the Registration's own fields only.
- Thread-safety: Single-session object; not shared between threads.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List

from .config import (
    FIRST_NAME_ERROR,
    FIRST_NAME_OK,
    LAST_NAME_ERROR,
    LAST_NAME_OK,
    PASSWORD_ERROR,
    PASSWORD_OK,
    PHONE_ERROR,
    PHONE_OK,
    REGISTRATION_FAILED,
    REGISTRATION_SUCCESSFUL,
    USERNAME_ERROR,
    USERNAME_OK,
)
from .validators import (
    is_valid_password,
    is_valid_person_name,
    is_valid_phone_number,
    is_valid_username,
)

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """
    Design (RegistrationResult)
    - Fields:
        field_messages: five outcome texts in fixed order
                        (username, password, phone, first name, last name).
        overall: REGISTRATION_SUCCESSFUL or REGISTRATION_FAILED.
        successful: True iff every field was accepted.
    """
    field_messages: List[str] = field(default_factory=list)
    overall: str = REGISTRATION_FAILED
    successful: bool = False

    def messages(self) -> List[str]:
        """All six lines: the five field outcomes followed by the overall status."""
        return [*self.field_messages, self.overall]


class Registration:
    """
    Design (Registration)
    - State:
        username, password, phone_number, first_name, last_name: str or None (unset).
    - Setters store the value only when it is valid; invalid input clears the field
      back to None and returns False.
    """

    def __init__(self) -> None:
        self.username: str | None = None
        self.password: str | None = None
        self.phone_number: str | None = None
        self.first_name: str | None = None
        self.last_name: str | None = None

    # -------- Validating setters --------

    def set_username(self, username: str | None) -> bool:
        ok = is_valid_username(username)
        self.username = username if ok else None
        return ok

    def set_password(self, password: str | None) -> bool:
        ok = is_valid_password(password)
        self.password = password if ok else None
        return ok

    def set_phone_number(self, phone_number: str | None) -> bool:
        ok = is_valid_phone_number(phone_number)
        self.phone_number = phone_number if ok else None
        return ok

    def set_first_name(self, first_name: str | None) -> bool:
        ok = is_valid_person_name(first_name)
        self.first_name = first_name if ok else None
        return ok

    def set_last_name(self, last_name: str | None) -> bool:
        ok = is_valid_person_name(last_name)
        self.last_name = last_name if ok else None
        return ok

    # -------- Full registration --------

    def register(
        self,
        username: str | None,
        password: str | None,
        phone_number: str | None,
        first_name: str | None,
        last_name: str | None,
    ) -> RegistrationResult:
        """
        Purpose: Validate and store all five fields in fixed order.
        Inputs: Raw field values.
        Outputs: RegistrationResult with one message per field plus the overall status.
        Side effects: Sets (or clears) the five fields.
        """
        steps: List[tuple[Callable[[str | None], bool], str | None, str, str]] = [
            (self.set_username, username, USERNAME_OK, USERNAME_ERROR),
            (self.set_password, password, PASSWORD_OK, PASSWORD_ERROR),
            (self.set_phone_number, phone_number, PHONE_OK, PHONE_ERROR),
            (self.set_first_name, first_name, FIRST_NAME_OK, FIRST_NAME_ERROR),
            (self.set_last_name, last_name, LAST_NAME_OK, LAST_NAME_ERROR),
        ]

        result = RegistrationResult()
        all_ok = True
        for setter, value, ok_text, error_text in steps:
            if setter(value):
                result.field_messages.append(ok_text)
            else:
                result.field_messages.append(error_text)
                all_ok = False

        result.successful = all_ok
        result.overall = REGISTRATION_SUCCESSFUL if all_ok else REGISTRATION_FAILED
        logger.info("Registration %s for username=%r", "succeeded" if all_ok else "failed", self.username)
        return result

    def is_complete(self) -> bool:
        """True when every field currently holds a valid value."""
        return None not in (
            self.username,
            self.password,
            self.phone_number,
            self.first_name,
            self.last_name,
        )
