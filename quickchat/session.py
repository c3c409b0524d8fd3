"""
Design (session.py)
- Purpose: One user's session: the caller-facing surface used by the UI (register, log in,
           create/send/store/disregard messages, search, report, delete, load).
- Inputs: Raw strings collected by the presentation layer.
- Outputs: Feedback texts ready for display, plus the underlying objects where useful.
- Side effects: Mutates the owned Registration, Login and MessageStore; store/load touch disk.
- Thread-safety: Intended for the UI thread; MessageStore does its own locking.
"""

import logging
import random
from pathlib import Path
from typing import List

from .config import (
    DELETE_OK,
    DISREGARD_OK,
    HASH_NOT_FOUND,
    ID_FOUND_HEADER,
    ID_NOT_FOUND,
    LONGEST_HEADER,
    MESSAGE_DETAILS,
    NO_LONGEST,
    NO_RECIPIENT_HITS,
    NO_SENT_MESSAGES,
    RECIPIENT_HEADER,
    RECIPIENT_HIT,
    RECIPIENT_SEPARATOR,
    REPORT_ENTRY,
    REPORT_HEADER,
    REPORT_SEPARATOR,
    SENT_SUMMARY_HEADER,
    SENT_SUMMARY_LINE,
    SENT_SUMMARY_SNIPPET_LENGTH,
)
from .login import Login
from .messages import (
    create_message,
    disregard_message,
    send_message,
    store_message,
)
from .models import Message, Status
from .registration import Registration, RegistrationResult
from .repository import MessageStore
from .seed import populate_sample_data
from .storage import get_messages_dir, load_messages_from_directory

logger = logging.getLogger(__name__)

def _details(message: Message) -> str:
    return MESSAGE_DETAILS.format(
        sender=message.sender,
        recipient=message.recipient,
        payload=message.payload,
    )


class ChatSession:
    """
    Design (ChatSession)
    - State:
        registration: the single user's Registration
        login: Login bound to registration
        store: this session's MessageStore
        messages_dir: where store/load read and write message files
        rng: random source for message ids (seeded in tests)
    """

    def __init__(self, store: MessageStore | None = None, messages_dir: Path | None = None,
                 rng: random.Random | None = None) -> None:
        self.registration = Registration()
        self.login = Login(self.registration)
        self.store = store if store is not None else MessageStore()
        self.messages_dir = Path(messages_dir) if messages_dir is not None else get_messages_dir()
        self.rng = rng

    # -------- Registration / login --------

    def register(self, username, password, phone_number, first_name, last_name) -> RegistrationResult:
        return self.registration.register(username, password, phone_number, first_name, last_name)

    def attempt_login(self, username: str | None, password: str | None) -> bool:
        return self.login.login_user(username, password)

    def status_message(self) -> str:
        return self.login.return_login_status()

    @property
    def current_user(self) -> str | None:
        """Logged-in username, or None before a successful login."""
        return self.login.username if self.login.access_granted else None

    # -------- Message lifecycle --------

    def create_message(self, recipient: str | None, payload: str | None, sender: str | None = None) -> Message:
        """
        Purpose: New message with a generated id that no known message already uses.
        Inputs: recipient, payload, sender (defaults to the logged-in user)
        Outputs: Message with index 0 and empty hash.
        """
        message = create_message(recipient, payload, sender or self.current_user, self.rng)
        while self.store.search_by_id(message.message_id) is not None:
            logger.debug("Message id %s already in use; drawing another", message.message_id)
            message = create_message(recipient, payload, message.sender, self.rng)
        return message

    def send(self, message: Message) -> str:
        return send_message(message, self.store)

    def store_for_later(self, message: Message) -> str:
        return store_message(message, self.store, self.messages_dir)

    def disregard(self, message: Message) -> str:
        disregard_message(message, self.store)
        return DISREGARD_OK

    def total_sent(self) -> int:
        return self.store.total_sent()

    # -------- Reports and lookups --------

    def report(self) -> str:
        """Full report of the sent collection."""
        sent = self.store.messages(Status.SENT)
        lines = [REPORT_HEADER]
        if not sent:
            lines.append(NO_SENT_MESSAGES)
            return "\n".join(lines)
        for message in sent:
            lines.append(REPORT_ENTRY.format(
                sender=message.sender,
                recipient=message.recipient,
                message_id=message.message_id,
                hash=message.hash,
                payload=message.payload,
            ))
            lines.append(REPORT_SEPARATOR)
        return "\n".join(lines) + "\n"

    def sender_and_recipient_summary(self) -> str:
        """Short list of sent messages: recipient and the start of each payload."""
        sent = self.store.messages(Status.SENT)
        if not sent:
            return NO_SENT_MESSAGES
        lines = [SENT_SUMMARY_HEADER.format(sender=self.current_user)]
        for message in sent:
            snippet = (message.payload or "")[:SENT_SUMMARY_SNIPPET_LENGTH]
            lines.append(SENT_SUMMARY_LINE.format(recipient=message.recipient, snippet=snippet))
        return "\n".join(lines) + "\n"

    def longest_message(self) -> str:
        message = self.store.longest_message()
        if message is None:
            return NO_LONGEST
        return LONGEST_HEADER + "\n" + _details(message)

    def search_by_id(self, message_id: str) -> str:
        message = self.store.search_by_id(message_id)
        if message is None:
            return ID_NOT_FOUND.format(message_id=message_id)
        return ID_FOUND_HEADER.format(message_id=message_id) + "\n" + _details(message)

    def search_by_recipient(self, recipient: str) -> str:
        hits = self.store.search_by_recipient(recipient)
        if not hits:
            return NO_RECIPIENT_HITS.format(recipient=recipient)
        lines: List[str] = [RECIPIENT_HEADER.format(recipient=recipient)]
        for status, message in hits:
            lines.append(RECIPIENT_HIT.format(
                status=status.value.capitalize(),
                sender=message.sender,
                payload=message.payload,
            ))
            lines.append(RECIPIENT_SEPARATOR)
        return "\n".join(lines) + "\n"

    def delete_by_hash(self, message_hash: str) -> str:
        removed = self.store.delete_by_hash(message_hash)
        if removed is None:
            return HASH_NOT_FOUND.format(hash=message_hash)
        status, message = removed
        return DELETE_OK.format(payload=message.payload, collection=status.label)

    # -------- Bulk loading --------

    def load_from_directory(self, directory: Path | None = None, fallback_sender: str | None = None) -> int:
        """Load persisted messages into the stored list; returns how many were added."""
        target = Path(directory) if directory is not None else self.messages_dir
        return load_messages_from_directory(self.store, target, fallback_sender or self.current_user)

    def load_sample_data(self) -> None:
        populate_sample_data(self.store, rng=self.rng)
        logger.info("Sample messages loaded")
