"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (Message, Status).
- Inputs: Field values (str/int).
- Outputs: Dataclass / enum instances.
- Side effects: None.
- Thread-safety: Dataclasses are plain containers; MessageStore protects concurrent access.
"""

from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    """Which collection of the MessageStore a message lives in."""

    SENT = "sent"
    STORED = "stored"
    DISREGARDED = "disregarded"

    @property
    def label(self) -> str:
        """Display name used in feedback texts, e.g. 'Stored Messages'."""
        return f"{self.value.capitalize()} Messages"


@dataclass
class Message:
    """
    Design (Message)
    - Purpose: Represents a single chat message.
    - Fields:
        message_id: 10-digit numeric string, generated at creation.
        recipient: Recipient cell number as entered.
        payload: Message body.
        sender: Username of the sender (may be reassigned, e.g. on load).
        index: 0 until sent; then the send counter value at the time of sending.
        hash: Empty until derived (see messages.create_message_hash).
    """
    message_id: str
    recipient: str | None
    payload: str | None
    sender: str | None = None
    index: int = 0
    hash: str = ""
