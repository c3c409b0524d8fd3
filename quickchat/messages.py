"""
Design (messages.py)
- Purpose: Message lifecycle operations: id generation/check, hash derivation, send,
           store for later, disregard.
- Inputs: Message objects, the session's MessageStore, optional output directory.
- Outputs: Fixed feedback texts (see config) or derived values.
- Side effects: send/store/disregard mutate the message and/or the store; store writes a file.
- Thread-safety: Store does its own locking; a Message should be driven by one caller.
"""

import logging
import random
from pathlib import Path

from .config import (
    ID_NOTIFICATION,
    MAX_PAYLOAD_LENGTH,
    MESSAGE_ID_LENGTH,
    PAYLOAD_READY,
    RECIPIENT_CAPTURED,
    SEND_FAILED_EMPTY,
    SEND_FAILED_ID,
    SEND_FAILED_PAYLOAD,
    SEND_FAILED_RECIPIENT,
    SEND_FAILED_TOO_LONG,
    SEND_OK,
    STORE_FAILED,
    STORE_OK,
)
from .models import Message, Status
from .repository import MessageStore
from .storage import get_messages_dir, save_message
from .validators import validate_payload_length, validate_recipient

logger = logging.getLogger(__name__)


def generate_message_id(rng: random.Random | None = None) -> str:
    """Uniform random 10-digit id, zero-padded. Collisions are not checked here."""
    rng = rng or random
    return f"{rng.randrange(10 ** MESSAGE_ID_LENGTH):0{MESSAGE_ID_LENGTH}d}"


def create_message(recipient: str | None, payload: str | None, sender: str | None,
                   rng: random.Random | None = None) -> Message:
    return Message(
        message_id=generate_message_id(rng),
        recipient=recipient,
        payload=payload,
        sender=sender,
    )


def check_message_id(message_id: str | None) -> bool:
    """True iff the id is exactly ten ASCII digits."""
    if message_id is None or len(message_id) != MESSAGE_ID_LENGTH:
        return False
    return all(ch in "0123456789" for ch in message_id)


def create_message_hash(message_id: str | None, index: int, payload: str | None) -> str:
    """
    Purpose: Derive the message hash: first two id characters, the index, and the first
             and last words of the payload, upper-cased and joined by ':'.
    Inputs: message_id, index, payload
    Outputs: e.g. "00:0:HITONIGHT"; "" if the id is shorter than 2 or the payload is blank.
    """
    if message_id is None or len(message_id) < 2 or payload is None or not payload.strip():
        return ""
    first_two = message_id[:2]
    words = payload.split()
    if not words:
        return f"{first_two}:{index}:".upper()
    return f"{first_two}:{index}:{words[0]}{words[-1]}".upper()


def id_notification(message: Message) -> str:
    return ID_NOTIFICATION.format(message_id=message.message_id)


def send_message(message: Message, store: MessageStore) -> str:
    """
    Purpose: Validate and "send" a message.
    Inputs: message, store (receives the message in its sent collection)
    Outputs: SEND_OK or the first failing check's text, checked in order:
             payload length, recipient, id format, non-empty payload.
    Side effects: On success increments the store's counter, assigns index and hash,
                  and moves the message into the sent collection (a stored draft or
                  disregarded copy with the same id is dropped). Each successful call
                  consumes a new counter value, including repeated sends.
    """
    if validate_payload_length(message.payload) != PAYLOAD_READY:
        if message.payload is not None and len(message.payload) > MAX_PAYLOAD_LENGTH:
            return SEND_FAILED_TOO_LONG
        return SEND_FAILED_PAYLOAD

    if validate_recipient(message.recipient) != RECIPIENT_CAPTURED:
        return SEND_FAILED_RECIPIENT

    if not check_message_id(message.message_id):
        return SEND_FAILED_ID

    if not message.payload.strip():
        return SEND_FAILED_EMPTY

    message.index = store.next_sent_index()
    message.hash = create_message_hash(message.message_id, message.index, message.payload)
    store.add(message, Status.SENT)
    store.discard(Status.STORED, message.message_id)
    store.discard(Status.DISREGARDED, message.message_id)
    logger.info("Sent message %s as #%d to %s", message.message_id, message.index, message.recipient)
    return SEND_OK


def store_message(message: Message, store: MessageStore, directory: Path | None = None) -> str:
    """
    Purpose: Persist a message as a JSON unit; unsent messages also join the stored list.
    Inputs: message, store, directory (defaults to get_messages_dir())
    Outputs: STORE_OK naming the file, or STORE_FAILED carrying the I/O error.
    Side effects: Writes a file; may add to the stored collection.
    """
    target = Path(directory) if directory is not None else get_messages_dir()
    try:
        path = save_message(message, target)
    except OSError as e:
        logger.exception("Failed to store message %s in %s", message.message_id, target)
        return STORE_FAILED.format(error=e)

    if message.index == 0:
        store.add(message, Status.STORED)
    return STORE_OK.format(filename=path.name)


def disregard_message(message: Message, store: MessageStore) -> None:
    store.add(message, Status.DISREGARDED)
    logger.info("Disregarded message %s", message.message_id)
