"""
Design (repository.py)
- Purpose: Encapsulate all message state (three status collections + send counter) behind
           a small API and a lock, so UI, session and message operations never touch
           shared lists directly.
- Inputs: Message objects, Status values, ids/hashes/recipients for lookups.
- Outputs: Copies of collections, single messages or (Status, Message) hits.
- Side effects: Mutates internal lists and the counter.
- Thread-safety: All public methods take the internal lock; snapshots return copies.
"""

import logging
import threading
from typing import Dict, List, Tuple

from .models import Message, Status

logger = logging.getLogger(__name__)


def _coerce_status(status: Status | str | None) -> Status | None:
    if isinstance(status, Status):
        return status
    if isinstance(status, str):
        try:
            return Status(status.strip().lower())
        except ValueError:
            return None
    return None


class MessageStore:
    """
    Design (MessageStore)
    - State:
        _lists: {Status -> [Message]} in insertion order, at most one entry per id per list
        _sent_count: number of successful sends since creation or last reset
        _lock: threading.Lock to protect all mutating/reading operations
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lists: Dict[Status, List[Message]] = {status: [] for status in Status}
        self._sent_count = 0

    # -------- Adding / counting --------

    def add(self, message: Message | None, status: Status | str | None) -> bool:
        """
        Purpose: Put a message into a status collection, replacing any entry with the same id.
        Inputs: message, status (Status or its name, case-insensitive)
        Outputs: True if added; False for a missing message or unknown status.
        Thread-safety: Protected by _lock.
        """
        target = _coerce_status(status)
        if message is None or target is None:
            logger.debug("Ignoring add of %r with status %r", message, status)
            return False
        with self._lock:
            bucket = self._lists[target]
            bucket[:] = [m for m in bucket if m.message_id != message.message_id]
            bucket.append(message)
        return True

    def next_sent_index(self) -> int:
        """Increment the send counter and return its new value."""
        with self._lock:
            self._sent_count += 1
            return self._sent_count

    def total_sent(self) -> int:
        """Number of successful sends (not reduced by later deletions)."""
        with self._lock:
            return self._sent_count

    # -------- Reading --------

    def messages(self, status: Status) -> List[Message]:
        with self._lock:
            return list(self._lists[status])

    def contains(self, status: Status, message_id: str) -> bool:
        with self._lock:
            return any(m.message_id == message_id for m in self._lists[status])

    def snapshot(self) -> Dict[Status, List[Message]]:
        """
        Purpose: Return copies of all three collections for safe iteration (UI).
        Thread-safety: Protected by _lock; returns copies to avoid mutation races.
        """
        with self._lock:
            return {status: list(bucket) for status, bucket in self._lists.items()}

    def longest_message(self) -> Message | None:
        """
        Purpose: Message with the longest payload among sent then stored messages.
        Outputs: Message, or None if both collections are empty. Ties keep the first seen.
        """
        with self._lock:
            candidates = self._lists[Status.SENT] + self._lists[Status.STORED]
        longest = None
        max_length = -1
        for message in candidates:
            if message.payload is not None and len(message.payload) > max_length:
                max_length = len(message.payload)
                longest = message
        return longest

    def search_by_id(self, message_id: str) -> Message | None:
        """First message with this id across sent, stored, disregarded."""
        with self._lock:
            for status in (Status.SENT, Status.STORED, Status.DISREGARDED):
                for message in self._lists[status]:
                    if message.message_id == message_id:
                        return message
        return None

    def search_by_recipient(self, recipient: str) -> List[Tuple[Status, Message]]:
        """All sent then stored messages whose recipient equals `recipient` exactly."""
        with self._lock:
            return [
                (status, message)
                for status in (Status.SENT, Status.STORED)
                for message in self._lists[status]
                if message.recipient == recipient
            ]

    # -------- Removing --------

    def discard(self, status: Status, message_id: str) -> bool:
        """Remove the entry with this id from one collection; False if it was not there."""
        with self._lock:
            bucket = self._lists[status]
            before = len(bucket)
            bucket[:] = [m for m in bucket if m.message_id != message_id]
            return len(bucket) != before

    def delete_by_hash(self, message_hash: str) -> Tuple[Status, Message] | None:
        """
        Purpose: Remove the first message whose hash matches, searching stored, sent,
                 then disregarded.
        Inputs: message_hash (an empty query matches nothing, so unhashed drafts are never hit)
        Outputs: (source status, removed message), or None if nothing matched.
        Thread-safety: Protected by _lock.
        """
        if not message_hash:
            return None
        with self._lock:
            for status in (Status.STORED, Status.SENT, Status.DISREGARDED):
                bucket = self._lists[status]
                for position, message in enumerate(bucket):
                    if message.hash == message_hash:
                        del bucket[position]
                        logger.info("Deleted message %s from %s", message.message_id, status.value)
                        return status, message
        return None

    def reset_for_testing(self) -> None:
        """
        Purpose: Clear all collections and zero the send counter (fresh session / test isolation).
        Thread-safety: Protected by _lock.
        """
        with self._lock:
            for bucket in self._lists.values():
                bucket.clear()
            self._sent_count = 0
