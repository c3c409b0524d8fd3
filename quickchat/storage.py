"""
Design (storage.py)
- Purpose: Save single messages to disk as JSON units and load them back.
- Inputs: Message objects, directory paths, a fallback sender for older units.
- Outputs: Path of a written unit; Message per decoded unit; count of loaded messages.
- Side effects: Reads/writes files. save_message raises OSError (callers convert it);
                directory loading logs and skips files it cannot read or decode.
- Thread-safety: Call from main thread only (e.g. after store mutations).
"""

import json
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict

from .config import (
    DRAFT_FILENAME,
    MESSAGE_FILE_PATTERN,
    MESSAGES_DIR_ENV,
    MESSAGES_DIRNAME,
    SENT_FILENAME,
)
from .models import Message, Status
from .repository import MessageStore

logger = logging.getLogger(__name__)

_MESSAGE_FILE_RE = re.compile(MESSAGE_FILE_PATTERN)


def get_messages_dir() -> Path:
    """
    Resolve the folder for message files. The QUICKCHAT_MESSAGES_DIR environment variable
    wins; otherwise prefer the app data dir on Windows so it survives reinstalls, and fall
    back to a folder next to the executable (or the project root when running as script).
    """
    override = os.environ.get(MESSAGES_DIR_ENV)
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "QuickChat" / MESSAGES_DIRNAME
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        base = Path(sys.executable).parent
    else:
        base = Path(__file__).resolve().parent.parent
    return base / MESSAGES_DIRNAME


def message_filename(message: Message) -> str:
    """
    Sent messages are keyed by index; unsent drafts (index 0) by id so several drafts
    never share one file.
    """
    if message.index == 0:
        return DRAFT_FILENAME.format(message_id=message.message_id)
    return SENT_FILENAME.format(index=message.index)


def message_to_dict(message: Message) -> Dict[str, Any]:
    return {
        "MESSAGE_ID": message.message_id,
        "MESSAGE_RECIPIENT": message.recipient,
        "MESSAGE_PAYLOAD": message.payload,
        "MESSAGE_INDEX": message.index,
        "MESSAGE_HASH": message.hash,
        "SENDER_USERNAME": message.sender,
    }


def message_from_dict(data: Dict[str, Any], fallback_sender: str | None = None) -> Message:
    """
    Build a Message from a decoded unit. MESSAGE_ID is required and must be a string
    (KeyError / TypeError otherwise); recipient, payload, hash and sender must be strings
    when present; index/hash default to 0/"" and a missing or null sender becomes
    fallback_sender.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    message_id = data["MESSAGE_ID"]
    if not isinstance(message_id, str):
        raise TypeError(f"MESSAGE_ID must be a string, got {type(message_id).__name__}")
    for key in ("MESSAGE_RECIPIENT", "MESSAGE_PAYLOAD", "MESSAGE_HASH", "SENDER_USERNAME"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    index = data.get("MESSAGE_INDEX", 0)
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"MESSAGE_INDEX must be an integer, got {type(index).__name__}")

    sender = data.get("SENDER_USERNAME")
    return Message(
        message_id=message_id,
        recipient=data.get("MESSAGE_RECIPIENT"),
        payload=data.get("MESSAGE_PAYLOAD"),
        sender=sender if sender is not None else fallback_sender,
        index=index,
        hash=data.get("MESSAGE_HASH") or "",
    )


def save_message(message: Message, directory: Path) -> Path:
    """
    Write one message unit into `directory` (created if needed) and return its path.
    Raises OSError on failure.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / message_filename(message)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(message_to_dict(message), f, indent=2)
    logger.debug("Wrote message %s to %s", message.message_id, path)
    return path


def load_message_file(path: Path, fallback_sender: str | None = None) -> Message:
    """Read and decode a single unit. Raises OSError, ValueError, KeyError or TypeError."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return message_from_dict(data, fallback_sender)


def load_messages_from_directory(store: MessageStore, directory: Path, fallback_sender: str | None = None) -> int:
    """
    Purpose: Load every recognised message file in `directory` into the stored collection.
    Inputs: store, directory, fallback_sender (used when a unit has no sender)
    Outputs: Number of messages added. Messages whose id is already stored are skipped
             (first loaded wins); unreadable files are logged and skipped.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("No message directory at %s", directory)
        return 0

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.warning("Cannot list message directory %s: %s", directory, e)
        return 0

    added = 0
    for path in entries:
        if not path.is_file() or not _MESSAGE_FILE_RE.match(path.name):
            continue
        try:
            message = load_message_file(path, fallback_sender)
        except (OSError, ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Error loading message from %s: %s", path.name, e)
            continue
        if store.contains(Status.STORED, message.message_id):
            logger.debug("Skipping %s: message %s already stored", path.name, message.message_id)
            continue
        store.add(message, Status.STORED)
        added += 1

    logger.info("%d messages loaded into stored messages from %s", added, directory)
    return added
