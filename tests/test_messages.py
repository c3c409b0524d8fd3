"""
Unit Tests for Message Lifecycle
Tests for: id generation, id check, hash derivation, send, store, disregard
"""
import json
import random

import pytest

from quickchat import config
from quickchat.messages import (
    check_message_id,
    create_message,
    create_message_hash,
    disregard_message,
    generate_message_id,
    id_notification,
    send_message,
    store_message,
)
from quickchat.models import Message, Status

VALID_RECIPIENT = "+27718693002"
PAYLOAD = "Hi Mike, can you join us for dinner tonight"


class TestCreation:
    """Test message construction and ids"""

    def test_new_message_defaults(self, rng):
        message = create_message("testRecipient", "testPayload", "kyl_1", rng)

        assert len(message.message_id) == 10
        assert message.message_id.isdigit()
        assert message.recipient == "testRecipient"
        assert message.payload == "testPayload"
        assert message.sender == "kyl_1"
        assert message.index == 0
        assert message.hash == ""

    def test_generated_id_is_zero_padded(self):
        class LowRandom(random.Random):
            def randrange(self, *args, **kwargs):
                return 42

        assert generate_message_id(LowRandom()) == "0000000042"

    def test_id_notification(self, rng):
        message = create_message(VALID_RECIPIENT, PAYLOAD, None, rng)

        assert id_notification(message) == f"Message ID generated: {message.message_id}"

    @pytest.mark.parametrize("message_id,expected", [
        ("0012345678", True),
        ("12345", False),
        ("12345678901", False),
        ("12345abcde", False),
        ("", False),
        (None, False),
    ])
    def test_check_message_id(self, message_id, expected):
        assert check_message_id(message_id) is expected


class TestHash:
    """Test hash derivation"""

    def test_reference_hash(self):
        assert create_message_hash("0012345678", 0, PAYLOAD) == "00:0:HITONIGHT"

    def test_hash_trims_surrounding_whitespace(self):
        assert create_message_hash("AB12345678", 15, "  hello   world example  ") == "AB:15:HELLOEXAMPLE"

    def test_single_word_is_used_twice(self):
        assert create_message_hash("9912345678", 3, "hey") == "99:3:HEYHEY"

    @pytest.mark.parametrize("message_id,payload", [
        ("0", PAYLOAD),
        (None, PAYLOAD),
        ("0012345678", "   "),
        ("0012345678", None),
    ])
    def test_unhashable_inputs_give_empty_hash(self, message_id, payload):
        assert create_message_hash(message_id, 1, payload) == ""


class TestSend:
    """Test send validation order and side effects"""

    def test_successful_send(self, store, rng):
        message = create_message(VALID_RECIPIENT, PAYLOAD, "kyl_1", rng)

        assert send_message(message, store) == config.SEND_OK
        assert message.index == 1
        assert message.hash == create_message_hash(message.message_id, 1, PAYLOAD)
        assert store.messages(Status.SENT) == [message]
        assert store.total_sent() == 1

    def test_invalid_recipient(self, store, rng):
        message = create_message("08575975889", PAYLOAD, None, rng)

        assert send_message(message, store) == config.SEND_FAILED_RECIPIENT
        assert message.index == 0
        assert message.hash == ""
        assert store.total_sent() == 0

    def test_payload_too_long(self, store, rng):
        message = create_message(VALID_RECIPIENT, "a" * 251, None, rng)

        assert send_message(message, store) == config.SEND_FAILED_TOO_LONG
        assert store.total_sent() == 0

    def test_none_payload(self, store, rng):
        message = create_message(VALID_RECIPIENT, None, None, rng)

        assert send_message(message, store) == config.SEND_FAILED_PAYLOAD

    def test_blank_payload(self, store, rng):
        message = create_message(VALID_RECIPIENT, "   ", None, rng)

        assert send_message(message, store) == config.SEND_FAILED_EMPTY
        assert store.total_sent() == 0

    def test_bad_message_id(self, store):
        message = Message(message_id="12ab", recipient=VALID_RECIPIENT, payload=PAYLOAD)

        assert send_message(message, store) == config.SEND_FAILED_ID

    def test_payload_checked_before_recipient(self, store, rng):
        message = create_message("bad", "a" * 300, None, rng)

        assert send_message(message, store) == config.SEND_FAILED_TOO_LONG

    def test_legacy_recipient_can_be_sent(self, store, rng):
        message = create_message("0838884567", "It is dinner time!", None, rng)

        assert send_message(message, store) == config.SEND_OK

    def test_repeated_sends_keep_counting(self, store, rng):
        message = create_message(VALID_RECIPIENT, PAYLOAD, None, rng)
        other = create_message(VALID_RECIPIENT, "Second message", None, rng)

        send_message(message, store)
        send_message(other, store)
        send_message(message, store)

        assert message.index == 3
        assert store.total_sent() == 3
        # same id replaces the earlier entry
        assert [m.message_id for m in store.messages(Status.SENT)] == [other.message_id, message.message_id]

    def test_sending_a_stored_draft_moves_it_to_sent(self, store, rng, tmp_path):
        message = create_message(VALID_RECIPIENT, PAYLOAD, None, rng)
        store_message(message, store, tmp_path)
        disregard_message(message, store)

        assert send_message(message, store) == config.SEND_OK

        assert store.messages(Status.SENT) == [message]
        assert store.messages(Status.STORED) == []
        assert store.messages(Status.DISREGARDED) == []
        assert store.delete_by_hash(message.hash) == (Status.SENT, message)
        assert store.delete_by_hash(message.hash) is None


class TestStore:
    """Test persisting messages"""

    def test_draft_is_written_and_listed(self, store, rng, tmp_path):
        message = create_message(VALID_RECIPIENT, "This is a draft.", "kyl_1", rng)

        result = store_message(message, store, tmp_path)

        filename = f"message_draft_{message.message_id}.json"
        assert result == f"Message successfully stored as {filename}"
        data = json.loads((tmp_path / filename).read_text(encoding="utf-8"))
        assert data == {
            "MESSAGE_ID": message.message_id,
            "MESSAGE_RECIPIENT": VALID_RECIPIENT,
            "MESSAGE_PAYLOAD": "This is a draft.",
            "MESSAGE_INDEX": 0,
            "MESSAGE_HASH": "",
            "SENDER_USERNAME": "kyl_1",
        }
        assert store.messages(Status.STORED) == [message]

    def test_two_drafts_do_not_overwrite_each_other(self, store, rng, tmp_path):
        first = create_message(VALID_RECIPIENT, "one", None, rng)
        second = create_message(VALID_RECIPIENT, "two", None, rng)

        store_message(first, store, tmp_path)
        store_message(second, store, tmp_path)

        assert len(list(tmp_path.glob("message_draft_*.json"))) == 2

    def test_sent_message_is_written_by_index(self, store, rng, tmp_path):
        message = create_message(VALID_RECIPIENT, "This is a sent message.", None, rng)
        send_message(message, store)

        result = store_message(message, store, tmp_path)

        assert result == "Message successfully stored as message_1.json"
        data = json.loads((tmp_path / "message_1.json").read_text(encoding="utf-8"))
        assert data["MESSAGE_INDEX"] == 1
        assert data["MESSAGE_HASH"] == message.hash
        assert store.messages(Status.STORED) == []

    def test_write_failure_is_reported(self, store, rng, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")
        message = create_message(VALID_RECIPIENT, PAYLOAD, None, rng)

        result = store_message(message, store, blocker)

        assert result.startswith("Failed to store message: ")
        assert store.messages(Status.STORED) == []


def test_disregard_only_lists_message(store, rng):
    message = create_message(VALID_RECIPIENT, PAYLOAD, None, rng)

    disregard_message(message, store)

    assert store.messages(Status.DISREGARDED) == [message]
    assert message.index == 0
    assert message.hash == ""
