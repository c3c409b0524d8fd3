"""
Integration Tests for ChatSession
Tests for: register -> login -> message flow, display texts, sample data
"""
import json

from quickchat import config
from quickchat.models import Status
from quickchat.session import ChatSession

from conftest import VALID_PASSWORD, VALID_PHONE, VALID_USERNAME


class TestAuthFlow:
    """Test registration and login through the session"""

    def test_login_scenario(self, session):
        result = session.register(VALID_USERNAME, VALID_PASSWORD, "+27838968976", "Kyle", "Smith")

        assert result.successful
        assert session.attempt_login(VALID_USERNAME, VALID_PASSWORD) is True
        assert session.current_user == VALID_USERNAME
        assert session.attempt_login(VALID_USERNAME, "wrong") is False
        assert session.status_message() == config.LOGIN_MISMATCH
        assert session.current_user is None


class TestMessageFlow:
    """Test creating, sending and storing messages"""

    def test_created_message_uses_logged_in_sender(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "Did you get the cake?")

        assert message.sender == VALID_USERNAME

    def test_create_message_avoids_known_ids(self, logged_in_session):
        first = logged_in_session.create_message("+27834557896", "one")
        logged_in_session.disregard(first)
        logged_in_session.rng.seed(1234)  # replay the same draws

        second = logged_in_session.create_message("+27834557896", "two")

        assert second.message_id != first.message_id

    def test_send_then_store_then_reload(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "Did you get the cake?")
        assert logged_in_session.send(message) == config.SEND_OK
        assert logged_in_session.store_for_later(message) == "Message successfully stored as message_1.json"

        fresh = ChatSession(messages_dir=logged_in_session.messages_dir)
        assert fresh.load_from_directory(fallback_sender="nobody") == 1

        loaded = fresh.store.messages(Status.STORED)[0]
        assert (loaded.message_id, loaded.recipient, loaded.payload, loaded.index, loaded.hash) == (
            message.message_id, message.recipient, message.payload, message.index, message.hash,
        )
        assert loaded.sender == VALID_USERNAME

    def test_units_without_sender_belong_to_user_logged_in_at_load(self, session):
        session.messages_dir.mkdir(parents=True)
        (session.messages_dir / "message_draft_0012345678.json").write_text(json.dumps({
            "MESSAGE_ID": "0012345678",
            "MESSAGE_RECIPIENT": "+27834557896",
            "MESSAGE_PAYLOAD": "Saved before senders were recorded",
            "MESSAGE_INDEX": 0,
            "MESSAGE_HASH": "",
        }), encoding="utf-8")
        session.register(VALID_USERNAME, VALID_PASSWORD, VALID_PHONE, "Kyle", "Smith")
        assert session.attempt_login(VALID_USERNAME, VALID_PASSWORD)

        assert session.load_from_directory() == 1

        assert session.store.messages(Status.STORED)[0].sender == VALID_USERNAME
        assert f"Sender: {VALID_USERNAME}\n" in session.longest_message()

    def test_disregard_feedback(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "never mind")

        assert logged_in_session.disregard(message) == config.DISREGARD_OK
        assert logged_in_session.store.contains(Status.DISREGARDED, message.message_id)

    def test_total_sent_counts_repeated_sends(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "ping")

        for _ in range(3):
            logged_in_session.send(message)

        assert logged_in_session.total_sent() == 3
        assert message.index == 3


class TestDisplayTexts:
    """Test formatted feedback for reports and lookups"""

    def test_empty_report(self, session):
        assert session.report() == "--- Sent Messages Report ---\nNo messages have been sent."
        assert session.report() == f"{config.REPORT_HEADER}\n{config.NO_SENT_MESSAGES}"

    def test_report_lists_sent_messages(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "Did you get the cake?")
        logged_in_session.send(message)

        report = logged_in_session.report()

        assert report.startswith("--- Sent Messages Report ---\n")
        assert f"Sender: {VALID_USERNAME}\n" in report
        assert f"Message ID: {message.message_id}\n" in report
        assert f"Message Hash: {message.hash}\n" in report
        assert "Message: Did you get the cake?\n" in report

    def test_longest_with_no_messages(self, session):
        assert session.longest_message() == "No messages available to determine the longest."

    def test_search_by_id_not_found(self, session):
        assert session.search_by_id("0000000000") == "Message with ID 0000000000 not found."

    def test_delete_not_found(self, session):
        assert session.delete_by_hash("XX:1:NOPE") == "Message with hash XX:1:NOPE not found for deletion."

    def test_summary_without_sent_messages(self, session):
        assert session.sender_and_recipient_summary() == "No messages have been sent."

    def test_summary_truncates_payload(self, logged_in_session):
        message = logged_in_session.create_message("+27834557896", "x" * 40)
        logged_in_session.send(message)

        summary = logged_in_session.sender_and_recipient_summary()

        assert summary == (
            f"Sent Messages (Sender: {VALID_USERNAME}):\n"
            f'To: +27834557896, Message: "{"x" * 30}..."\n'
        )


class TestSampleData:
    """Test the canned sample message set"""

    def test_sample_data_partitions(self, session):
        session.load_sample_data()
        snapshot = session.store.snapshot()

        assert len(snapshot[Status.SENT]) == 2
        assert len(snapshot[Status.STORED]) == 2
        assert len(snapshot[Status.DISREGARDED]) == 1
        assert session.total_sent() == 0

    def test_longest_sample_message_is_stored_one(self, session):
        session.load_sample_data()

        assert session.longest_message() == (
            "Longest Message Found:\n"
            "Sender: testUser\n"
            "Recipient: +27838884567\n"
            "Message: Where are you? You are late! I have asked you to be on time."
        )

    def test_search_by_recipient(self, session):
        session.load_sample_data()

        result = session.search_by_recipient("+27838884567")

        assert result.startswith("Messages involving recipient +27838884567:\n")
        assert result.count("Status: Stored") == 2
        assert "Ok, I am leaving without you." in result

    def test_search_by_recipient_without_hits(self, session):
        session.load_sample_data()

        assert session.search_by_recipient("+27000000000") == "No messages found for recipient +27000000000."

    def test_delete_stored_sample_by_hash(self, session):
        session.load_sample_data()
        target = session.store.messages(Status.STORED)[0]

        result = session.delete_by_hash(target.hash)

        assert result == (
            'Message "Where are you? You are late! I have asked you to be on time." '
            "successfully deleted from Stored Messages."
        )
        assert session.delete_by_hash(target.hash).endswith("not found for deletion.")

    def test_search_sample_by_id(self, session):
        session.load_sample_data()
        sent = session.store.messages(Status.SENT)[1]

        assert session.search_by_id(sent.message_id) == (
            f"Message Found (ID: {sent.message_id}):\n"
            "Sender: testUser\n"
            "Recipient: 0838884567\n"
            "Message: It is dinner time!"
        )
