"""
QuickChat - Test Configuration and Fixtures
"""
import random

import pytest

from quickchat.repository import MessageStore
from quickchat.session import ChatSession

VALID_USERNAME = "kyl_1"
VALID_PASSWORD = "Ch&&sec@ke99!"
VALID_PHONE = "+27838968976"
VALID_FIRST_NAME = "Kyle"
VALID_LAST_NAME = "Smith"


@pytest.fixture
def store() -> MessageStore:
    """Fresh, empty message store for each test"""
    return MessageStore()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so generated ids are reproducible"""
    return random.Random(1234)


@pytest.fixture
def session(tmp_path, rng) -> ChatSession:
    """Session writing messages into a temporary directory"""
    return ChatSession(messages_dir=tmp_path / "messages", rng=rng)


@pytest.fixture
def logged_in_session(session) -> ChatSession:
    """Session with the standard user registered and logged in"""
    result = session.register(VALID_USERNAME, VALID_PASSWORD, VALID_PHONE, VALID_FIRST_NAME, VALID_LAST_NAME)
    assert result.successful
    assert session.attempt_login(VALID_USERNAME, VALID_PASSWORD)
    return session
