"""
Design (seed.py)
- Purpose: Populate a MessageStore with a fixed set of sample messages for demos.
- Inputs: MessageStore, sender name, optional random source for ids.
- Outputs: None.
- Side effects: Resets the store, then adds 2 sent, 2 stored and 1 disregarded message.
"""

import random

from .config import SAMPLE_SENDER
from .messages import create_message, create_message_hash
from .models import Status
from .repository import MessageStore

# (recipient, payload, status, manual index)
SAMPLE_MESSAGES = [
    ("+27834557896", "Did you get the cake?", Status.SENT, 1),
    ("+27838884567", "Where are you? You are late! I have asked you to be on time.", Status.STORED, 0),
    ("+27834484567", "Yohoooo, I am at your gate.", Status.DISREGARDED, None),
    ("0838884567", "It is dinner time!", Status.SENT, 2),
    ("+27838884567", "Ok, I am leaving without you.", Status.STORED, 0),
]


def populate_sample_data(store: MessageStore, sender: str = SAMPLE_SENDER,
                         rng: random.Random | None = None) -> None:
    store.reset_for_testing()
    for recipient, payload, status, index in SAMPLE_MESSAGES:
        message = create_message(recipient, payload, sender, rng)
        # Disregarded sample keeps index 0 and no hash
        if index is not None:
            message.index = index
            message.hash = create_message_hash(message.message_id, index, payload)
        store.add(message, status)
