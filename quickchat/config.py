"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (limits, patterns, feedback texts, file names, log settings).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

import logging

APP_TITLE = "QuickChat"

# -------- Registration rules --------

MAX_USERNAME_LENGTH = 5
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 32

PHONE_PATTERN = r"^\+27[0-9]{9}$"

# Recipient accepted without the +27 prefix (sample data compatibility only)
LEGACY_RECIPIENT_NUMBER = "0838884567"

NAME_PATTERN = r"^[a-zA-Z]+$"

# -------- Registration feedback --------

USERNAME_OK = "Username successfully captured"
USERNAME_ERROR = (
    "Username is not correctly formatted, please ensure that your username contains "
    "an underscore and is no more than five characters in length."
)
PASSWORD_OK = "Password successfully captured"
PASSWORD_ERROR = (
    "Password is not correctly formatted, please ensure that the password contains "
    "at least eight characters, a capital letter, a number, and a special character."
)
PHONE_OK = "Cellphone number successfully captured"
PHONE_ERROR = (
    "Cellphone number is incorrectly formatted or does not contain an international code, "
    "please correct the number and try again."
)
FIRST_NAME_OK = "First name successfully captured"
FIRST_NAME_ERROR = "First name is invalid, please ensure it is not empty and contains only letters."
LAST_NAME_OK = "Last name successfully captured"
LAST_NAME_ERROR = "Last name is invalid, please ensure it is not empty and contains only letters."
REGISTRATION_SUCCESSFUL = "Registration Successful"
REGISTRATION_FAILED = "Registration Failed"

# -------- Login feedback --------

LOGIN_WELCOME = "Welcome {first} {last},\nit is great to see you."
LOGIN_MISMATCH = "Username & Password do not match our records, please try again."

# -------- Messages --------

MAX_PAYLOAD_LENGTH = 250
MESSAGE_ID_LENGTH = 10

PAYLOAD_READY = "Message ready to send."
PAYLOAD_TOO_LONG = "Message exceeds {limit} characters by {excess}, please reduce size."
RECIPIENT_CAPTURED = "Cell phone number successfully captured."
RECIPIENT_INVALID = (
    "Cell phone number is incorrectly formatted or does not contain an international code. "
    "Please correct the number and try again."
)

SEND_OK = "Message successfully sent."
SEND_FAILED_TOO_LONG = "Failed to send message: Payload too long"
SEND_FAILED_PAYLOAD = "Failed to send message: Invalid payload content"
SEND_FAILED_RECIPIENT = "Failed to send message: Invalid recipient"
SEND_FAILED_ID = "Failed to send message: Invalid message ID"
SEND_FAILED_EMPTY = "Failed to send message: Message content cannot be empty"

STORE_OK = "Message successfully stored as {filename}"
STORE_FAILED = "Failed to store message: {error}"

ID_NOTIFICATION = "Message ID generated: {message_id}"

DISREGARD_OK = "Message disregarded by user."

# -------- Reports and lookups --------

REPORT_HEADER = "--- Sent Messages Report ---"
REPORT_ENTRY = (
    "Sender: {sender}\n"
    "Recipient: {recipient}\n"
    "Message ID: {message_id}\n"
    "Message Hash: {hash}\n"
    "Message: {payload}"
)
REPORT_SEPARATOR = "---------------------------"
NO_SENT_MESSAGES = "No messages have been sent."

SENT_SUMMARY_HEADER = "Sent Messages (Sender: {sender}):"
SENT_SUMMARY_LINE = 'To: {recipient}, Message: "{snippet}..."'
SENT_SUMMARY_SNIPPET_LENGTH = 30

MESSAGE_DETAILS = "Sender: {sender}\nRecipient: {recipient}\nMessage: {payload}"
NO_LONGEST = "No messages available to determine the longest."
LONGEST_HEADER = "Longest Message Found:"
ID_NOT_FOUND = "Message with ID {message_id} not found."
ID_FOUND_HEADER = "Message Found (ID: {message_id}):"

NO_RECIPIENT_HITS = "No messages found for recipient {recipient}."
RECIPIENT_HEADER = "Messages involving recipient {recipient}:"
RECIPIENT_HIT = "Status: {status}\nSender: {sender}\nMessage: {payload}"
RECIPIENT_SEPARATOR = "----------"

HASH_NOT_FOUND = "Message with hash {hash} not found for deletion."
DELETE_OK = 'Message "{payload}" successfully deleted from {collection}.'

# -------- Persistence --------

# Filename for sent messages (keyed by index) and drafts (keyed by message id)
SENT_FILENAME = "message_{index}.json"
DRAFT_FILENAME = "message_draft_{message_id}.json"
MESSAGE_FILE_PATTERN = r"^message_(\d+|draft_\d+)\.json$"

MESSAGES_DIRNAME = "messages"
MESSAGES_DIR_ENV = "QUICKCHAT_MESSAGES_DIR"

# Sender used for canned sample messages
SAMPLE_SENDER = "testUser"

# -------- Logging / UI --------

LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# Maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000

NOTIFY_TIMEOUT_SEC = 5

ICON_FILE = "logo.ico"  # Optional, expected at quickchat/icons/logo.ico
