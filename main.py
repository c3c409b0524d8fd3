"""
Entry point: configure logging, build the session and start the UI. Saved messages
are loaded once the user has logged in.

Usage: python main.py [messages_dir]
"""

import logging
import sys
import tkinter as tk
from pathlib import Path

from quickchat.config import LOG_FORMAT, LOG_LEVEL
from quickchat.session import ChatSession
from quickchat.ui import AppUI


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    messages_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    session = ChatSession(messages_dir=messages_dir)

    root = tk.Tk()
    AppUI(root, session)
    root.mainloop()


if __name__ == "__main__":
    main()
