"""
Design (ui.py)
- Purpose: Build and manage the Tkinter UI (registration, login and messaging screens,
           message Treeview, dialogs, Logs panel).
- Inputs: ChatSession (all domain operations go through it).
- Outputs: None (renders UI, calls session operations, shows returned feedback).
- Side effects: Creates windows; desktop notifications via plyer; messages written to disk.
- Thread-safety: UI code runs on main thread; log records are appended via Tk.after().
"""

import logging
import os
import tkinter as tk
from datetime import datetime
from tkinter import filedialog, messagebox, simpledialog, ttk

from plyer import notification

from .config import (
    APP_TITLE,
    ICON_FILE,
    LOG_FORMAT,
    LOG_MAX_LINES,
    NOTIFY_TIMEOUT_SEC,
    PAYLOAD_READY,
    RECIPIENT_CAPTURED,
    SEND_OK,
)
from .messages import id_notification
from .models import Status
from .session import ChatSession
from .validators import validate_payload_length, validate_recipient

logger = logging.getLogger(__name__)

BG = "#1e1e1e"
FIELD_BG = "#2b2b2b"
FG = "white"

STATUS_COLORS = {
    Status.SENT: "#7CFC00",
    Status.STORED: "#FFA500",
    Status.DISREGARDED: "#FF6A6A",
}


def get_icon_path(filename: str) -> str:
    here = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(here, "icons", filename)


class TkLogHandler(logging.Handler):
    """Forward formatted log records to a callback on the Tk main thread."""

    def __init__(self, root: tk.Misc, sink) -> None:
        super().__init__()
        self.root = root
        self.sink = sink
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + "\n"
            self.root.after(0, lambda: self.sink(line))
        except Exception:
            self.handleError(record)


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Screens: registration -> login -> messaging (one frame shown at a time).
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications on send
        show_logs (tk.BooleanVar): toggles visibility of the Logs panel
    """

    def __init__(self, root: tk.Tk, session: ChatSession):
        self.root = root
        self.session = session

        self.enable_notifications = tk.BooleanVar(value=True)
        self.show_logs = tk.BooleanVar(value=False)

        self.root.title(APP_TITLE)
        icon = get_icon_path(ICON_FILE)
        if os.path.exists(icon):
            self.root.iconbitmap(icon)
        self.root.rowconfigure(0, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg=BG)

        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background=FIELD_BG,
            foreground="#f0f0f0",
            fieldbackground=FIELD_BG,
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background=BG,
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[('selected', '#444')], foreground=[])

        self._frame: tk.Frame | None = None
        self.tree: ttk.Treeview | None = None
        self.logs_box: tk.Text | None = None

        self.show_registration()

    # ---------- screen switching ----------

    def _new_frame(self) -> tk.Frame:
        if self._frame is not None:
            self._frame.destroy()
        self._frame = tk.Frame(self.root, bg=BG)
        self._frame.grid(row=0, column=0, sticky="nsew")
        return self._frame

    def _labelled_entry(self, parent: tk.Frame, row: int, text: str, show: str = "") -> tk.Entry:
        tk.Label(parent, text=text, fg=FG, bg=BG).grid(row=row, column=0, sticky="e", padx=5, pady=5)
        entry = tk.Entry(parent, show=show, width=30)
        entry.grid(row=row, column=1, padx=5, pady=5)
        return entry

    # ---------- registration ----------

    def show_registration(self) -> None:
        frame = self._new_frame()
        tk.Label(frame, text="Create your QuickChat account", fg=FG, bg=BG,
                 font=("Segoe UI", 12, "bold")).grid(row=0, column=0, columnspan=2, pady=(10, 5))

        e_user = self._labelled_entry(frame, 1, "Username")
        e_pass = self._labelled_entry(frame, 2, "Password", show="*")
        e_phone = self._labelled_entry(frame, 3, "Cellphone (+27...)")
        e_first = self._labelled_entry(frame, 4, "First name")
        e_last = self._labelled_entry(frame, 5, "Last name")

        feedback = tk.Label(frame, text="", fg="#dddddd", bg=BG, justify="left", wraplength=480)
        feedback.grid(row=7, column=0, columnspan=2, sticky="w", padx=10, pady=(5, 10))

        def submit():
            result = self.session.register(e_user.get(), e_pass.get(), e_phone.get(), e_first.get(), e_last.get())
            feedback.configure(text="\n".join(result.messages()), fg="#7CFC00" if result.successful else "#FF6A6A")
            if result.successful:
                messagebox.showinfo("Registration", result.overall)
                self.show_login()

        ttk.Button(frame, text="Register", command=submit).grid(row=6, column=0, columnspan=2, pady=10)

    # ---------- login ----------

    def show_login(self) -> None:
        frame = self._new_frame()
        tk.Label(frame, text="Log in", fg=FG, bg=BG,
                 font=("Segoe UI", 12, "bold")).grid(row=0, column=0, columnspan=2, pady=(10, 5))
        e_user = self._labelled_entry(frame, 1, "Username")
        e_pass = self._labelled_entry(frame, 2, "Password", show="*")

        def submit():
            granted = self.session.attempt_login(e_user.get(), e_pass.get())
            status = self.session.status_message()
            if granted:
                messagebox.showinfo("Login", status)
                # saved units without a sender are attributed to the user now logged in
                self.session.load_from_directory()
                self.show_messaging()
            else:
                messagebox.showerror("Login", status)

        ttk.Button(frame, text="Log in", command=submit).grid(row=3, column=0, columnspan=2, pady=10)

    # ---------- messaging ----------

    def show_messaging(self) -> None:
        frame = self._new_frame()
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)

        columns = ("status", "id", "recipient", "index", "hash", "payload")
        headers = {
            "status": "Status",
            "id": "Message ID",
            "recipient": "Recipient",
            "index": "#",
            "hash": "Hash",
            "payload": "Message",
        }
        self.tree = ttk.Treeview(frame, columns=columns, show="headings")
        self.tree.grid(row=0, column=0, sticky="nsew", padx=10, pady=(10, 5))
        for col in columns:
            self.tree.heading(col, text=headers[col])
        self.tree.column("index", width=40, anchor="center")
        self.tree.column("payload", width=320)
        for status, color in STATUS_COLORS.items():
            self.tree.tag_configure(status.value, foreground=color)

        actions = tk.Frame(frame, bg=BG)
        actions.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 5))
        for text, command in (
            ("New Message", self.new_message),
            ("Report", lambda: self._show("Sent Messages Report", self.session.report())),
            ("Longest", lambda: self._show("Longest Message", self.session.longest_message())),
            ("Search ID", self.search_id),
            ("Search Recipient", self.search_recipient),
            ("Delete by Hash", self.delete_hash),
        ):
            ttk.Button(actions, text=text, command=command).pack(side=tk.LEFT, padx=5)

        extras = tk.Frame(frame, bg=BG)
        extras.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))
        ttk.Button(extras, text="Load from Folder", command=self.load_folder).pack(side=tk.LEFT, padx=5)
        ttk.Button(extras, text="Load Sample Data", command=self.load_sample).pack(side=tk.LEFT, padx=5)
        tk.Checkbutton(
            extras,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg=FG,
            bg=BG,
            selectcolor=FIELD_BG,
            activebackground=BG,
            activeforeground=FG,
        ).pack(side=tk.LEFT, padx=5)
        tk.Checkbutton(
            extras,
            text="Show Logs",
            variable=self.show_logs,
            fg=FG,
            bg=BG,
            selectcolor=FIELD_BG,
            command=self.toggle_logs,
        ).pack(side=tk.LEFT, padx=5)

        self.logs_box = tk.Text(frame, height=8, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.logs_box.grid(row=3, column=0, sticky="ew", padx=10, pady=(0, 6))
        self.logs_box.grid_remove()  # hidden by default
        logging.getLogger("quickchat").addHandler(TkLogHandler(self.root, self._append_log))

        self.refresh_ui()

    def refresh_ui(self) -> None:
        """Rebuild the Tree rows from the store snapshot (sent, stored, disregarded)."""
        if self.tree is None:
            return
        snapshot = self.session.store.snapshot()
        self.tree.delete(*self.tree.get_children())
        for status in Status:
            for message in snapshot[status]:
                self.tree.insert(
                    "",
                    "end",
                    values=(
                        status.value.capitalize(),
                        message.message_id,
                        message.recipient,
                        message.index,
                        message.hash,
                        (message.payload or "")[:60],
                    ),
                    tags=(status.value,),
                )

    def toggle_logs(self) -> None:
        if self.logs_box is None:
            return
        if self.show_logs.get():
            self.logs_box.grid()
        else:
            self.logs_box.grid_remove()

    def _append_log(self, text: str) -> None:
        """Append one line to the Logs panel and trim to LOG_MAX_LINES."""
        if self.logs_box is None or not self.logs_box.winfo_exists():
            return
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        if total_lines > LOG_MAX_LINES:
            remove = total_lines - LOG_MAX_LINES
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")

    def _show(self, title: str, text: str) -> None:
        messagebox.showinfo(title, text)

    def _notify_sent(self, recipient: str) -> None:
        if not self.enable_notifications.get():
            return
        try:
            notification.notify(
                title="Message Sent",
                message=f"Message to {recipient} sent at {datetime.now().strftime('%H:%M:%S')}",
                timeout=NOTIFY_TIMEOUT_SEC,
            )
        except Exception:
            # plyer raises NotImplementedError where no notification backend exists
            logger.warning("Desktop notification unavailable", exc_info=True)

    # ---------- dialogs ----------

    def new_message(self) -> None:
        """
        Purpose: Dialog to compose a message, then Send / Store / Disregard it.
        Side effects: Mutates the session's store; sent and stored messages are written to disk.
        """
        win = tk.Toplevel(self.root)
        win.title("New Message")
        win.configure(bg=BG)

        e_recipient = self._labelled_entry(win, 0, "Recipient (+27...)")
        tk.Label(win, text="Message", fg=FG, bg=BG).grid(row=1, column=0, sticky="ne", padx=5, pady=5)
        t_payload = tk.Text(win, height=6, width=40, bg=FIELD_BG, fg=FG, insertbackground=FG)
        t_payload.grid(row=1, column=1, padx=5, pady=5)

        def build():
            recipient = (e_recipient.get() or "").strip()
            payload = t_payload.get("1.0", "end-1c")
            recipient_check = validate_recipient(recipient)
            if recipient_check != RECIPIENT_CAPTURED:
                messagebox.showerror("Recipient", recipient_check, parent=win)
                return None
            payload_check = validate_payload_length(payload)
            if payload_check != PAYLOAD_READY:
                messagebox.showerror("Message", payload_check, parent=win)
                return None
            message = self.session.create_message(recipient, payload)
            messagebox.showinfo("Message ID", id_notification(message), parent=win)
            return message

        def send():
            message = build()
            if message is None:
                return
            result = self.session.send(message)
            if result == SEND_OK:
                stored = self.session.store_for_later(message)
                result = f"{result}\n{stored}\nTotal sent: {self.session.total_sent()}"
                self._notify_sent(message.recipient)
            messagebox.showinfo("Send", result, parent=win)
            win.destroy()
            self.refresh_ui()

        def store():
            message = build()
            if message is None:
                return
            messagebox.showinfo("Store", self.session.store_for_later(message), parent=win)
            win.destroy()
            self.refresh_ui()

        def disregard():
            message = build()
            if message is None:
                return
            messagebox.showinfo("Disregard", self.session.disregard(message), parent=win)
            win.destroy()
            self.refresh_ui()

        buttons = tk.Frame(win, bg=BG)
        buttons.grid(row=2, column=0, columnspan=2, pady=10)
        ttk.Button(buttons, text="Send Message", command=send).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Store Message", command=store).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Disregard Message", command=disregard).pack(side=tk.LEFT, padx=5)

    def search_id(self) -> None:
        message_id = simpledialog.askstring("Search", "Message ID:", parent=self.root)
        if message_id:
            self._show("Search by ID", self.session.search_by_id(message_id.strip()))

    def search_recipient(self) -> None:
        recipient = simpledialog.askstring("Search", "Recipient number:", parent=self.root)
        if recipient:
            self._show("Search by Recipient", self.session.search_by_recipient(recipient.strip()))

    def delete_hash(self) -> None:
        message_hash = simpledialog.askstring("Delete", "Message hash:", parent=self.root)
        if not message_hash:
            return
        self._show("Delete", self.session.delete_by_hash(message_hash.strip()))
        self.refresh_ui()

    def load_folder(self) -> None:
        directory = filedialog.askdirectory(initialdir=str(self.session.messages_dir), parent=self.root)
        if not directory:
            return
        added = self.session.load_from_directory(directory)
        self._show("Load", f"{added} messages loaded into Stored Messages.")
        self.refresh_ui()

    def load_sample(self) -> None:
        if not messagebox.askyesno("Sample Data", "Replace all messages with the sample set?"):
            return
        self.session.load_sample_data()
        self.refresh_ui()
