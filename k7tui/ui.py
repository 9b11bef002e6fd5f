"""Terminal interface built on urwid."""

from __future__ import annotations

import os
import queue
import time
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

import urwid
import websocket

from k7tui.controller import (
    LOGIN_REQUIRED,
    PAGE_DASHBOARD,
    PAGE_LOGIN,
    PAGE_MAIN,
    RECENT_HEADERS,
    VIDEO_HEADERS,
    ActionError,
    Controller,
    Task,
)
from k7tui.models import Notification
from k7tui.notifier import Connector, WebSocketManager
from k7tui.state import AppState

PAGE_REGISTER = "register"
PAGE_UPLOAD = "upload"
PAGE_VIDEOS = "videos"
PAGE_RECENT = "recent"
PAGE_NOTIFICATIONS = "notifications"

MESSAGE_OVERLAY = "message"
FILE_BROWSER_OVERLAY = "file_browser"
FILE_DIALOG_OVERLAY = "file_dialog"

DEFAULT_UPLOAD_PATH = "/home/user/example.mp4"

PALETTE = [
    ("header", "yellow,bold", "default"),
    ("dim", "dark gray", "default"),
    ("focus", "standout", ""),
]

WELCOME_TEXT = (
    "Welcome to CodeK7 TUI!\n\n"
    "Video Management System\n\n"
    "• Login or Register to get started\n"
    "• Upload and manage your videos\n"
    "• Real-time notifications via WebSocket\n"
    "• Browse your video library\n"
    "• Try Demo Mode for a quick preview"
)

UPLOAD_HELP = (
    "📋 Upload Instructions:\n"
    "• Supported formats: MP4, AVI, MOV, MKV\n"
    "• Maximum file size: 500MB\n"
    "• Processing happens in real-time via Kafka\n"
    "• You'll receive notifications when complete\n"
    "• Files are chunked for efficient streaming"
)

FILE_BROWSER_TEXT = (
    "File Browser\n\n"
    "Enter the full path to your video file:\n\n"
    "Examples:\n"
    "/home/user/videos/my_video.mp4\n"
    "/tmp/upload.mov\n"
    "./local_video.avi"
)

Action = Callable[[], Any]
MenuEntry = tuple[str, str, str, Action]


def _invoke(action: Action) -> Callable[[Any], None]:
    def handler(_button: Any) -> None:
        action()

    return handler


def _button_row(buttons: Sequence[tuple[str, Action]]) -> urwid.Columns:
    return urwid.Columns(
        [urwid.Button(label, on_press=_invoke(action)) for label, action in buttons],
        dividechars=2,
    )


class _Row(urwid.WidgetWrap):
    """A row that can take focus even when its contents cannot."""

    def selectable(self) -> bool:
        return True

    def keypress(self, size: Any, key: str) -> str | None:
        inner = self._w
        if inner.selectable():
            return inner.keypress(size, key)
        return key


class _Menu(urwid.ListBox):
    """A list of actions, each reachable by a single-key shortcut."""

    def __init__(self, entries: Sequence[MenuEntry]) -> None:
        self._shortcuts = {key: action for _, _, key, action in entries}
        items = [
            urwid.AttrMap(
                urwid.Pile([
                    urwid.Button(f"({key}) {label}", on_press=_invoke(action)),
                    urwid.Text(("dim", "    " + description)),
                ]),
                None,
                focus_map="focus",
            )
            for label, description, key, action in entries
        ]
        super().__init__(urwid.SimpleFocusListWalker(items))

    def keypress(self, size: Any, key: str) -> str | None:
        action = self._shortcuts.get(key)
        if action is not None:
            action()
            return None
        return super().keypress(size, key)


class _KeyCapture(urwid.WidgetWrap):
    """Handles some keys before the wrapped widget sees them."""

    def __init__(self, widget: urwid.Widget, keys: dict[str, Action]) -> None:
        super().__init__(widget)
        self._keys = keys

    def keypress(self, size: Any, key: str) -> str | None:
        action = self._keys.get(key)
        if action is not None:
            action()
            return None
        return super().keypress(size, key)


def _rows_list(rows: Sequence[urwid.Widget]) -> urwid.ListBox:
    return urwid.ListBox(urwid.SimpleFocusListWalker(
        [urwid.AttrMap(_Row(row), None, focus_map="focus") for row in rows]
    ))


class TuiApp:
    """The full-screen application: pages, pop-up dialogs and the event loop."""

    def __init__(
        self,
        state: AppState | None = None,
        *,
        ws_connector: Connector = websocket.create_connection,
        run_background: Callable[[Task], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state if state is not None else AppState()
        self.loop: urwid.MainLoop | None = None
        self.page = PAGE_MAIN
        self.message: str | None = None
        self._base: urwid.Widget = urwid.SolidFill(" ")
        self.widget: urwid.Widget = self._base
        self._overlays: list[tuple[str, urwid.Widget, Any, Any]] = []
        self._tasks: queue.SimpleQueue[Task] = queue.SimpleQueue()
        self._wake_fd: int | None = None
        self.ws_manager = WebSocketManager(
            self.state, self._notification_received, connector=ws_connector, clock=clock
        )
        options: dict[str, Any] = {}
        if run_background is not None:
            options["run_background"] = run_background
        self.controller = Controller(
            state=self.state,
            ws_manager=self.ws_manager,
            show_message=self.show_message,
            dismiss_message=self._dismiss_message,
            show_page=self._show_page,
            call_soon=self._call_soon,
            sleep=sleep,
            clock=clock,
            **options,
        )
        self._main_page = self._build_main_page()
        self.show_main()

    # Page and overlay management

    def _switch(self, name: str, widget: urwid.Widget) -> None:
        self.page = name
        self._base = widget
        self._overlays.clear()
        self.message = None
        self._refresh()

    def _add_overlay(self, name: str, widget: urwid.Widget, width: Any, height: Any) -> None:
        self._overlays = [entry for entry in self._overlays if entry[0] != name]
        self._overlays.append((name, widget, width, height))
        self._refresh()

    def _remove_overlay(self, name: str) -> None:
        self._overlays = [entry for entry in self._overlays if entry[0] != name]
        if name == MESSAGE_OVERLAY:
            self.message = None
        self._refresh()

    def _refresh(self) -> None:
        widget = self._base
        for _, top, width, height in self._overlays:
            widget = urwid.Overlay(top, widget, "center", width, "middle", height)
        self.widget = widget
        if self.loop is not None:
            self.loop.widget = widget

    def _show_page(self, name: str) -> None:
        pages = {
            PAGE_MAIN: self.show_main,
            PAGE_LOGIN: self.show_login,
            PAGE_DASHBOARD: self.show_dashboard,
        }
        try:
            show = pages[name]
        except KeyError:
            raise ValueError(f"unknown page: {name}") from None
        show()

    def _dismiss_message(self) -> None:
        self._remove_overlay(MESSAGE_OVERLAY)

    def _stop(self) -> None:
        self.ws_manager.disconnect()
        raise urwid.ExitMainLoop()

    # Thread hand-off

    def _call_soon(self, task: Task) -> None:
        fd = self._wake_fd
        if fd is None:
            task()
            return
        self._tasks.put(task)
        try:
            os.write(fd, b"!")
        except OSError:
            pass

    def _drain_tasks(self, _data: bytes) -> bool:
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return True
            task()

    def _notification_received(self, _notification: Notification) -> None:
        self._call_soon(self._notification_arrived)

    def _notification_arrived(self) -> None:
        if self.page == PAGE_NOTIFICATIONS:
            self.show_notifications()

    # Pages

    def _build_main_page(self) -> urwid.Widget:
        menu = _Menu([
            ("🔑 Login", "Login to your account", "l", self.show_login),
            ("📝 Register", "Create a new account", "r", self.show_register),
            ("📊 Dashboard", "View dashboard (login required)", "d", self._dashboard_if_logged_in),
            ("🎭 Demo Mode", "Try the app with demo data", "m", self.controller.enable_demo_mode),
            ("❌ Quit", "Exit the application", "q", self._stop),
        ])
        welcome = urwid.LineBox(
            urwid.Filler(urwid.Text(WELCOME_TEXT, align="center"), valign="top"),
            title="Welcome",
        )
        return urwid.Pile([
            (9, welcome),
            urwid.LineBox(menu, title="📺 CodeK7 TUI - Main Menu"),
        ])

    def _dashboard_if_logged_in(self) -> None:
        if self.state.logged_in:
            self.show_dashboard()
        else:
            self.show_message(LOGIN_REQUIRED)

    def _centered_form(
        self,
        title: str,
        fields: Sequence[urwid.Widget],
        buttons: Sequence[tuple[str, Action]],
        width: int,
    ) -> urwid.Widget:
        box = urwid.LineBox(
            urwid.Pile([*fields, urwid.Divider(), _button_row(buttons)]), title=title
        )
        return urwid.Filler(urwid.Padding(box, align="center", width=width), valign="middle")

    def show_main(self) -> None:
        """Switch to the main menu."""
        self._switch(PAGE_MAIN, self._main_page)

    def show_login(self) -> None:
        """Switch to the login form."""
        username = urwid.Edit("Username: ")
        hidden_field = urwid.Edit("Password: ", mask="*")
        buttons = [
            ("Login", lambda: self.controller.process_login(
                username.edit_text, hidden_field.edit_text)),
            ("Register", self.show_register),
            ("Back", self.show_main),
        ]
        self._switch(
            PAGE_LOGIN, self._centered_form("🔑 Login", [username, hidden_field], buttons, 60)
        )

    def show_register(self) -> None:
        """Switch to the registration form."""
        username = urwid.Edit("Username: ")
        email = urwid.Edit("Email: ")
        hidden_field = urwid.Edit("Password: ", mask="*")
        buttons = [
            ("Register", lambda: self.controller.process_register(
                username.edit_text, email.edit_text, hidden_field.edit_text)),
            ("Back to Login", self.show_login),
            ("Back", self.show_main),
        ]
        self._switch(
            PAGE_REGISTER,
            self._centered_form("📝 Register", [username, email, hidden_field], buttons, 60),
        )

    def show_dashboard(self) -> None:
        """Switch to the dashboard, or to the main menu when nobody is logged in."""
        if not self.state.logged_in:
            self.show_main()
            return
        self.controller.load_user_videos()
        info = urwid.LineBox(
            urwid.Filler(urwid.Text(self.controller.dashboard_text()), valign="top"),
            title="📊 Dashboard - Real-time Status",
        )
        actions: list[MenuEntry] = [
            ("📤 Upload Video", "Upload a new video file", "u", self.show_upload),
            ("🎞️  My Videos", "Browse and manage your videos", "v", self.show_videos),
            ("📡 Notifications", "View real-time notifications", "n", self.show_notifications),
            ("📊 Recent Videos", "View your 3 most recent videos", "s", self.show_recent_videos),
            ("🔄 Refresh Data", "Reload videos and notifications", "r", self.controller.refresh_data),
            ("🔌 WebSocket", "Toggle real-time connection", "w", self.controller.toggle_websocket),
            ("🏠 Main Menu", "Return to main menu", "m", self.show_main),
            ("🚪 Logout", "End session and logout", "l", self.controller.logout),
        ]
        menu = urwid.LineBox(_Menu(actions), title="🎯 Quick Actions")
        layout = urwid.Columns([("weight", 2, info), ("weight", 1, menu)], focus_column=1)
        keys: dict[str, Action] = {key: action for _, _, key, action in actions}
        keys["q"] = self._stop
        self._switch(PAGE_DASHBOARD, _KeyCapture(layout, keys))

    def show_upload(self) -> None:
        """Switch to the upload form."""
        if not self.state.logged_in:
            self.show_message(LOGIN_REQUIRED)
            return
        path = urwid.Edit("File Path: ", DEFAULT_UPLOAD_PATH)
        title = urwid.Edit("Title: ")
        description = urwid.Edit("Description: ", multiline=True)
        buttons = [
            ("📤 Upload Video", lambda: self.controller.process_upload(
                path.edit_text, title.edit_text, description.edit_text)),
            ("📁 Browse Files", lambda: self._show_file_browser(path.set_edit_text)),
            ("🏠 Back to Dashboard", self.show_dashboard),
        ]
        form = urwid.LineBox(
            urwid.Pile([path, title, description, urwid.Divider(), _button_row(buttons)]),
            title="📤 Upload Video - Real-time Processing",
        )
        help_box = urwid.LineBox(
            urwid.Filler(urwid.Text(UPLOAD_HELP), valign="top"), title="ℹ️ Help"
        )
        body = urwid.Pile([
            (8, help_box),
            urwid.Filler(urwid.Padding(form, align="center", width=80), valign="top"),
        ])
        self._switch(PAGE_UPLOAD, body)

    def _table_page(
        self,
        title: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        hint: str,
    ) -> urwid.Widget:
        header = urwid.AttrMap(
            urwid.Columns([urwid.Text(name, align="center") for name in headers], dividechars=1),
            "header",
        )
        body = _rows_list([
            urwid.Columns([urwid.Text(cell) for cell in row], dividechars=1) for row in rows
        ])
        table = urwid.LineBox(urwid.Frame(body, header=header), title=title)
        page = urwid.Frame(table, footer=urwid.Text(hint, align="center"))
        return _KeyCapture(page, {"esc": self.show_dashboard})

    def show_videos(self) -> None:
        """Switch to the table of the user's videos."""
        if not self.state.logged_in:
            self.show_message(LOGIN_REQUIRED)
            return
        self.controller.load_user_videos()
        self._switch(PAGE_VIDEOS, self._table_page(
            "🎞️  My Videos",
            VIDEO_HEADERS,
            self.controller.video_rows(),
            "Press ESC to go back to Dashboard | Use arrow keys to navigate",
        ))

    def show_recent_videos(self) -> None:
        """Switch to the table of the user's three most recent videos."""
        if not self.state.logged_in:
            self.show_message(LOGIN_REQUIRED)
            return
        try:
            rows = self.controller.recent_video_rows()
        except ActionError as exc:
            self.show_message(str(exc))
            return
        self._switch(PAGE_RECENT, self._table_page(
            "📊 Recent Videos (Last 3)",
            RECENT_HEADERS,
            rows,
            "Press ESC to return to Dashboard | Use arrows to navigate",
        ))

    def show_notifications(self) -> None:
        """Switch to the list of received notifications."""
        if not self.state.logged_in:
            self.show_message(LOGIN_REQUIRED)
            return
        body = _rows_list([
            urwid.Pile([urwid.Text(title), urwid.Text(("dim", "    " + text))])
            for title, text in self.controller.notification_items()
        ])
        page = urwid.Frame(
            urwid.LineBox(body, title="📡 Notifications"),
            footer=urwid.Text("Press ESC to go back to Dashboard", align="center"),
        )
        self._switch(PAGE_NOTIFICATIONS, _KeyCapture(page, {"esc": self.show_dashboard}))

    # Dialogs

    def show_message(self, message: str) -> None:
        """Pop up a message with an OK button, replacing any earlier one."""
        box = urwid.LineBox(urwid.Pile([
            urwid.Text(message, align="center"),
            urwid.Divider(),
            urwid.Padding(
                urwid.Button("OK", on_press=_invoke(self._dismiss_message)),
                align="center",
                width=6,
            ),
        ]))
        self._add_overlay(MESSAGE_OVERLAY, box, ("relative", 60), "pack")
        self.message = message

    def _show_file_browser(self, on_select: Callable[[str], Any]) -> None:
        def choose() -> None:
            self._remove_overlay(FILE_BROWSER_OVERLAY)
            self._show_file_path_dialog(on_select)

        box = urwid.LineBox(urwid.Pile([
            urwid.Text(FILE_BROWSER_TEXT, align="center"),
            urwid.Divider(),
            _button_row([
                ("📁 Select File", choose),
                ("❌ Cancel", lambda: self._remove_overlay(FILE_BROWSER_OVERLAY)),
            ]),
        ]))
        self._add_overlay(FILE_BROWSER_OVERLAY, box, ("relative", 60), "pack")

    def _show_file_path_dialog(self, on_select: Callable[[str], Any]) -> None:
        path = urwid.Edit("File Path: ")

        def select() -> None:
            if path.edit_text:
                on_select(path.edit_text)
            self._remove_overlay(FILE_DIALOG_OVERLAY)

        box = urwid.LineBox(
            urwid.Pile([
                path,
                urwid.Divider(),
                _button_row([
                    ("✅ Select", select),
                    ("❌ Cancel", lambda: self._remove_overlay(FILE_DIALOG_OVERLAY)),
                ]),
            ]),
            title="📁 Select Video File",
        )
        self._add_overlay(FILE_DIALOG_OVERLAY, box, 60, "pack")

    # Event loop

    def run(self) -> None:
        """Take over the terminal until the user quits."""
        self.loop = urwid.MainLoop(self.widget, palette=PALETTE)
        self._wake_fd = self.loop.watch_pipe(self._drain_tasks)
        try:
            self.loop.run()
        finally:
            fd, self._wake_fd = self._wake_fd, None
            self.loop.remove_watch_pipe(fd)
            os.close(fd)
            self.loop = None
            self.ws_manager.disconnect()