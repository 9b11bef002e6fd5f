"""Actions behind the terminal interface, independent of any widget toolkit."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from k7tui.demo import demo_notifications, demo_user, demo_videos
from k7tui.models import CLOCK_FORMAT, Notification, VideoMetadataResponse
from k7tui.notifier import WebSocketManager
from k7tui.state import AppState
from k7tui.upload import upload_video

MAX_UPLOAD_SIZE = 500 * 1024 * 1024
MEGABYTE = 1024 * 1024
UPLOAD_RETURN_DELAY = 2.0
REFRESH_RETURN_DELAY = 1.0

PAGE_MAIN = "main"
PAGE_LOGIN = "login"
PAGE_DASHBOARD = "dashboard"

VIDEO_HEADERS = ("ID", "Title", "Description", "Created", "File")
RECENT_HEADERS = ("Title", "Description", "Created")

LOGIN_REQUIRED = "Please login first!"
FILL_ALL_FIELDS = "Please fill in all fields"
CLIENT_MISSING = "gRPC client not initialized"

_RULE = "━" * 40

Task = Callable[[], None]


class ActionError(Exception):
    """An action could not be carried out; the message is meant for the user."""


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _start_thread(task: Task) -> None:
    threading.Thread(target=task, daemon=True).start()


def _call_now(task: Task) -> None:
    task()


@dataclass
class Controller:
    """Carries out user actions and reports through the given callbacks.

    ``show_page`` receives the name of the page to switch to; the dashboard
    page is expected to reload the user's videos when it is shown.
    ``run_background`` starts slow work, ``call_soon`` runs a task on the
    interface's thread. Callbacks left as ``None`` are not called.
    """

    state: AppState
    ws_manager: WebSocketManager | None = None
    show_message: Callable[[str], None] | None = None
    dismiss_message: Callable[[], None] | None = None
    show_page: Callable[[str], None] | None = None
    run_background: Callable[[Task], None] = _start_thread
    call_soon: Callable[[Task], None] = _call_now
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], datetime] = datetime.now

    def _notify(self, message: str) -> None:
        if self.show_message is not None:
            self.show_message(message)

    def _dismiss(self) -> None:
        if self.dismiss_message is not None:
            self.dismiss_message()

    def _switch(self, page: str) -> None:
        if self.show_page is not None:
            self.show_page(page)

    def _show_error(self, error: object) -> None:
        self._notify(f"Error: {error}")

    def _open_dashboard(self) -> None:
        self._switch(PAGE_DASHBOARD if self.state.logged_in else PAGE_MAIN)

    def process_login(self, username: str, password: str) -> bool:
        """Log in; return whether it succeeded."""
        if not username or not password:
            self._notify(FILL_ALL_FIELDS)
            return False
        client = self.state.grpc_client
        if client is None:
            self._notify(CLIENT_MISSING)
            return False
        try:
            user = client.get_user(username, password)
        except Exception as exc:
            self._show_error(exc)
            return False
        self.state.set_user(user)
        self.load_user_videos()
        self._open_dashboard()
        self._notify("Login successful!")
        return True

    def process_register(self, username: str, email: str, password: str) -> bool:
        """Create an account; return whether it succeeded."""
        if not username or not email or not password:
            self._notify(FILL_ALL_FIELDS)
            return False
        client = self.state.grpc_client
        if client is None:
            self._notify(CLIENT_MISSING)
            return False
        try:
            client.create_user(username, email, password)
        except Exception as exc:
            self._show_error(exc)
            return False
        self._notify("Registration successful! Please login.")
        self._switch(PAGE_LOGIN)
        return True

    def process_upload(self, file_path: str, title: str, description: str) -> bool:
        """Check the request and start the upload in the background.

        Returns whether the upload was started.
        """
        if not file_path or not title:
            self._notify("❌ Please fill in required fields (File Path and Title)")
            return False
        try:
            size = os.stat(file_path).st_size
        except FileNotFoundError:
            self._notify("❌ File does not exist: " + file_path)
            return False
        except OSError as exc:
            self._notify("❌ Cannot access file: " + str(exc))
            return False
        if size > MAX_UPLOAD_SIZE:
            self._notify(f"❌ File too large: {size / MEGABYTE:.2f} MB (max 500MB)")
            return False
        user = self.state.current_user
        if user is None:
            self._notify("❌ No user logged in")
            return False
        client = self.state.grpc_client
        if client is None:
            self._notify("❌ " + CLIENT_MISSING)
            return False

        self._notify(
            "📤 Uploading video...\n\n"
            f"📁 File: {Path(file_path).name}\n"
            f"📏 Size: {size / MEGABYTE:.2f} MB\n"
            f"👤 User: {user.username}\n\n"
            "⏳ This may take a while depending on file size.\n"
            "The file will be processed in real-time via Kafka streams."
        )

        def succeeded() -> None:
            self._notify(
                "✅ Video uploaded successfully!\n\n"
                "🎯 Your video is now being processed.\n"
                "📡 You'll receive real-time notifications when ready.\n"
                "🔄 The video list will be updated automatically."
            )
            now = self.clock()
            self.state.add_notification(
                Notification(
                    id=f"upload-{int(now.timestamp())}",
                    type="upload",
                    message=f"Video '{title}' uploaded successfully",
                    time=now.strftime(CLOCK_FORMAT),
                )
            )
            self.load_user_videos()

        def back_to_dashboard() -> None:
            self._dismiss()
            self._open_dashboard()

        def work() -> None:
            try:
                upload_video(client, file_path, title, description, user.id)
            except Exception as exc:
                failure = f"Upload failed: {exc}"
                self.call_soon(lambda: self._show_error(failure))
                return
            self.call_soon(succeeded)
            self.sleep(UPLOAD_RETURN_DELAY)
            self.call_soon(back_to_dashboard)

        self.run_background(work)
        return True

    def logout(self) -> None:
        """End the session and close the notification connection."""
        self.state.logout()
        if self.ws_manager is not None:
            self.ws_manager.disconnect()
        self._switch(PAGE_MAIN)
        self._notify("Logged out successfully!")

    def load_user_videos(self) -> None:
        """Replace the stored videos with the server's list; failures are ignored."""
        user = self.state.current_user
        client = self.state.grpc_client
        if user is None or client is None:
            return
        try:
            videos = client.get_user_videos(user.id)
        except Exception:
            return
        self.state.videos = list(videos)

    def enable_demo_mode(self) -> None:
        """Log in as the demo user with sample videos and notifications."""
        now = self.clock()
        self.state.set_user(demo_user(now))
        self.state.videos = demo_videos(now)
        for notification in demo_notifications(now):
            self.state.add_notification(notification)
        self._notify("Demo mode enabled! You are logged in as demo_user.")
        self._open_dashboard()

    def dashboard_text(self) -> str:
        """Return the text of the dashboard's status panel."""
        user = self.state.current_user
        videos = self.state.videos
        notifications = self.state.notifications
        username, user_id = ("Demo User", "demo-123") if user is None else (user.username, user.id)
        recent = truncate(f"Latest: {videos[0].title}", 30) if videos else "No videos yet"
        connected = self.ws_manager is not None and self.ws_manager.is_connected()
        ws_status = "✅ Connected" if connected else "❌ Disconnected"
        return (
            f"🎉 Welcome back, {username}!\n\n"
            f"👤 User ID: {user_id}\n"
            f"🎥 Total Videos: {len(videos)}\n"
            f"📺 {recent}\n"
            f"📡 Notifications: {len(notifications)}\n"
            f"🔌 WebSocket: {ws_status}\n\n"
            f"{_RULE}\n"
            "💡 Navigation Tips:\n"
            "   • Use arrow keys or hotkeys\n"
            "   • Press TAB to switch focus\n"
            "   • ESC to go back from any view\n"
            f"{_RULE}"
        )

    def video_rows(self) -> list[tuple[str, str, str, str, str]]:
        """Return the rows of the video table, matching VIDEO_HEADERS."""
        if not self.state.videos:
            return [("No videos found", "Upload your first video!", "", "", "")]
        return [
            (video.id, video.title, truncate(video.description, 30), video.created_at,
             video.file_name)
            for video in self.state.videos
        ]

    def recent_video_rows(self) -> list[tuple[str, str, str]]:
        """Return the rows of the recent-videos table, matching RECENT_HEADERS.

        Falls back to the first three stored videos when the server fails.
        """
        client = self.state.grpc_client
        if client is None:
            raise ActionError("gRPC client not available")
        user = self.state.current_user
        videos: list[VideoMetadataResponse]
        try:
            videos = list(client.get_last3_user_videos(user.id if user else ""))
        except Exception:
            videos = self.state.videos[:3]
        if not videos:
            return [("No recent videos", "Upload your first video!", "")]
        return [
            (video.title, truncate(video.description, 40), video.created_at)
            for video in videos
        ]

    def notification_items(self) -> list[tuple[str, str]]:
        """Return (title, message) pairs for the notification list."""
        if not self.state.notifications:
            return [("No notifications", "Connect to WebSocket to receive notifications")]
        return [
            (f"[{notification.type}] {notification.time}", notification.message)
            for notification in self.state.notifications
        ]

    def toggle_websocket(self) -> None:
        """Connect the notification stream, or disconnect it if connected."""
        if self.ws_manager is None:
            self._notify("WebSocket manager not initialized!")
            return
        if self.ws_manager.is_connected():
            self.ws_manager.disconnect()
            self._notify("🔌 WebSocket disconnected")
        else:
            self.start_websocket()

    def start_websocket(self) -> None:
        """Open the notification stream for the logged-in user in the background."""
        if not self.state.logged_in:
            self._notify(LOGIN_REQUIRED)
            return
        if self.ws_manager is not None and self.ws_manager.is_connected():
            self._notify("WebSocket already connected!")
            return
        user = self.state.current_user
        if user is None:
            self._notify("No user information available!")
            return
        if self.ws_manager is None:
            self.ws_manager = WebSocketManager(self.state)
        manager = self.ws_manager
        self.run_background(lambda: manager.connect(user.id))
        self._notify("Connecting to WebSocket...")

    def refresh_data(self) -> None:
        """Reload videos in the background, then return to the dashboard."""
        if not self.state.logged_in:
            self._notify(LOGIN_REQUIRED)
            return
        self._notify("🔄 Refreshing data...")

        def refreshed() -> None:
            self._dismiss()
            self._notify("✅ Data refreshed! Updated videos and notifications.")

        def back_to_dashboard() -> None:
            self._dismiss()
            self._open_dashboard()

        def work() -> None:
            self.load_user_videos()
            user = self.state.current_user
            client = self.state.grpc_client
            if client is not None and user is not None:
                try:
                    recent = list(client.get_last3_user_videos(user.id))
                except Exception:
                    recent = []
                if recent:
                    self.state.videos = recent
            self.call_soon(refreshed)
            self.sleep(REFRESH_RETURN_DELAY)
            self.call_soon(back_to_dashboard)

        self.run_background(work)