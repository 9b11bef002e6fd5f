"""Shared application state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from k7tui.models import Notification, RepoServiceClient, UserResponse, VideoMetadataResponse

MAX_NOTIFICATIONS = 50


@dataclass
class AppState:
    """Session state shared between the interface and background workers."""

    logged_in: bool = False
    current_user: UserResponse | None = None
    token: str = ""
    videos: list[VideoMetadataResponse] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    grpc_client: RepoServiceClient | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def set_user(self, user: UserResponse) -> None:
        """Record the logged-in user."""
        with self._lock:
            self.current_user = user
            self.logged_in = True

    def add_notification(self, notification: Notification) -> None:
        """Append a notification, keeping only the most recent ones."""
        with self._lock:
            self.notifications.append(notification)
            if len(self.notifications) > MAX_NOTIFICATIONS:
                del self.notifications[: len(self.notifications) - MAX_NOTIFICATIONS]

    def logout(self) -> None:
        """Forget the user, token and videos of the session."""
        with self._lock:
            self.logged_in = False
            self.current_user = None
            self.token = ""
            self.videos = []