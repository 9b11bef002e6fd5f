"""Demo data and an in-memory repository client."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from k7tui.models import (
    CLOCK_FORMAT,
    DATETIME_FORMAT,
    Notification,
    UploadRequest,
    UserResponse,
    VideoMetadataResponse,
)

DEMO_USER_ID = "demo-user-123"


def demo_user(now: datetime) -> UserResponse:
    """Return the demo account as created at ``now``."""
    return UserResponse(
        id=DEMO_USER_ID,
        username="demo_user",
        password="",
        created_at=now.strftime(DATETIME_FORMAT),
    )


def _video(
    now: datetime, ago: timedelta, video_id: str, user_id: str,
    title: str, description: str, file_name: str,
) -> VideoMetadataResponse:
    return VideoMetadataResponse(
        id=video_id,
        user_id=user_id,
        title=title,
        description=description,
        created_at=(now - ago).strftime(DATETIME_FORMAT),
        file_name=file_name,
    )


def _first_videos(now: datetime, user_id: str) -> list[VideoMetadataResponse]:
    return [
        _video(now, timedelta(hours=2), "video-1", user_id, "My First Video",
               "This is a demo video showing the upload functionality", "first_video.mp4"),
        _video(now, timedelta(hours=1), "video-2", user_id, "Tutorial: Getting Started",
               "A comprehensive tutorial for new users", "tutorial.mp4"),
    ]


def demo_videos(now: datetime) -> list[VideoMetadataResponse]:
    """Return the demo account's videos, oldest first."""
    return _first_videos(now, DEMO_USER_ID) + [
        _video(now, timedelta(minutes=30), "video-3", DEMO_USER_ID, "Advanced Features Demo",
               "Showcasing advanced features of the platform", "advanced_demo.mp4"),
    ]


def demo_notifications(now: datetime) -> list[Notification]:
    """Return the notifications shown in demo mode."""
    entries = [
        ("notif-1", "upload", "Video 'My First Video' uploaded successfully", timedelta(hours=2)),
        ("notif-2", "system", "Welcome to CodeK7! Your account is ready.", timedelta(hours=1)),
        ("notif-3", "upload", "Video 'Advanced Features Demo' processing complete",
         timedelta(minutes=30)),
    ]
    return [
        Notification(id=nid, type=kind, message=text, time=(now - ago).strftime(CLOCK_FORMAT))
        for nid, kind, text, ago in entries
    ]


@dataclass
class MockRepoServiceClient:
    """Repository client that answers every call with demo data."""

    clock: Callable[[], datetime] = field(default=datetime.now)
    recent: list[VideoMetadataResponse] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def _stamp(self) -> tuple[int, str]:
        now = self.clock()
        return int(now.timestamp()), now.strftime(DATETIME_FORMAT)

    def create_user(self, username: str, email: str = "", password: str = "") -> UserResponse:
        """Pretend to create an account."""
        seconds, created = self._stamp()
        return UserResponse(id=f"user-{seconds}", username=username, created_at=created)

    def get_user(self, username: str, password: str = "") -> UserResponse:
        """Accept any credentials and return the demo account id."""
        _, created = self._stamp()
        return UserResponse(id=DEMO_USER_ID, username=username, created_at=created)

    def upload_video(self, requests: Iterable[UploadRequest]) -> VideoMetadataResponse:
        """Drain the upload stream and report success."""
        for _ in requests:
            pass
        seconds, created = self._stamp()
        return VideoMetadataResponse(
            id=f"video-{seconds}",
            user_id=DEMO_USER_ID,
            title="Uploaded Video",
            created_at=created,
        )

    def get_user_videos(self, user_id: str) -> list[VideoMetadataResponse]:
        """Return two demo videos owned by ``user_id``."""
        return _first_videos(self.clock(), user_id)

    def get_last3_user_videos(self, user_id: str) -> list[VideoMetadataResponse]:
        """Return the configured recent videos, empty by default."""
        return list(self.recent[:3])

    def get_video_by_id(self, video_id: str) -> VideoMetadataResponse:
        """Return empty metadata."""
        return VideoMetadataResponse()

    def download_video(self, video_id: str) -> Iterator[bytes]:
        """Return an empty chunk stream."""
        return iter(())

    def remove_video(self, video_id: str) -> None:
        """Record the removal request."""
        self.removed.append(video_id)