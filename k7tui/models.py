"""Data records exchanged with the video repository service."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, Union, runtime_checkable

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
CLOCK_FORMAT = "%H:%M:%S"
NOTIFICATION_ID_FORMAT = "%Y%m%d%H%M%S"

DEFAULT_NOTIFICATION_TYPE = "notification"
DEFAULT_NOTIFICATION_MESSAGE = "New notification received"


@dataclass
class UserResponse:
    """A user account as returned by the repository service."""

    id: str = ""
    username: str = ""
    password: str = ""
    created_at: str = ""


@dataclass
class VideoMetadataResponse:
    """Stored metadata of one uploaded video."""

    id: str = ""
    user_id: str = ""
    title: str = ""
    description: str = ""
    created_at: str = ""
    file_name: str = ""


@dataclass
class VideoMetadata:
    """First message of an upload stream, describing the video."""

    user_id: str
    title: str
    description: str
    file_name: str
    file_size: int = 0


@dataclass
class VideoChunk:
    """A piece of video content in an upload stream."""

    data: bytes
    chunk_number: int = 1


UploadRequest = Union[VideoMetadata, VideoChunk]


@dataclass
class Notification:
    """A notification shown to the user."""

    id: str
    type: str
    message: str
    time: str

    @classmethod
    def from_message(cls, message: Mapping[str, Any], now: datetime) -> Notification:
        """Build a notification from a decoded JSON message received at ``now``."""
        kind = message.get("type")
        text = message.get("message")
        return cls(
            id=now.strftime(NOTIFICATION_ID_FORMAT),
            type=kind if isinstance(kind, str) else DEFAULT_NOTIFICATION_TYPE,
            message=text if isinstance(text, str) else DEFAULT_NOTIFICATION_MESSAGE,
            time=now.strftime(CLOCK_FORMAT),
        )


@runtime_checkable
class RepoServiceClient(Protocol):
    """Operations offered by the video repository service.

    Implementations raise an exception when a call fails.
    """

    def create_user(self, username: str, email: str = "", password: str = "") -> UserResponse:
        """Create a user account."""
        ...

    def get_user(self, username: str, password: str = "") -> UserResponse:
        """Look up a user account."""
        ...

    def upload_video(self, requests: Iterable[UploadRequest]) -> VideoMetadataResponse:
        """Consume an upload stream: one VideoMetadata followed by VideoChunks."""
        ...

    def get_user_videos(self, user_id: str) -> list[VideoMetadataResponse]:
        """Return every video of a user."""
        ...

    def get_last3_user_videos(self, user_id: str) -> list[VideoMetadataResponse]:
        """Return the three most recent videos of a user."""
        ...

    def get_video_by_id(self, video_id: str) -> VideoMetadataResponse:
        """Return the metadata of one video."""
        ...

    def download_video(self, video_id: str) -> Any:
        """Fetch the content of one video."""
        ...

    def remove_video(self, video_id: str) -> Any:
        """Delete one video."""
        ...