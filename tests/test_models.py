from datetime import datetime

from k7tui.models import (
    Notification,
    UserResponse,
    VideoChunk,
    VideoMetadata,
    VideoMetadataResponse,
)

NOW = datetime(2024, 1, 2, 3, 4, 5)


def test_from_message_uses_string_fields():
    notif = Notification.from_message({"type": "upload", "message": "done"}, NOW)
    assert notif.type == "upload"
    assert notif.message == "done"


def test_from_message_defaults_when_missing():
    notif = Notification.from_message({}, NOW)
    assert notif.type == "notification"
    assert notif.message == "New notification received"


def test_from_message_ignores_non_string_values():
    notif = Notification.from_message({"type": 7, "message": ["x"]}, NOW)
    assert notif.type == "notification"
    assert notif.message == "New notification received"


def test_from_message_id_and_time_formats():
    notif = Notification.from_message({"type": "system"}, NOW)
    assert notif.id == "20240102030405"
    assert notif.time == "03:04:05"


def test_video_chunk_default_number():
    chunk = VideoChunk(b"abc")
    assert chunk.chunk_number == 1
    assert chunk.data == b"abc"


def test_video_metadata_default_size():
    meta = VideoMetadata(user_id="u", title="t", description="d", file_name="f.mp4")
    assert meta.file_size == 0
    assert meta.file_name == "f.mp4"


def test_response_defaults_are_empty():
    assert UserResponse() == UserResponse(id="", username="", password="", created_at="")
    assert VideoMetadataResponse().title == ""