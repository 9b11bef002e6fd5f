from datetime import datetime

from k7tui.demo import (
    MockRepoServiceClient,
    demo_notifications,
    demo_user,
    demo_videos,
)
from k7tui.models import VideoChunk, VideoMetadata, VideoMetadataResponse

NOW = datetime(2024, 1, 2, 3, 4, 5)


def fixed_clock():
    return NOW


def _recording_stream(consumed):
    for item in (VideoMetadata("u", "t", "d", "f"), VideoChunk(b"x")):
        consumed.append(item)
        yield item


def test_demo_user():
    user = demo_user(NOW)
    assert user.id == "demo-user-123"
    assert user.username == "demo_user"
    assert user.password == ""
    assert user.created_at == "2024-01-02 03:04:05"


def test_demo_videos_ids_and_order():
    videos = demo_videos(NOW)
    assert [v.id for v in videos] == ["video-1", "video-2", "video-3"]
    assert all(v.user_id == "demo-user-123" for v in videos)
    created = [v.created_at for v in videos]
    assert created == sorted(created)
    assert videos[0].created_at == "2024-01-02 01:04:05"


def test_demo_notifications():
    notes = demo_notifications(NOW)
    assert [n.id for n in notes] == ["notif-1", "notif-2", "notif-3"]
    assert [n.type for n in notes] == ["upload", "system", "upload"]
    assert notes[1].message == "Welcome to CodeK7! Your account is ready."
    assert notes[2].time == "02:34:05"


def test_mock_create_user():
    client = MockRepoServiceClient(clock=fixed_clock)
    user = client.create_user("carol", "carol@example.com")
    assert user.username == "carol"
    assert user.id == f"user-{int(NOW.timestamp())}"
    assert user.created_at == demo_user(NOW).created_at


def test_mock_get_user_accepts_anything():
    client = MockRepoServiceClient(clock=fixed_clock)
    user = client.get_user("dave", "password")
    assert user.id == "demo-user-123"
    assert user.username == "dave"


def test_mock_upload_drains_stream():
    consumed = []
    result = MockRepoServiceClient(clock=fixed_clock).upload_video(
        _recording_stream(consumed)
    )
    assert len(consumed) == 2
    assert result.title == "Uploaded Video"
    assert result.id == f"video-{int(NOW.timestamp())}"


def test_mock_user_videos_use_requested_owner():
    videos = MockRepoServiceClient(clock=fixed_clock).get_user_videos("someone")
    assert [v.id for v in videos] == ["video-1", "video-2"]
    assert {v.user_id for v in videos} == {"someone"}
    assert videos[0].title == demo_videos(NOW)[0].title


def test_mock_other_calls():
    client = MockRepoServiceClient(clock=fixed_clock)
    assert client.get_last3_user_videos("u") == []
    assert client.get_video_by_id("v") == VideoMetadataResponse()
    assert client.download_video("v") is None
    assert client.remove_video("v") is None