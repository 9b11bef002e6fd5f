import pytest

from k7tui.models import VideoChunk, VideoMetadata, VideoMetadataResponse
from k7tui.upload import CHUNK_SIZE, iter_upload_requests, upload_video


class StreamClient:
    def __init__(self):
        self.received = []

    def upload_video(self, requests):
        for request in requests:
            self.received.append(request)
        return VideoMetadataResponse(id="v-new", title="Uploaded Video")


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(bytes(range(256)) * 1000)
    return path


def test_metadata_comes_first(video_file):
    requests = list(iter_upload_requests(video_file, "T", "D", "u1"))
    assert requests[0] == VideoMetadata(
        user_id="u1", title="T", description="D", file_name=str(video_file), file_size=0
    )
    assert all(isinstance(item, VideoChunk) for item in requests[1:])


def test_chunks_reassemble_file(video_file):
    requests = list(iter_upload_requests(video_file, "T", "D", "u1"))
    data = b"".join(chunk.data for chunk in requests[1:])
    assert data == video_file.read_bytes()
    assert all(len(chunk.data) <= CHUNK_SIZE for chunk in requests[1:])
    assert {chunk.chunk_number for chunk in requests[1:]} == {1}


def test_custom_chunk_size(video_file):
    chunks = list(iter_upload_requests(video_file, "T", "D", "u1", chunk_size=1000))[1:]
    assert len(chunks) == 256
    assert all(len(chunk.data) == 1000 for chunk in chunks)


def test_empty_file_sends_only_metadata(tmp_path):
    path = tmp_path / "empty.mp4"
    path.write_bytes(b"")
    requests = list(iter_upload_requests(path, "T", "", "u1"))
    assert len(requests) == 1
    assert requests[0].title == "T"


def test_missing_file_fails_after_metadata(tmp_path):
    stream = iter_upload_requests(tmp_path / "absent.mp4", "T", "D", "u1")
    first = next(stream)
    assert first.title == "T"
    with pytest.raises(FileNotFoundError):
        next(stream)


def test_upload_video_streams_through_client(video_file):
    client = StreamClient()
    result = upload_video(client, video_file, "T", "D", "u1")
    assert result.id == "v-new"
    assert client.received[0].user_id == "u1"
    assert b"".join(c.data for c in client.received[1:]) == video_file.read_bytes()


def test_upload_video_missing_file_raises(tmp_path):
    client = StreamClient()
    with pytest.raises(FileNotFoundError):
        upload_video(client, tmp_path / "absent.mp4", "T", "D", "u1")
    assert len(client.received) == 1