"""Streaming video uploads."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from k7tui.models import (
    RepoServiceClient,
    UploadRequest,
    VideoChunk,
    VideoMetadata,
    VideoMetadataResponse,
)

CHUNK_SIZE = 64 * 1024


def iter_upload_requests(
    file_path: str | Path,
    title: str,
    description: str,
    user_id: str,
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[UploadRequest]:
    """Yield the metadata message, then the file's content in chunks.

    The file is opened only after the metadata has been yielded, so a
    missing file raises once the stream has started.
    """
    yield VideoMetadata(
        user_id=user_id,
        title=title,
        description=description,
        file_name=str(file_path),
        file_size=0,
    )
    with open(file_path, "rb") as handle:
        while data := handle.read(chunk_size):
            yield VideoChunk(data=data, chunk_number=1)


def upload_video(
    client: RepoServiceClient,
    file_path: str | Path,
    title: str,
    description: str,
    user_id: str,
) -> VideoMetadataResponse:
    """Upload a file through the client and return the server's reply."""
    return client.upload_video(iter_upload_requests(file_path, title, description, user_id))