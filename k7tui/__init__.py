"""Terminal interface and supporting pieces for uploading, browsing and following videos on a video service."""

__version__ = "0.1.0"
__all__ = ["__version__"]