"""User-facing analysis errors."""


class AnalysisError(Exception):
    """Base class for errors surfaced to API callers."""


class InvalidInputError(AnalysisError, ValueError):
    """Raised before any provider call when the request itself is unusable."""


class VideoNotFoundError(AnalysisError):
    """Raised when YouTube reports no video for a well-formed ID."""

    def __init__(self, video_id: str):
        super().__init__(f"Video {video_id} not found")
        self.video_id = video_id
