"""YouTube URL → video ID."""

from __future__ import annotations

import re

_VIDEO_ID_RE = re.compile(
    r"(?:youtu\.be/|/v/|/u/\w/|/embed/|/shorts/|watch\?v=|[?&]v=)([^#&?/\s]*)"
)
_VALID_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")


def extract_video_id(url: str) -> str | None:
    """Return the 11-character video ID, or ``None`` when *url* does not carry one.

    Accepts ``youtu.be/ID``, ``watch?v=ID``, ``&v=ID``, ``embed/ID``, ``v/ID``
    and ``shorts/ID`` forms.
    """
    if not url:
        return None
    match = _VIDEO_ID_RE.search(url.strip())
    if not match:
        return None
    candidate = match.group(1)
    return candidate if _VALID_ID.match(candidate) else None
