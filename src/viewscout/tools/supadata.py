"""Supadata transcript API."""

from __future__ import annotations

import httpx
import structlog

from viewscout.config import Settings
from viewscout.models.result import Found, NotFound, ProviderError, ProviderResult

logger = structlog.get_logger()

PROVIDER = "supadata"


class TranscriptClient:
    def __init__(self, config: Settings, http: httpx.AsyncClient):
        self._config = config
        self._http = http

    @property
    def enabled(self) -> bool:
        return self._config.supadata_enabled

    async def get_transcript(self, video_id: str, lang: str = "ko") -> ProviderResult[str]:
        """Fetch the transcript for *video_id*, joining all segments with spaces."""
        if not self.enabled:
            logger.warning("supadata.skip", reason="SUPADATA_API_KEY not configured")
            return ProviderError(PROVIDER, "SUPADATA_API_KEY not configured")

        try:
            resp = await self._http.get(
                self._config.supadata_url,
                params={"videoId": video_id, "lang": lang},
                headers={"x-api-key": self._config.supadata_api_key},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("supadata.request_failed", video_id=video_id, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, list):
            return NotFound(f"transcript {video_id}")

        text = " ".join(str(seg.get("text", "")) for seg in content if isinstance(seg, dict)).strip()
        if not text:
            return NotFound(f"transcript {video_id}")

        logger.info("supadata.transcript_done", video_id=video_id, chars=len(text))
        return Found(text)
