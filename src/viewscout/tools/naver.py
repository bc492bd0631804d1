"""Naver Search Ad keyword tool — monthly search volume (demand signal)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import re
import time
from dataclasses import dataclass, field

import httpx
import structlog

from viewscout.config import Settings
from viewscout.models.result import Found, NotFound, ProviderError, ProviderResult

logger = structlog.get_logger()

PROVIDER = "naver"
KEYWORD_TOOL_PATH = "/keywordstool"


@dataclass
class RelatedKeyword:
    keyword: str
    pc: int
    mobile: int


@dataclass
class KeywordVolume:
    total: int
    pc: int
    mobile: int
    related: list[RelatedKeyword] = field(default_factory=list)


def generate_signature(secret_key: str, timestamp: str, method: str, path: str) -> str:
    """Base64 HMAC-SHA256 over ``{timestamp}.{method}.{path}``."""
    message = f"{timestamp}.{method}.{path}".encode("utf-8")
    digest = hmac.new(secret_key.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def parse_count(value) -> int:
    """Naver reports tiny volumes as the string ``"< 10"``; treat those as 0."""
    if isinstance(value, (int, float)):
        return max(0, int(value))
    text = str(value or "").strip()
    if text.startswith("<"):
        return 0
    try:
        return max(0, int(float(text.replace(",", ""))))
    except ValueError:
        return 0


def _normalize(keyword: str) -> str:
    return re.sub(r"\s+", "", keyword).upper()


class NaverKeywordClient:
    def __init__(self, config: Settings, http: httpx.AsyncClient):
        self._config = config
        self._http = http

    @property
    def enabled(self) -> bool:
        return self._config.naver_enabled

    async def get_keyword_volume(self, keyword: str) -> ProviderResult[KeywordVolume]:
        """Monthly PC + mobile search volume for *keyword*, plus related keywords."""
        if not self.enabled:
            logger.warning("naver.skip", reason="NAVER_AD_* keys not configured")
            return ProviderError(PROVIDER, "NAVER_AD_* keys not configured")

        timestamp = str(int(time.time() * 1000))
        headers = {
            "X-Timestamp": timestamp,
            "X-API-KEY": self._config.naver_ad_access_key,
            "X-Customer": self._config.naver_ad_customer_id,
            "X-Signature": generate_signature(
                self._config.naver_ad_secret_key, timestamp, "GET", KEYWORD_TOOL_PATH
            ),
        }
        # The keyword tool rejects hint keywords containing spaces
        hint = re.sub(r"\s+", "", keyword)

        try:
            resp = await self._http.get(
                f"{self._config.naver_ad_base_url}{KEYWORD_TOOL_PATH}",
                params={"hintKeywords": hint, "showDetail": 1},
                headers=headers,
            )
            resp.raise_for_status()
            keyword_list = [k for k in resp.json().get("keywordList") or [] if isinstance(k, dict)]
        except (httpx.HTTPError, ValueError, AttributeError, TypeError) as exc:
            logger.warning("naver.request_failed", keyword=keyword, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

        if not keyword_list:
            return NotFound(f"keyword {keyword}")

        wanted = {_normalize(keyword), keyword.upper()}
        target = next(
            (k for k in keyword_list if str(k.get("relKeyword", "")).upper() in wanted),
            keyword_list[0],
        )

        pc = parse_count(target.get("monthlyPcQcCnt"))
        mobile = parse_count(target.get("monthlyMobileQcCnt"))
        related = [
            RelatedKeyword(
                keyword=str(k.get("relKeyword", "")),
                pc=parse_count(k.get("monthlyPcQcCnt")),
                mobile=parse_count(k.get("monthlyMobileQcCnt")),
            )
            for k in keyword_list
            if k is not target and k.get("relKeyword")
        ]

        logger.info("naver.volume_done", keyword=keyword, total=pc + mobile, related=len(related))
        return Found(KeywordVolume(total=pc + mobile, pc=pc, mobile=mobile, related=related))
