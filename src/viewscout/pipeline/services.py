"""Wires providers, cache and flows together from a Settings instance."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from viewscout.config import Settings
from viewscout.memory.keyword_cache import KeywordCache
from viewscout.pipeline.keyword_analysis import KeywordAnalyzer
from viewscout.pipeline.video_diagnostics import VideoDiagnostician
from viewscout.tools.llm import LLMClient
from viewscout.tools.naver import NaverKeywordClient
from viewscout.tools.supadata import TranscriptClient
from viewscout.tools.youtube import YouTubeClient


@dataclass
class AnalysisServices:
    config: Settings
    http: httpx.AsyncClient
    youtube: YouTubeClient
    naver: NaverKeywordClient
    transcripts: TranscriptClient
    llm: LLMClient
    cache: KeywordCache
    keywords: KeywordAnalyzer
    videos: VideoDiagnostician

    async def aclose(self) -> None:
        await self.http.aclose()


def build_services(config: Settings, http: httpx.AsyncClient | None = None) -> AnalysisServices:
    http = http or httpx.AsyncClient(timeout=config.http_timeout)
    youtube = YouTubeClient(config, http)
    naver = NaverKeywordClient(config, http)
    transcripts = TranscriptClient(config, http)
    llm = LLMClient(config)
    cache = KeywordCache(config.cache_file, ttl_seconds=config.cache_ttl_hours * 3600)
    keywords = KeywordAnalyzer(youtube, naver, cache)
    videos = VideoDiagnostician(youtube, transcripts, llm, keywords)
    return AnalysisServices(
        config=config,
        http=http,
        youtube=youtube,
        naver=naver,
        transcripts=transcripts,
        llm=llm,
        cache=cache,
        keywords=keywords,
        videos=videos,
    )
