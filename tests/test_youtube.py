"""YouTube client against a mocked Data API."""

from datetime import datetime, timezone

import httpx
import pytest

from viewscout.models.result import Found, NotFound, ProviderError
from viewscout.tools.youtube import YouTubeClient, clean_trending_title, parse_duration


def _video_item(video_id: str, views: str = "1500", category: str = "28") -> dict:
    return {
        "id": video_id,
        "snippet": {
            "title": "아이폰 리뷰",
            "description": "",
            "thumbnails": {"medium": {"url": "https://img/m.jpg"}},
            "channelTitle": "테크채널",
            "channelId": "UC1",
            "publishedAt": "2024-03-01T00:00:00Z",
            "categoryId": category,
        },
        "contentDetails": {"duration": "PT12M30S"},
        "statistics": {"viewCount": views},
    }


@pytest.fixture
def youtube(make_settings, mock_http):
    def _make(handler, **overrides):
        config = make_settings(youtube_api_key="test-key", **overrides)
        return YouTubeClient(config, mock_http(handler))

    return _make


class TestParsing:
    @pytest.mark.parametrize(
        "duration,minutes",
        [("PT1H2M30S", 62.5), ("PT45S", 0.75), ("P1DT1M", 1441.0), ("PT10M", 10.0), ("", 0.0), ("bogus", 0.0)],
    )
    def test_parse_duration(self, duration, minutes):
        assert parse_duration(duration) == minutes

    def test_clean_trending_title(self):
        assert clean_trending_title("[MV] 아이유 - 좋은 날 (Official)") == "아이유"

    def test_clean_trending_title_cuts_at_separator(self):
        assert clean_trending_title("오늘의 날씨: 전국 비 소식") == "오늘의 날씨"


class TestSearch:
    async def test_search_videos(self, youtube):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(
                200,
                json={
                    "pageInfo": {"totalResults": 4321},
                    "items": [
                        {"id": {"videoId": "abc"}, "snippet": {"title": "t1", "channelId": "UC1"}},
                        {"id": {"channelId": "UC9"}, "snippet": {"title": "channel result"}},
                    ],
                },
            )

        result = await youtube(handler).search_videos("캠핑", 10, "viewCount")

        assert isinstance(result, Found)
        assert result.value.total_results == 4321
        assert [h.video_id for h in result.value.results] == ["abc"]
        assert seen["key"] == "test-key"
        assert seen["order"] == "viewCount"
        assert seen["maxResults"] == "10"

    async def test_null_ids_are_skipped(self, youtube):
        payload = {
            "pageInfo": None,
            "items": [
                {"id": None, "snippet": {"title": "broken"}},
                {"id": {"videoId": "abc"}, "snippet": {"title": "t1"}},
            ],
        }
        result = await youtube(lambda r: httpx.Response(200, json=payload)).search_videos("캠핑")

        assert isinstance(result, Found)
        assert [h.video_id for h in result.value.results] == ["abc"]
        assert result.value.total_results == 0

    async def test_null_snippet_is_provider_error(self, youtube):
        payload = {"items": [{"id": {"videoId": "abc"}, "snippet": None}]}
        result = await youtube(lambda r: httpx.Response(200, json=payload)).search_videos("캠핑")
        assert isinstance(result, ProviderError)

    async def test_http_error_is_provider_error(self, youtube):
        result = await youtube(lambda r: httpx.Response(403, json={"error": "quota"})).search_videos("캠핑")
        assert isinstance(result, ProviderError)
        assert result.provider == "youtube"
        assert result.unwrap_or("fallback") == "fallback"

    async def test_disabled_without_key(self, make_settings, mock_http):
        client = YouTubeClient(make_settings(), mock_http(lambda r: httpx.Response(500)))
        result = await client.search_videos("캠핑")
        assert isinstance(result, ProviderError)
        assert "YOUTUBE_API_KEY" in result.reason


class TestVideos:
    async def test_video_details(self, youtube):
        client = youtube(lambda r: httpx.Response(200, json={"items": [_video_item("vid00000001")]}))
        result = await client.get_video_details("vid00000001")

        assert isinstance(result, Found)
        video = result.value
        assert video.view_count == 1500
        assert video.duration_minutes == 12.5
        assert video.thumbnail_url == "https://img/m.jpg"
        assert video.category_id == "28"

    async def test_null_sections_fall_back_to_defaults(self, youtube):
        item = _video_item("vid00000001")
        item["contentDetails"] = None
        item["statistics"] = None
        item["snippet"]["thumbnails"] = None
        client = youtube(lambda r: httpx.Response(200, json={"items": [item]}))

        result = await client.get_video_details("vid00000001")

        assert isinstance(result, Found)
        assert result.value.duration == ""
        assert result.value.duration_minutes == 0.0
        assert result.value.view_count == 0
        assert result.value.thumbnail_url == ""
        assert result.value.title == "아이폰 리뷰"

    @pytest.mark.parametrize("item", [{"id": "vid00000001", "snippet": None}, "not-an-object"])
    async def test_malformed_item_is_provider_error(self, youtube, item):
        client = youtube(lambda r: httpx.Response(200, json={"items": [item]}))
        result = await client.get_video_details("vid00000001")
        assert isinstance(result, ProviderError)

    async def test_null_items_is_not_found(self, youtube):
        result = await youtube(lambda r: httpx.Response(200, json={"items": None})).get_video_details("x")
        assert isinstance(result, NotFound)

    async def test_unknown_video_is_not_found(self, youtube):
        result = await youtube(lambda r: httpx.Response(200, json={"items": []})).get_video_details("x")
        assert isinstance(result, NotFound)

    async def test_channels_are_batched(self, youtube):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.params["id"])
            return httpx.Response(
                200,
                json={
                    "items": [
                        {"id": "UC1", "statistics": {"subscriberCount": "1200", "videoCount": "30"}},
                        {"id": "UC2", "statistics": {"hiddenSubscriberCount": True}},
                    ]
                },
            )

        result = await youtube(handler).get_channels_details(["UC1", "UC2", "UC1", ""])

        assert calls == ["UC1,UC2"]
        assert result.value["UC1"].subscriber_count == 1200
        assert result.value["UC2"].subscriber_count == 0

    async def test_trending_titles(self, youtube):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["chart"] == "mostPopular"
            return httpx.Response(
                200, json={"items": [{"snippet": {"title": "[MV] 아이유 - 좋은 날"}}]}
            )

        result = await youtube(handler).fetch_trending_titles(5)
        assert result.value == ["아이유"]


class TestCounts:
    async def test_monthly_trend_is_oldest_first(self, youtube):
        def handler(request: httpx.Request) -> httpx.Response:
            month = int(request.url.params["publishedAfter"][5:7])
            return httpx.Response(200, json={"pageInfo": {"totalResults": month}})

        now = datetime(2024, 3, 15, tzinfo=timezone.utc)
        trend = await youtube(handler).fetch_monthly_trend("캠핑", months=6, now=now)
        assert trend == [10, 11, 12, 1, 2, 3]

    async def test_monthly_trend_counts_failures_as_zero(self, youtube):
        trend = await youtube(lambda r: httpx.Response(500)).fetch_monthly_trend("캠핑", months=3)
        assert trend == [0, 0, 0]

    async def test_last_7_days(self, youtube):
        def handler(request: httpx.Request) -> httpx.Response:
            day = int(request.url.params["publishedBefore"][8:10])
            return httpx.Response(200, json={"pageInfo": {"totalResults": day}})

        now = datetime(2024, 3, 15, 12, tzinfo=timezone.utc)
        daily = await youtube(handler).fetch_last_7_days_volume("캠핑", now=now)

        assert [d.day for d in daily] == ["6일 전", "5일 전", "4일 전", "3일 전", "2일 전", "어제", "오늘"]
        assert [d.value for d in daily] == [9, 10, 11, 12, 13, 14, 15]

    async def test_recent_count_window(self, youtube):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json={"pageInfo": {"totalResults": 77}})

        now = datetime(2024, 3, 31, tzinfo=timezone.utc)
        result = await youtube(handler).fetch_recent_count("캠핑", days=30, now=now)

        assert result.value == 77
        assert seen["publishedAfter"] == "2024-03-01T00:00:00Z"
        assert seen["publishedBefore"] == "2024-03-31T00:00:00Z"
