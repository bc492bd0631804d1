"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # YouTube Data API
    youtube_api_key: str = ""
    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"

    # Naver Search Ad (keyword tool)
    naver_ad_access_key: str = ""
    naver_ad_secret_key: str = ""
    naver_ad_customer_id: str = ""
    naver_ad_base_url: str = "https://api.searchad.naver.com"

    # Transcripts
    supadata_api_key: str = ""
    supadata_url: str = "https://api.supadata.ai/v1/youtube/transcript"

    # LLM
    openai_api_key: str = ""
    reasoning_model: str = "gpt-4o"

    # Trends
    google_trends_rss_url: str = "https://trends.google.co.kr/trending/rss?geo=KR&hl=ko"

    # Cache
    cache_file: str = "./.cache/keyword-data.json"
    cache_ttl_hours: float = 24.0

    # HTTP
    http_timeout: float = 30.0

    # CORS (comma separated)
    allowed_origins: str = ""

    @property
    def youtube_enabled(self) -> bool:
        return bool(self.youtube_api_key)

    @property
    def naver_enabled(self) -> bool:
        return bool(
            self.naver_ad_access_key and self.naver_ad_secret_key and self.naver_ad_customer_id
        )

    @property
    def supadata_enabled(self) -> bool:
        return bool(self.supadata_api_key)

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


settings = Settings()
