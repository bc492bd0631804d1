from viewscout.pipeline.services import build_services


async def test_build_services_wires_shared_client(make_settings, mock_http, tmp_path):
    http = mock_http(lambda r: None)
    config = make_settings(cache_file=str(tmp_path / "cache.json"), cache_ttl_hours=2)
    services = build_services(config, http)

    assert services.http is http
    assert services.cache.ttl_seconds == 7200
    assert services.cache.path == tmp_path / "cache.json"
    assert not services.youtube.enabled
    assert not services.naver.enabled
    assert not services.transcripts.enabled
    assert not services.llm.enabled

    await services.aclose()
    assert http.is_closed


def test_provider_flags(make_settings):
    config = make_settings(
        youtube_api_key="yt",
        naver_ad_access_key="a",
        naver_ad_secret_key="s",
        supadata_api_key="sd",
    )
    assert config.youtube_enabled
    assert config.supadata_enabled
    # customer id still missing
    assert not config.naver_enabled
    assert not config.llm_enabled


def test_cors_origins_merge_setting(make_settings):
    from viewscout.main import cors_origins

    origins = cors_origins(make_settings(allowed_origins=" https://viewscout.app, ,http://localhost:3000"))
    assert origins == ["http://127.0.0.1:3000", "http://localhost:3000", "https://viewscout.app"]
