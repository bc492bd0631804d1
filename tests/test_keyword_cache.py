import asyncio
import json

from viewscout.memory.keyword_cache import KeywordCache


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


async def test_roundtrip(tmp_path):
    cache = KeywordCache(tmp_path / "cache.json", clock=FakeClock())
    await cache.set("캠핑", {"search_volume": 1200})
    assert await cache.get("캠핑") == {"search_volume": 1200}


async def test_missing_file_is_a_miss(tmp_path):
    cache = KeywordCache(tmp_path / "nope" / "cache.json")
    assert await cache.get("캠핑") is None


async def test_entries_expire_after_ttl(tmp_path):
    clock = FakeClock()
    cache = KeywordCache(tmp_path / "cache.json", ttl_seconds=60, clock=clock)
    await cache.set("캠핑", {"v": 1})

    clock.now += 60
    assert await cache.get("캠핑") == {"v": 1}

    clock.now += 1
    assert await cache.get("캠핑") is None


async def test_set_keeps_other_keys_and_overwrites_same_key(tmp_path):
    path = tmp_path / "cache.json"
    cache = KeywordCache(path, clock=FakeClock())
    await cache.set("a", {"v": 1})
    await cache.set("b", {"v": 2})
    await cache.set("a", {"v": 3})

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert set(stored) == {"a", "b"}
    assert stored["a"]["payload"] == {"v": 3}
    assert stored["a"]["timestamp"] == 1_000.0


async def test_corrupt_file_is_a_miss(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    cache = KeywordCache(path)
    assert await cache.get("a") is None


async def test_corrupt_file_is_replaced_on_write(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    cache = KeywordCache(path, clock=FakeClock())
    await cache.set("a", {"v": 1})
    assert await cache.get("a") == {"v": 1}


async def test_bad_timestamp_is_a_miss(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text(json.dumps({"a": {"timestamp": "soon", "payload": 1}}), encoding="utf-8")
    assert await KeywordCache(path).get("a") is None


async def test_write_failure_does_not_raise(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")
    cache = KeywordCache(blocker / "cache.json")
    await cache.set("a", {"v": 1})
    assert await cache.get("a") is None


async def test_concurrent_writes_keep_every_key(tmp_path):
    path = tmp_path / "cache.json"
    cache = KeywordCache(path, clock=FakeClock())
    await asyncio.gather(*[cache.set(f"k{i}", {"v": i}) for i in range(40)])

    for i in range(40):
        assert await cache.get(f"k{i}") == {"v": i}
    assert list(tmp_path.glob("*.tmp")) == []


async def test_reads_during_writes_never_see_a_partial_file(tmp_path):
    cache = KeywordCache(tmp_path / "cache.json", clock=FakeClock())
    await cache.set("stable", {"v": 0})

    writes = [cache.set(f"k{i}", {"v": i}) for i in range(20)]
    reads = [cache.get("stable") for _ in range(20)]
    results = await asyncio.gather(*writes, *reads)

    assert results[20:] == [{"v": 0}] * 20
