"""Tests for the in-memory store and the shared create retry loop."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortener.exceptions import CodeSpaceExhaustedError, NotFoundError
from shortener.shortcode import ShortCodeGenerator
from shortener.store.memory import MemoryURLStore


class ScriptedGenerator(ShortCodeGenerator):
    """Generator returning a fixed sequence of candidates."""

    def __init__(self, codes):
        super().__init__(default_length=len(codes[0]))
        self.codes = list(codes)
        self.calls = 0

    def generate(self, original_url="", attempt=1) -> str:
        code = self.codes[self.calls]
        self.calls += 1
        return code


class TestCreateRetries:
    """Collision handling in create()."""

    async def test_collision_retries_with_new_candidate(self):
        store = MemoryURLStore(generator=ScriptedGenerator(["aaaaaaa", "aaaaaaa", "bbbbbbb"]))

        first = await store.create("https://example.com/1")
        second = await store.create("https://example.com/2")

        assert first == "aaaaaaa"
        assert second == "bbbbbbb"
        assert store.generator.calls == 3
        assert await store.resolve(first) == "https://example.com/1"
        assert await store.resolve(second) == "https://example.com/2"

    async def test_exhausted_retries_raise(self):
        store = MemoryURLStore(generator=ScriptedGenerator(["aaaaaaa"] * 4), max_attempts=3)
        await store.create("https://example.com/1")

        with pytest.raises(CodeSpaceExhaustedError) as exc_info:
            await store.create("https://example.com/2")

        assert exc_info.value.attempts == 3
        assert store.generator.calls == 4
        assert len(store) == 1

    async def test_tiny_alphabet_eventually_exhausts(self):
        generator = ShortCodeGenerator(default_length=1, alphabet="ab")
        # Enough attempts that the second code is always found before giving up
        store = MemoryURLStore(generator=generator, max_attempts=60)

        with pytest.raises(CodeSpaceExhaustedError):
            for i in range(100):
                await store.create(f"https://example.com/{i}")

        # Only two codes exist, and both are taken
        assert len(store) == 2
        assert {await store.resolve("a"), await store.resolve("b")} <= {
            f"https://example.com/{i}" for i in range(100)
        }

    async def test_exhaustion_does_not_corrupt_existing_records(self):
        generator = ShortCodeGenerator(default_length=1, alphabet="xy")
        store = MemoryURLStore(generator=generator, max_attempts=50)
        codes = [await store.create("https://example.com/x"), await store.create("https://example.com/y")]

        with pytest.raises(CodeSpaceExhaustedError):
            await store.create("https://example.com/z")

        assert sorted(codes) == ["x", "y"]
        assert await store.stats("x") == 0
        assert await store.stats("y") == 0

    def test_max_attempts_must_be_positive(self):
        with pytest.raises(ValueError):
            MemoryURLStore(max_attempts=0)

    async def test_reserved_candidate_is_retried(self):
        store = MemoryURLStore(generator=ScriptedGenerator(["api", "stats", "Api"]))

        code = await store.create("https://example.com/reserved")

        assert code == "Api"
        assert store.generator.calls == 3
        assert len(store) == 1
        with pytest.raises(NotFoundError):
            await store.resolve("api")

    def test_code_length_beyond_route_limit_rejected(self):
        with pytest.raises(ValueError, match="at most 32"):
            MemoryURLStore(generator=ShortCodeGenerator(default_length=40))

    async def test_hash_strategy_salts_each_attempt(self):
        generator = ShortCodeGenerator(strategy="hash")
        store = MemoryURLStore(generator=generator)
        url = "https://example.com/hashed"

        first = await store.create(url)
        second = await store.create(url)

        # The second create collides on the attempt-1 code and moves on
        assert first == generator.generate_from_url(url, salt="1")
        assert second == generator.generate_from_url(url, salt="2")
        assert await store.resolve(second) == url


class TestMemoryStoreThreads:
    """The store lock also holds when called from several threads."""

    def test_threaded_resolves_are_all_counted(self):
        store = MemoryURLStore()
        code = asyncio.run(store.create("https://example.com/threads"))

        def resolve_many(n):
            async def run():
                for _ in range(n):
                    await store.resolve(code)
            asyncio.run(run())

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(resolve_many, [125] * 8))

        assert asyncio.run(store.stats(code)) == 1000

    def test_threaded_creates_on_small_code_space_are_unique(self):
        # 16 possible codes, 12 creates racing for them
        store = MemoryURLStore(generator=ShortCodeGenerator(default_length=4, alphabet="ab"), max_attempts=500)

        def create(i):
            return asyncio.run(store.create(f"https://example.com/{i}"))

        with ThreadPoolExecutor(max_workers=6) as pool:
            codes = list(pool.map(create, range(12)))

        assert len(set(codes)) == 12
        assert len(store) == 12


class TestMemoryStoreRecords:
    """Record snapshots."""

    async def test_get_record_returns_snapshot(self, memory_store):
        code = await memory_store.create("https://example.com/snapshot")
        record = await memory_store.get_record(code)

        await memory_store.resolve(code)

        assert record.hit_count == 0
        assert (await memory_store.get_record(code)).hit_count == 1

    async def test_stores_are_isolated(self):
        first = MemoryURLStore()
        second = MemoryURLStore()
        code = await first.create("https://example.com/isolated")

        assert len(second) == 0
        assert await first.stats(code) == 0
