"""Redis 캐시 저장소 유닛 테스트 (Mock 사용, 실제 Redis 없음)"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from eco_fridge.core.exceptions import CacheConnectionException, CacheSerializationException
from eco_fridge.offline import RedisCacheStorage, RequestDescriptor, StoredResponse
from eco_fridge.offline.redis_store import deserialize_response, serialize_response

BASE = "http://fridge.test"


def make_client() -> MagicMock:
    client = MagicMock()
    client.zadd = AsyncMock(return_value=1)
    client.zrange = AsyncMock(return_value=[])
    client.hget = AsyncMock(return_value=None)
    client.hset = AsyncMock(return_value=1)
    client.hkeys = AsyncMock(return_value=[])
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


def make_pipeline(client: MagicMock, result=None) -> MagicMock:
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=result if result is not None else [1, 1])
    context = MagicMock()
    context.__aenter__.return_value = pipe
    context.__aexit__.return_value = False
    client.pipeline = MagicMock(return_value=context)
    return pipe


class TestSerialization:
    def test_serialize_consumes_body(self):
        response = StoredResponse(200, {"content-type": "image/png"}, b"\x89PNG", f"{BASE}/icon.png")
        raw = serialize_response(response)

        assert response.body_used
        restored = deserialize_response(raw)
        assert restored.status == 200
        assert restored.headers == {"content-type": "image/png"}
        assert restored.url == f"{BASE}/icon.png"
        assert restored.read() == b"\x89PNG"

    def test_serialize_uses_fallback_url(self):
        raw = serialize_response(StoredResponse(200, body=b"x"), fallback_url=f"{BASE}/")
        assert deserialize_response(raw).url == f"{BASE}/"

    @pytest.mark.parametrize("raw", ["not json", '{"headers": {}}', '{"status": "abc"}'])
    def test_deserialize_corrupt_entry(self, raw):
        with pytest.raises(CacheSerializationException):
            deserialize_response(raw)


class TestRedisCacheStorage:
    """세대 저장소"""

    @patch("eco_fridge.offline.redis_store.Redis")
    def test_default_client_from_settings(self, mock_redis):
        from eco_fridge.core.config import settings

        storage = RedisCacheStorage()
        mock_redis.from_url.assert_called_once()
        assert mock_redis.from_url.call_args.args[0] == settings.redis_url
        assert storage.prefix == settings.offline_cache_prefix

    def test_key_layout(self):
        storage = RedisCacheStorage(make_client(), prefix="test")
        assert storage.generations_key == "test:generations"
        assert storage.cache_key("v1") == "test:cache:v1"

    @pytest.mark.asyncio
    async def test_open_registers_generation(self):
        client = make_client()
        storage = RedisCacheStorage(client, prefix="test")

        cache = await storage.open("v1")

        client.zadd.assert_awaited_once()
        args, kwargs = client.zadd.call_args
        assert args[0] == "test:generations"
        assert "v1" in args[1]
        assert kwargs["nx"] is True
        assert cache.hash_key == "test:cache:v1"

    @pytest.mark.asyncio
    async def test_put_and_match(self):
        client = make_client()
        storage = RedisCacheStorage(client, prefix="test")
        request = RequestDescriptor.get("/", BASE)

        cache = await storage.open("v1")
        await cache.put(request, StoredResponse(200, {"content-type": "text/html"}, b"home"))

        hash_key, field, value = client.hset.call_args.args
        assert hash_key == "test:cache:v1"
        assert field == request.key

        client.zrange.return_value = ["v1"]
        client.hget.return_value = value
        response = await storage.match(request)
        assert response.read() == b"home"

    @pytest.mark.asyncio
    async def test_match_miss(self):
        client = make_client()
        client.zrange.return_value = ["v1", "v2"]
        storage = RedisCacheStorage(client, prefix="test")

        assert await storage.match(RequestDescriptor.get("/", BASE)) is None
        assert client.hget.await_count == 2

    @pytest.mark.asyncio
    async def test_keys_in_creation_order(self):
        client = make_client()
        client.zrange.return_value = ["v1", "v2"]
        storage = RedisCacheStorage(client, prefix="test")

        assert await storage.keys() == ["v1", "v2"]
        assert await storage.has("v2")
        client.zrange.assert_awaited_with("test:generations", 0, -1)

    @pytest.mark.asyncio
    async def test_delete_generation(self):
        client = make_client()
        pipe = make_pipeline(client, [1, 1])
        storage = RedisCacheStorage(client, prefix="test")

        assert await storage.delete("v1") is True
        pipe.zrem.assert_called_once_with("test:generations", "v1")
        pipe.delete.assert_called_once_with("test:cache:v1")

    @pytest.mark.asyncio
    async def test_delete_missing_generation(self):
        client = make_client()
        make_pipeline(client, [0, 0])
        storage = RedisCacheStorage(client, prefix="test")

        assert await storage.delete("v0") is False

    @pytest.mark.asyncio
    async def test_connection_errors_are_wrapped(self):
        client = make_client()
        client.zadd.side_effect = RedisConnectionError("refused")
        client.zrange.side_effect = RedisConnectionError("refused")
        storage = RedisCacheStorage(client, prefix="test")

        with pytest.raises(CacheConnectionException):
            await storage.open("v1")
        with pytest.raises(CacheConnectionException):
            await storage.keys()

    @pytest.mark.asyncio
    async def test_health_check(self):
        client = make_client()
        storage = RedisCacheStorage(client, prefix="test")
        assert await storage.health_check() is True

        client.ping.side_effect = RedisConnectionError("refused")
        assert await storage.health_check() is False

    @pytest.mark.asyncio
    async def test_close(self):
        client = make_client()
        await RedisCacheStorage(client, prefix="test").close()
        client.aclose.assert_awaited_once()
