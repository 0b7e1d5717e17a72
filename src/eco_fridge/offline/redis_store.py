"""Redis 캐시 저장소 - 오프라인 캐시 세대의 영속 구현

키 구조:
- {prefix}:generations      ZSET (member=세대 이름, score=생성 시각)
- {prefix}:cache:{세대 이름}  HASH (field=요청 키, value=응답 JSON)
"""

from __future__ import annotations

import base64
import json
import time
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from eco_fridge.core.config import settings
from eco_fridge.core.logging import logger
from eco_fridge.core.exceptions import (
    CacheConnectionException,
    CacheSerializationException,
)

from .request import RequestDescriptor
from .response import StoredResponse
from .store import Cache, CacheStorage


def serialize_response(response: StoredResponse, fallback_url: str = "") -> str:
    """응답을 JSON 문자열로 직렬화 (본문 소비)"""
    try:
        payload = {
            "status": response.status,
            "headers": response.headers,
            "body": base64.b64encode(response.read()).decode("ascii"),
            "url": response.url or fallback_url,
        }
        return json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise CacheSerializationException("serialize", str(e))


def deserialize_response(raw: str) -> StoredResponse:
    try:
        data: dict[str, Any] = json.loads(raw)
        return StoredResponse(
            status=int(data["status"]),
            headers=data.get("headers") or {},
            body=base64.b64decode(data.get("body") or ""),
            url=data.get("url") or "",
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise CacheSerializationException("deserialize", str(e))


class RedisCache(Cache):
    """Redis HASH 하나로 표현되는 캐시 세대"""

    def __init__(self, client: Redis, hash_key: str):
        self.client = client
        self.hash_key = hash_key

    async def match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        try:
            raw = await self.client.hget(self.hash_key, request.key)
        except RedisError as e:
            logger.error(f"Offline cache read error: {e}")
            raise CacheConnectionException(str(e), details={"key": request.key})
        if raw is None:
            return None
        return deserialize_response(raw)

    async def put(self, request: RequestDescriptor, response: StoredResponse) -> None:
        value = serialize_response(response, fallback_url=request.url)
        try:
            await self.client.hset(self.hash_key, request.key, value)
        except RedisError as e:
            logger.error(f"Offline cache write error: {e}")
            raise CacheConnectionException(str(e), details={"key": request.key})
        logger.debug(f"Offline cache put: {self.hash_key} <- {request.key}")

    async def keys(self) -> list[str]:
        try:
            return list(await self.client.hkeys(self.hash_key))
        except RedisError as e:
            raise CacheConnectionException(str(e))


class RedisCacheStorage(CacheStorage):
    """Redis 기반 세대 저장소"""

    def __init__(self, client: Optional[Redis] = None, prefix: Optional[str] = None):
        """
        Args:
            client: redis.asyncio 클라이언트 (없으면 settings.redis_url로 생성)
            prefix: 키 네임스페이스 (기본: settings.offline_cache_prefix)
        """
        if client is None:
            client = Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        self.client = client
        self.prefix = prefix or settings.offline_cache_prefix

    @property
    def generations_key(self) -> str:
        return f"{self.prefix}:generations"

    def cache_key(self, name: str) -> str:
        return f"{self.prefix}:cache:{name}"

    async def open(self, name: str) -> Cache:
        try:
            await self.client.zadd(self.generations_key, {name: time.time()}, nx=True)
        except RedisError as e:
            logger.error(f"Failed to open cache generation '{name}': {e}")
            raise CacheConnectionException(str(e), details={"generation": name})
        return RedisCache(self.client, self.cache_key(name))

    async def keys(self) -> list[str]:
        try:
            return list(await self.client.zrange(self.generations_key, 0, -1))
        except RedisError as e:
            raise CacheConnectionException(str(e))

    async def delete(self, name: str) -> bool:
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.zrem(self.generations_key, name)
                pipe.delete(self.cache_key(name))
                removed, _ = await pipe.execute()
        except RedisError as e:
            logger.error(f"Failed to delete cache generation '{name}': {e}")
            raise CacheConnectionException(str(e), details={"generation": name})
        logger.info(f"Offline cache generation deleted: {name}")
        return bool(removed)

    async def match(self, request: RequestDescriptor) -> Optional[StoredResponse]:
        for name in await self.keys():
            response = await RedisCache(self.client, self.cache_key(name)).match(request)
            if response is not None:
                return response
        return None

    async def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            await self.client.ping()
            return True
        except Exception:
            return False

    async def close(self) -> None:
        await self.client.aclose()
