import unittest
from unittest.mock import patch

import redis

from meteoride import cache_manager
from meteoride.config import settings
from meteoride.response_cache import InMemoryResponseCache, RedisResponseCache


class PingableRedis:
    def __init__(self, fail=False):
        self.fail = fail

    def ping(self):
        if self.fail:
            raise redis.exceptions.ConnectionError("connection refused")
        return True


class TestCacheManager(unittest.TestCase):
    def setUp(self):
        self._orig_url = settings.redis_url
        self._orig_cache = cache_manager._cache

    def tearDown(self):
        settings.redis_url = self._orig_url
        cache_manager._cache = self._orig_cache

    def test_no_url_uses_in_memory(self):
        settings.redis_url = None
        self.assertIsInstance(cache_manager._init_cache(), InMemoryResponseCache)

    def test_reachable_redis_is_used(self):
        settings.redis_url = "redis://:secret@cache:6379/0"
        with patch.object(cache_manager.redis.Redis, "from_url", return_value=PingableRedis()) as from_url:
            cache = cache_manager._init_cache()
        from_url.assert_called_once_with("redis://:secret@cache:6379/0")
        self.assertIsInstance(cache, RedisResponseCache)
        self.assertEqual(cache.ttl, settings.cache_ttl_seconds)
        self.assertEqual(cache.precision, settings.geohash_precision)

    def test_unreachable_redis_falls_back(self):
        settings.redis_url = "redis://cache:6379/0"
        with patch.object(cache_manager.redis.Redis, "from_url", return_value=PingableRedis(fail=True)):
            cache = cache_manager._init_cache()
        self.assertIsInstance(cache, InMemoryResponseCache)

    def test_override_for_tests(self):
        cache = cache_manager.use_in_memory_cache_for_tests(ttl_seconds=5, geohash_precision=4)
        self.assertIs(cache_manager.get_cache(), cache)
        self.assertEqual(cache.precision, 4)


if __name__ == "__main__":
    unittest.main()
