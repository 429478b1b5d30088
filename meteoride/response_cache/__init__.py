"""Response cache backends."""

from .base import ResponseCache, decode_assessment, encode_assessment
from .keys import FALLBACK_BUCKET, derive_key
from .memory import InMemoryResponseCache
from .redis import RedisResponseCache

__all__ = [
    "ResponseCache",
    "InMemoryResponseCache",
    "RedisResponseCache",
    "FALLBACK_BUCKET",
    "derive_key",
    "decode_assessment",
    "encode_assessment",
]
