"""
Caching utilities for expensive aggregate queries.

Cached results are keyed by a per-prefix generation counter; bumping the
generation invalidates every entry of that prefix at once, which works the
same on Redis and on the in-memory backend.
"""
from django.core.cache import cache
from functools import wraps
import hashlib
import logging

logger = logging.getLogger(__name__)

REPORTS_CACHE_TTL = 600  # 10 minutes
REPORTS_CACHE_PREFIX = 'reports'


def _generation_key(prefix):
    return f"{prefix}:generation"


def get_generation(prefix):
    """Current generation number for a cache prefix"""
    generation = cache.get(_generation_key(prefix))
    if generation is None:
        generation = 1
        cache.set(_generation_key(prefix), generation, None)
    return generation


def bump_generation(prefix):
    """Invalidate every cached entry under prefix"""
    key = _generation_key(prefix)
    try:
        cache.incr(key)
    except ValueError:
        # Key missing or evicted
        cache.set(key, 2, None)


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{get_generation(prefix)}:{key_hash}"


def cached_query(cache_ttl=60, key_prefix="query"):
    """
    Decorator to cache expensive queries

    Usage:
        @cached_query(cache_ttl=120, key_prefix="reports")
        def build_report(start_date, end_date, category):
            return data
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = make_cache_key(key_prefix, *args, **kwargs)

            cached_data = cache.get(cache_key)
            if cached_data is not None:
                logger.debug(f"Cache HIT for {key_prefix}: {cache_key}")
                return cached_data

            logger.debug(f"Cache MISS for {key_prefix}: {cache_key}")
            result = func(*args, **kwargs)
            cache.set(cache_key, result, cache_ttl)
            return result
        return wrapper
    return decorator


def invalidate_reports_cache():
    """Drop every cached report"""
    try:
        bump_generation(REPORTS_CACHE_PREFIX)
        logger.info("Invalidated reports cache")
    except Exception as e:
        logger.warning(f"Error invalidating reports cache: {e}")
