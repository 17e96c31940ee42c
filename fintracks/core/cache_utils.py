"""
Short-TTL read cache for list and dashboard queries
Entries live in the Django cache (Redis in production) as
{data, fetched_at, ttl}. Writes do not invalidate entries by themselves;
callers and signal receivers drop the keys they know to be stale.
"""
from django.conf import settings
from django.core.cache import cache
import hashlib
import json
import logging
import time

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
QUERY_CACHE_TTL = getattr(settings, 'QUERY_CACHE_TTL', 300)  # 5 minutes
DASHBOARD_CACHE_TTL = getattr(settings, 'DASHBOARD_CACHE_TTL', 120)  # 2 minutes


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def build_query_key(table, select='*', filters=None, order=None, limit=None):
    """Serialize a query description into a stable cache key"""
    description = {
        'table': table,
        'select': select,
        'filters': filters or {},
        'order': order,
        'limit': limit,
    }
    return json.dumps(description, sort_keys=True, default=str)


def apply_filters(queryset, filters):
    """
    Translate a filter mapping into ORM lookups.

    - list/tuple value  -> ``field__in``
    - value with ``%``  -> ``field__icontains`` (wildcards stripped)
    - ``gte.<value>``   -> ``field__gte``
    - ``lte.<value>``   -> ``field__lte``
    - anything else     -> exact match
    Empty values (None, '') are ignored.
    """
    for field, value in (filters or {}).items():
        if value is None or value == '':
            continue
        if isinstance(value, (list, tuple)):
            queryset = queryset.filter(**{f'{field}__in': list(value)})
        elif isinstance(value, str) and '%' in value:
            queryset = queryset.filter(**{f'{field}__icontains': value.replace('%', '')})
        elif isinstance(value, str) and value.startswith('gte.'):
            queryset = queryset.filter(**{f'{field}__gte': value[4:]})
        elif isinstance(value, str) and value.startswith('lte.'):
            queryset = queryset.filter(**{f'{field}__lte': value[4:]})
        else:
            queryset = queryset.filter(**{field: value})
    return queryset


class QueryCache:
    """
    Key -> {data, fetched_at, ttl} with freshness decided by ``clock``.

    A read within the entry's TTL returns the stored data without calling
    the fetcher; otherwise the fetcher runs and its result overwrites the
    entry.
    """

    def __init__(self, ttl=None, clock=None, prefix='query', backend=None):
        self.ttl = QUERY_CACHE_TTL if ttl is None else ttl
        self.clock = clock or time.time
        self.prefix = prefix
        self.backend = backend or cache
        self._keys = set()

    def storage_key(self, key):
        return make_cache_key(self.prefix, key)

    def get_entry(self, key):
        return self.backend.get(self.storage_key(key))

    def get_or_fetch(self, key, fetcher, ttl=None):
        ttl = self.ttl if ttl is None else ttl
        storage_key = self.storage_key(key)
        now = self.clock()

        entry = self.backend.get(storage_key)
        if entry is not None and now - entry['fetched_at'] < entry['ttl']:
            logger.debug(f"Cache HIT for {self.prefix}: {storage_key}")
            return entry['data']

        logger.debug(f"Cache MISS for {self.prefix}: {storage_key}")
        data = fetcher()
        self.backend.set(storage_key, {'data': data, 'fetched_at': now, 'ttl': ttl}, max(int(ttl), 1))
        self._keys.add(storage_key)
        return data

    def invalidate(self, key):
        storage_key = self.storage_key(key)
        self.backend.delete(storage_key)
        self._keys.discard(storage_key)
        logger.debug(f"Invalidated {self.prefix} cache key: {storage_key}")

    def clear(self):
        if self._keys:
            self.backend.delete_many(list(self._keys))
            logger.info(f"Cleared {len(self._keys)} {self.prefix} cache entries")
        self._keys.clear()


query_cache = QueryCache()
dashboard_cache = QueryCache(ttl=DASHBOARD_CACHE_TTL, prefix='dashboard')


def invalidate_cache_pattern(pattern):
    """
    Invalidate all cache keys matching a pattern
    Note: This requires Redis with SCAN command support
    """
    try:
        from django_redis import get_redis_connection
        redis_conn = get_redis_connection("default")

        keys = []
        cursor = 0
        while True:
            cursor, partial_keys = redis_conn.scan(cursor, match=f"*{pattern}*", count=100)
            keys.extend(partial_keys)
            if cursor == 0:
                break

        if keys:
            redis_conn.delete(*keys)
            logger.info(f"Invalidated {len(keys)} cache keys matching pattern: {pattern}")
    except Exception as e:
        logger.warning(f"Could not invalidate cache pattern {pattern}: {str(e)}")


def invalidate_dashboard_cache():
    """Invalidate dashboard metrics cache"""
    dashboard_cache.clear()
    invalidate_cache_pattern("dashboard")
    logger.info("Invalidated dashboard cache")
