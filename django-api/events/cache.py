"""Cache keys for the event catalog."""

from django.conf import settings
from django.core.cache import cache

EVENT_LIST_KEY = "events:list"


def event_detail_key(event_id: str) -> str:
    return f"events:{str(event_id).lower()}"


def cache_timeout() -> int:
    return getattr(settings, "EVENT_CACHE_TIMEOUT", 300)


def invalidate_event(event_id: str) -> None:
    cache.delete_many([EVENT_LIST_KEY, event_detail_key(event_id)])
