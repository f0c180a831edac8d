from events.stores.django_store import DjangoEventStore
from events.stores.interfaces import EventStore

__all__ = ["EventStore", "DjangoEventStore"]
