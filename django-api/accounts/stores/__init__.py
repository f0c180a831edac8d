from accounts.stores.django_store import DjangoDirectoryStore
from accounts.stores.interfaces import DirectoryStore

__all__ = ["DirectoryStore", "DjangoDirectoryStore"]
