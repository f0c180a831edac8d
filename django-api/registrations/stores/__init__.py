from registrations.stores.django_store import DjangoRegistrationStore
from registrations.stores.interfaces import RegistrationStore

__all__ = ["DjangoRegistrationStore", "RegistrationStore"]
