from scheduling.stores.django_store import DjangoAuditSink, DjangoBatchStore, DjangoVenueStore
from scheduling.stores.interfaces import AuditSink, BatchStore, VenueStore
from scheduling.stores.memory_store import InMemoryScheduleStore

__all__ = [
    "AuditSink",
    "BatchStore",
    "VenueStore",
    "DjangoAuditSink",
    "DjangoBatchStore",
    "DjangoVenueStore",
    "InMemoryScheduleStore",
]
