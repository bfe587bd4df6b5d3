# bloodlink/store.py
"""
Record store used by the services.

Services never touch the ORM directly for the records the rules core
works on: they read entities from a store, hand them to ``algorithms``
and save the copies that come back. ``DjangoRecordStore`` is the
production backend, ``InMemoryRecordStore`` keeps everything in lists.
"""
import contextlib
import copy
import itertools
import logging
from types import SimpleNamespace

from django.db import transaction

from algorithms.exceptions import UnknownCollection

USERS = 'users'
DONORS = 'donors'
RECEIVERS = 'receivers'
ORGANIZATIONS = 'organizations'
BLOOD_REQUESTS = 'blood_requests'
DONATIONS = 'donations'
INVENTORY_ITEMS = 'inventory_items'
VERIFICATION_REQUESTS = 'verification_requests'

COLLECTIONS = (
    USERS,
    DONORS,
    RECEIVERS,
    ORGANIZATIONS,
    BLOOD_REQUESTS,
    DONATIONS,
    INVENTORY_ITEMS,
    VERIFICATION_REQUESTS,
)

logger = logging.getLogger(__name__)


def _matches(attribute, value):
    if attribute == value:
        return True
    return attribute is not None and getattr(attribute, 'id', None) == value


class RecordStore:
    """Abstract record store: collections of records keyed by ``id``"""

    def get_all(self, collection):
        raise NotImplementedError

    def get_by_id(self, collection, record_id):
        raise NotImplementedError

    def save(self, collection, record):
        """Insert the record, or replace the stored record with the same id"""
        raise NotImplementedError

    def query_by_field(self, collection, field, value):
        raise NotImplementedError

    def new_record(self, collection, **fields):
        """Build an unsaved record for ``collection``"""
        raise NotImplementedError

    def atomic(self):
        """Context manager grouping the saves of one operation"""
        return contextlib.nullcontext()

    def _check(self, collection):
        if collection not in COLLECTIONS:
            raise UnknownCollection(collection)


class InMemoryRecordStore(RecordStore):
    """
    Store keeping records in per-collection lists.

    Records without an id get the next integer id on first save. Lookups
    match on attribute values, so any object with the entity's fields can
    be stored. A reference field matches either the referenced record or
    its id.
    """

    def __init__(self, initial=None):
        self._records = {collection: [] for collection in COLLECTIONS}
        self._ids = itertools.count(1)
        for collection, records in (initial or {}).items():
            for record in records:
                self.save(collection, record)

    def get_all(self, collection):
        self._check(collection)
        return list(self._records[collection])

    def get_by_id(self, collection, record_id):
        self._check(collection)
        for record in self._records[collection]:
            if record.id == record_id:
                return record
        return None

    def save(self, collection, record):
        self._check(collection)
        records = self._records[collection]
        if getattr(record, 'id', None) is None:
            record.id = next(self._ids)
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return record
        records.append(record)
        return record

    def query_by_field(self, collection, field, value):
        self._check(collection)
        return [r for r in self._records[collection] if _matches(getattr(r, field, None), value)]

    def new_record(self, collection, **fields):
        self._check(collection)
        return SimpleNamespace(id=None, **fields)

    @contextlib.contextmanager
    def atomic(self):
        """Roll every collection back if the block raises"""
        snapshot = {name: copy.copy(records) for name, records in self._records.items()}
        try:
            yield
        except Exception:
            self._records = snapshot
            raise


class DjangoRecordStore(RecordStore):
    """Record store backed by the Django ORM"""

    # Profile-level names that live on the user row
    FIELD_ALIASES = {
        DONORS: {'email': 'user__email', 'city': 'user__city', 'name': 'user__name'},
        RECEIVERS: {'email': 'user__email', 'city': 'user__city', 'name': 'user__name'},
        ORGANIZATIONS: {'email': 'user__email', 'city': 'user__city', 'name': 'user__name'},
    }

    def _model(self, collection):
        self._check(collection)
        # Imported lazily so the store module can load before the app registry
        from django.contrib.auth import get_user_model
        from donors.models import DonationRecord, DonorProfile
        from organizations.models import InventoryItem, OrganizationProfile
        from receivers.models import BloodRequest, ReceiverProfile, VerificationRequest

        return {
            USERS: get_user_model(),
            DONORS: DonorProfile,
            RECEIVERS: ReceiverProfile,
            ORGANIZATIONS: OrganizationProfile,
            BLOOD_REQUESTS: BloodRequest,
            DONATIONS: DonationRecord,
            INVENTORY_ITEMS: InventoryItem,
            VERIFICATION_REQUESTS: VerificationRequest,
        }[collection]

    def _queryset(self, collection):
        model = self._model(collection)
        queryset = model.objects.all()
        if collection in self.FIELD_ALIASES:
            queryset = queryset.select_related('user')
        return queryset

    def get_all(self, collection):
        return list(self._queryset(collection))

    def get_by_id(self, collection, record_id):
        return self._queryset(collection).filter(pk=record_id).first()

    def save(self, collection, record):
        self._check(collection)
        record.save()
        logger.debug(f"Saved {collection} record {record.pk}")
        return record

    def query_by_field(self, collection, field, value):
        lookup = self.FIELD_ALIASES.get(collection, {}).get(field, field)
        return list(self._queryset(collection).filter(**{lookup: value}))

    def new_record(self, collection, **fields):
        return self._model(collection)(**fields)

    def atomic(self):
        return transaction.atomic()


def default_store():
    return DjangoRecordStore()
