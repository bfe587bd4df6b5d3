import logging

from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_GROUPS
from algorithms.eligibility import is_on_cooldown
from algorithms.exceptions import RecordNotFound
from algorithms.lifecycle import REQUEST_STATUSES
from algorithms.stock import apply_units, classify, needs_restock
from bloodlink.store import (
    BLOOD_REQUESTS,
    DONORS,
    INVENTORY_ITEMS,
    ORGANIZATIONS,
    default_store,
)

# Logger setup
logger = logging.getLogger(__name__)


def get_organization(organization_id, store=None):
    store = store or default_store()
    organization = store.get_by_id(ORGANIZATIONS, organization_id)
    if organization is None:
        raise RecordNotFound(ORGANIZATIONS, organization_id)
    return organization


# ============================================
# INVENTORY
# ============================================
def organization_inventory(organization_id, store=None):
    store = store or default_store()
    items = store.query_by_field(INVENTORY_ITEMS, 'organization', organization_id)
    return sorted(items, key=lambda i: BLOOD_GROUPS.index(i.blood_group))


def update_stock(organization_id, blood_group, units, expiry_date, store=None, now=None):
    """
    Set the stock of one blood group for an organization.

    There is one item per (organization, blood group): an existing item is
    updated in place, otherwise a new one is created. The stock level is
    derived from ``units`` in the same step.
    """
    store = store or default_store()
    if now is None:
        now = timezone.now()
    organization = get_organization(organization_id, store)

    existing = [
        item for item in organization_inventory(organization_id, store)
        if item.blood_group == blood_group
    ]
    if existing:
        item = apply_units(existing[0], units, now)
        item.expiry_date = expiry_date
    else:
        item = store.new_record(
            INVENTORY_ITEMS,
            organization=organization,
            blood_group=blood_group,
            units=units,
            stock_level=classify(units),
            expiry_date=expiry_date,
            last_updated=now,
        )

    store.save(INVENTORY_ITEMS, item)
    logger.info(f"{organization.name}: {blood_group} stock set to {units} unit(s) ({item.stock_level})")
    return item


def restock_alerts(organization_id, store=None):
    """Items at low or critical stock"""
    return [item for item in organization_inventory(organization_id, store) if needs_restock(item)]


def inventory_for_city(city, store=None):
    """Inventory of every organization serving ``city``"""
    store = store or default_store()
    items = []
    for organization in store.query_by_field(ORGANIZATIONS, 'city', city):
        items.extend(organization_inventory(organization.id, store))
    return items


# ============================================
# DASHBOARD
# ============================================
def organization_dashboard(organization_id, store=None, now=None):
    """
    Snapshot of the organization's city: request counts by status,
    donor availability and inventory totals per blood group.
    """
    store = store or default_store()
    if now is None:
        now = timezone.now()
    organization = get_organization(organization_id, store)

    area_requests = store.query_by_field(BLOOD_REQUESTS, 'city', organization.city)
    request_counts = {status: 0 for status in REQUEST_STATUSES}
    for blood_request in area_requests:
        request_counts[blood_request.status] += 1

    local_donors = store.query_by_field(DONORS, 'city', organization.city)
    on_cooldown = sum(1 for donor in local_donors if is_on_cooldown(donor, now))

    inventory_totals = {group: 0 for group in BLOOD_GROUPS}
    for item in organization_inventory(organization_id, store):
        inventory_totals[item.blood_group] += item.units

    return {
        'organization': organization,
        'requests': request_counts,
        'donors': {
            'total': len(local_donors),
            'available': len(local_donors) - on_cooldown,
            'on_cooldown': on_cooldown,
        },
        'inventory': inventory_totals,
    }
