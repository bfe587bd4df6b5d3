# algorithms/stock.py
import copy

from django.utils import timezone

CRITICAL = 'critical'
LOW = 'low'
ADEQUATE = 'adequate'
FULL = 'full'

STOCK_LEVELS = [CRITICAL, LOW, ADEQUATE, FULL]

LOW_THRESHOLD = 5
FULL_THRESHOLD = 20

MIN_UNITS = 0
MAX_UNITS = 1000


def classify(units):
    """
    Stock level for a unit count

    0 -> critical, 1-4 -> low, 5-19 -> adequate, 20+ -> full
    """
    if units <= 0:
        return CRITICAL
    elif units < LOW_THRESHOLD:
        return LOW
    elif units < FULL_THRESHOLD:
        return ADEQUATE
    return FULL


def needs_restock(item):
    return item.stock_level in (CRITICAL, LOW)


def apply_units(item, units, now=None):
    """Copy of ``item`` with new units and the stock level derived from them"""
    if now is None:
        now = timezone.now()
    updated = copy.copy(item)
    updated.units = units
    updated.stock_level = classify(units)
    updated.last_updated = now
    return updated
