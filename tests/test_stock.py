from types import SimpleNamespace

import pytest

from algorithms.stock import ADEQUATE, CRITICAL, FULL, LOW, apply_units, classify, needs_restock
from tests.factories import NOW


@pytest.mark.parametrize('units, level', [
    (0, CRITICAL),
    (1, LOW),
    (4, LOW),
    (5, ADEQUATE),
    (19, ADEQUATE),
    (20, FULL),
    (1000, FULL),
])
def test_classify_boundaries(units, level):
    assert classify(units) == level


def test_apply_units_derives_level():
    item = SimpleNamespace(id=1, blood_group='O+', units=30, stock_level=FULL, last_updated=None)

    updated = apply_units(item, 3, now=NOW)

    assert (updated.units, updated.stock_level, updated.last_updated) == (3, LOW, NOW)
    assert item.units == 30


@pytest.mark.parametrize('level, expected', [
    (CRITICAL, True),
    (LOW, True),
    (ADEQUATE, False),
    (FULL, False),
])
def test_needs_restock(level, expected):
    assert needs_restock(SimpleNamespace(stock_level=level)) is expected
