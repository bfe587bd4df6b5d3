import pytest

from algorithms.blood_compatibility import (
    BLOOD_GROUPS,
    COMPATIBILITY,
    get_compatible_donors,
    get_compatible_recipients,
    is_compatible,
)
from algorithms.matching import find_candidates
from tests.factories import make_donor, make_request


def test_universal_donor_supplies_every_group():
    assert all(is_compatible('O-', group) for group in BLOOD_GROUPS)


def test_ab_positive_only_supplies_ab_positive():
    assert get_compatible_recipients('AB+') == ['AB+']


def test_donors_for_o_negative_recipient():
    assert get_compatible_donors('O-') == ['O-']


def test_donors_for_ab_positive_recipient_is_everyone():
    assert get_compatible_donors('AB+') == BLOOD_GROUPS


@pytest.mark.parametrize('donor, recipient, expected', [
    ('O+', 'A+', True),
    ('O+', 'A-', False),
    ('A-', 'AB-', True),
    ('B+', 'B-', False),
    ('AB-', 'AB+', True),
])
def test_is_compatible(donor, recipient, expected):
    assert is_compatible(donor, recipient) is expected


def test_unknown_group_is_never_compatible():
    assert not is_compatible('C+', 'AB+')
    assert get_compatible_recipients('C+') == []


@pytest.mark.parametrize('donor_group', BLOOD_GROUPS)
def test_candidates_only_contain_compatible_groups(donor_group):
    donor = make_donor(blood_group=donor_group)
    requests = [make_request(id=i, blood_group=group) for i, group in enumerate(BLOOD_GROUPS)]

    candidates = find_candidates(donor, requests)

    assert {r.blood_group for r in candidates} == COMPATIBILITY[donor_group]
