"""
Red cell compatibility, keyed by the donor's blood group.

Each donor group maps to the frozenset of recipient groups it can supply.
Lookups in both directions are answered from that one table.
"""

BLOOD_GROUPS = ['O-', 'O+', 'A-', 'A+', 'B-', 'B+', 'AB-', 'AB+']

BLOOD_GROUP_CHOICES = [(group, group) for group in BLOOD_GROUPS]

# Donor group -> receiver groups it can supply
COMPATIBILITY = {
    'O-': frozenset(['O-', 'O+', 'A-', 'A+', 'B-', 'B+', 'AB-', 'AB+']),  # Universal donor
    'O+': frozenset(['O+', 'A+', 'B+', 'AB+']),
    'A-': frozenset(['A-', 'A+', 'AB-', 'AB+']),
    'A+': frozenset(['A+', 'AB+']),
    'B-': frozenset(['B-', 'B+', 'AB-', 'AB+']),
    'B+': frozenset(['B+', 'AB+']),
    'AB-': frozenset(['AB-', 'AB+']),
    'AB+': frozenset(['AB+']),
}


def is_compatible(donor_blood_group, recipient_blood_group):
    """Donor group can supply the recipient group; unknown groups supply nothing"""
    return recipient_blood_group in COMPATIBILITY.get(donor_blood_group, ())


def get_compatible_donors(recipient_blood_group):
    """
    Reverse lookup: every donor group whose supply set contains
    ``recipient_blood_group``, in BLOOD_GROUPS order.
    """
    return [
        donor_group for donor_group in BLOOD_GROUPS
        if recipient_blood_group in COMPATIBILITY[donor_group]
    ]


def get_compatible_recipients(donor_blood_group):
    """Supply set of ``donor_blood_group`` as a list in BLOOD_GROUPS order"""
    recipients = COMPATIBILITY.get(donor_blood_group, frozenset())
    return [group for group in BLOOD_GROUPS if group in recipients]
