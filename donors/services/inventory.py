"""
Donation log and per-hospital blood inventory.

``record_donation`` appends the donation and bumps the matching inventory
row in one transaction.  The transaction first locks the hospital row, so
donations at one hospital are applied one at a time while other hospitals
proceed in parallel.  Without that lock two first donations of a blood
type both miss the ``UPDATE`` and race on the ``INSERT``: InnoDB then
deadlocks on the gap locks and SQLite reports the database as locked,
neither of which is a unique violation.  SQLite has no row locks, so its
connections open transactions with ``BEGIN IMMEDIATE`` (see settings)
and writers queue on the database lock instead.

The increment itself is an ``UPDATE ... SET quantity = quantity + n``
executed by the database, and the insert of a missing row still runs in a
savepoint that falls back to the increment on a unique violation.
"""
from __future__ import annotations

from typing import Tuple

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from donors.exceptions import NotFoundError
from donors.models import BloodInventory, Donation, Donor, Hospital
from donors.services.audit import log_action


def _increment_entry(hospital_id: int, blood_type: str, quantity: int, now) -> int:
    return BloodInventory.objects.filter(hospital_id=hospital_id, blood_type=blood_type).update(
        quantity=F('quantity') + quantity, last_updated=now,
    )


def _insert_entry(hospital_id: int, blood_type: str, quantity: int, now) -> BloodInventory:
    with transaction.atomic():
        return BloodInventory.objects.create(
            hospital_id=hospital_id, blood_type=blood_type, quantity=quantity, last_updated=now,
        )


def _apply_to_inventory(hospital_id: int, blood_type: str, quantity: int) -> BloodInventory:
    now = timezone.now()
    if not _increment_entry(hospital_id, blood_type, quantity, now):
        try:
            _insert_entry(hospital_id, blood_type, quantity, now)
        except IntegrityError:
            _increment_entry(hospital_id, blood_type, quantity, now)
    return BloodInventory.objects.get(hospital_id=hospital_id, blood_type=blood_type)


def record_donation(hospital: Hospital, *, donor_id: int, blood_type: str, quantity: int) -> Tuple[Donation, BloodInventory]:
    if quantity <= 0:
        raise ValidationError({'quantity': ['Ensure this value is greater than or equal to 1.']})
    with transaction.atomic():
        # Serialise donations per hospital for the rest of the transaction
        Hospital.objects.select_for_update().only('id').get(pk=hospital.pk)
        donor = Donor.objects.filter(pk=donor_id).first()
        if donor is None:
            raise NotFoundError('Donor not found')
        donation = Donation.objects.create(
            hospital=hospital, donor=donor, blood_type=blood_type, quantity=quantity,
        )
        entry = _apply_to_inventory(hospital.pk, blood_type, quantity)

    log_action(actor=hospital, action='donation', object_type='donation', object_id=donation.id,
               detail={'donor_id': donor.id, 'blood_type': blood_type, 'quantity': quantity})
    return donation, entry


def hospital_inventory(hospital: Hospital):
    return BloodInventory.objects.filter(hospital=hospital).order_by('blood_type')


def donor_donations(donor: Donor):
    return Donation.objects.filter(donor=donor).select_related('hospital').order_by('-donation_date', '-id')
