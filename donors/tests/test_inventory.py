import threading

import pytest
from django.db import connection
from rest_framework.exceptions import ValidationError

from donors.exceptions import NotFoundError
from donors.models import BloodInventory, Donation, Donor
from donors.services import inventory

pytestmark = pytest.mark.django_db


def test_first_donation_creates_entry(hospital, donor):
    donation, entry = inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=3)
    assert entry.quantity == 3
    assert donation.quantity == 3
    assert BloodInventory.objects.get(hospital=hospital, blood_type='O+').quantity == 3


def test_repeat_donations_increment_instead_of_overwrite(hospital, donor):
    inventory.record_donation(hospital, donor_id=donor.id, blood_type='A-', quantity=2)
    before = BloodInventory.objects.get(hospital=hospital, blood_type='A-').last_updated
    _, entry = inventory.record_donation(hospital, donor_id=donor.id, blood_type='A-', quantity=5)
    assert entry.quantity == 7
    assert entry.last_updated >= before
    assert BloodInventory.objects.filter(hospital=hospital).count() == 1


def test_inventory_equals_sum_of_donations(hospital, donor):
    for blood_type, qty in [('O+', 1), ('O-', 2), ('O+', 4), ('B+', 1), ('O-', 3)]:
        inventory.record_donation(hospital, donor_id=donor.id, blood_type=blood_type, quantity=qty)
    for entry in BloodInventory.objects.filter(hospital=hospital):
        total = sum(Donation.objects.filter(hospital=hospital, blood_type=entry.blood_type)
                    .values_list('quantity', flat=True))
        assert entry.quantity == total


def test_entries_are_per_hospital(hospital, donor):
    from donors.models import Hospital
    other = Hospital.objects.create(name='Other', email='o@x.com', phone='77', address='x', contact_person='y')
    inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=1)
    inventory.record_donation(other, donor_id=donor.id, blood_type='O+', quantity=4)
    assert [e.quantity for e in inventory.hospital_inventory(hospital)] == [1]
    assert [e.quantity for e in inventory.hospital_inventory(other)] == [4]


def test_insert_conflict_falls_back_to_increment(hospital, donor, monkeypatch):
    """Another transaction creates the (hospital, O+) entry first.

    This request found no row to increment, but before its insert lands
    the other one has created the row.  The insert must hit the unique
    constraint and fall back to incrementing, ending at 2, not 1.
    """
    second = Donor.objects.create(name='D2', email='d2@x.com', phone='22', blood_type='O+')
    real_insert = inventory._insert_entry
    raced = []

    def insert_after_competitor(hospital_id, blood_type, quantity, now):
        if not raced:
            raced.append(True)
            # the competing request commits its donation first
            inventory.record_donation(hospital, donor_id=second.id, blood_type=blood_type, quantity=1)
        return real_insert(hospital_id, blood_type, quantity, now)

    monkeypatch.setattr(inventory, '_insert_entry', insert_after_competitor)
    inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=1)

    assert raced == [True]
    assert BloodInventory.objects.get(hospital=hospital, blood_type='O+').quantity == 2
    assert Donation.objects.filter(hospital=hospital, blood_type='O+').count() == 2


@pytest.mark.django_db(transaction=True)
@pytest.mark.parametrize('run', range(3))
def test_parallel_first_donations_both_land(hospital, donor, run):
    """Two connections record the first O+ donation at the same moment."""
    second = Donor.objects.create(name='D2', email='d2@x.com', phone='22', blood_type='O+')
    barrier = threading.Barrier(2)
    errors = []

    def donate(donor_id):
        try:
            barrier.wait(timeout=10)
            inventory.record_donation(hospital, donor_id=donor_id, blood_type='O+', quantity=1)
        except Exception as exc:
            errors.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=donate, args=(pk,)) for pk in (donor.id, second.id)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert not any(t.is_alive() for t in threads)
    assert errors == []
    assert BloodInventory.objects.get(hospital=hospital, blood_type='O+').quantity == 2
    assert Donation.objects.filter(hospital=hospital, blood_type='O+').count() == 2


@pytest.mark.parametrize('quantity', [0, -3])
def test_non_positive_quantity_is_a_validation_error(hospital, donor, quantity):
    with pytest.raises(ValidationError) as excinfo:
        inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=quantity)
    assert 'quantity' in excinfo.value.detail
    assert Donation.objects.count() == 0


def test_unknown_donor_records_nothing(hospital):
    with pytest.raises(NotFoundError):
        inventory.record_donation(hospital, donor_id=12345, blood_type='O+', quantity=1)
    assert Donation.objects.count() == 0
    assert BloodInventory.objects.count() == 0


def test_donations_survive_donor_deletion(hospital, donor):
    inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=2)
    donor.delete()
    donation = Donation.objects.get()
    assert donation.donor_id is None
    assert BloodInventory.objects.get(hospital=hospital, blood_type='O+').quantity == 2


def test_donor_donations_newest_first(hospital, donor):
    first, _ = inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=1)
    second, _ = inventory.record_donation(hospital, donor_id=donor.id, blood_type='O+', quantity=1)
    assert [d.id for d in inventory.donor_donations(donor)] == [second.id, first.id]
