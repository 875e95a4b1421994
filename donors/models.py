"""
Database models for the blood donor backend.

Donors, hospitals and administrators live in separate tables so that
every identity lookup is scoped to a single role.  Donations are an
append-only log; ``BloodInventory`` holds the running total per
(hospital, blood type) and is only ever changed by
:func:`donors.services.inventory.record_donation`.
"""
from __future__ import annotations

from django.db import models


BLOOD_TYPES = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']
BLOOD_TYPE_CHOICES = [(t, t) for t in BLOOD_TYPES]


class Identity(models.Model):
    """Common behaviour of the three identity sets.

    Instances are attached to ``request.user`` by the role-scoped token
    authenticators, so they expose the two attributes DRF's permission
    classes look at.
    """
    role: str = ''

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False


class Donor(Identity):
    """A registered blood donor.  Email and phone are each unique among donors."""
    role = 'donor'

    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=100, unique=True)
    phone = models.CharField(max_length=20, unique=True)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, db_index=True)
    medical_history = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} ({self.blood_type})"


class Hospital(Identity):
    """A hospital account.  Email and phone are each unique among hospitals."""
    role = 'hospital'

    name = models.CharField(max_length=150)
    email = models.EmailField(max_length=100, unique=True)
    phone = models.CharField(max_length=20, unique=True)
    address = models.CharField(max_length=255)
    contact_person = models.CharField(max_length=100)

    def __str__(self) -> str:
        return self.name


class Administrator(Identity):
    """Back-office account; the only identity that logs in with a password."""
    role = 'admin'

    username = models.CharField(max_length=50, unique=True)
    # Django hasher encoding, or a raw bcrypt hash from the legacy seed script
    password = models.CharField(max_length=255)
    name = models.CharField(max_length=100, blank=True)

    def __str__(self) -> str:
        return self.username


class Donation(models.Model):
    """One donation event recorded by a hospital.  Never updated after insert."""
    hospital = models.ForeignKey(Hospital, on_delete=models.PROTECT, related_name='donations')
    # Kept when an administrator deletes the donor so inventory totals still add up
    donor = models.ForeignKey(Donor, null=True, on_delete=models.SET_NULL, related_name='donations')
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    quantity = models.PositiveIntegerField()
    donation_date = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-donation_date', '-id']

    def __str__(self) -> str:
        return f"{self.blood_type} x{self.quantity} @ {self.hospital_id}"


class BloodInventory(models.Model):
    """Available units of one blood type at one hospital."""
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='inventory')
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    quantity = models.PositiveIntegerField(default=0)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['blood_type']
        constraints = [
            models.UniqueConstraint(fields=['hospital', 'blood_type'], name='uniq_inventory_hospital_blood_type'),
        ]

    def __str__(self) -> str:
        return f"{self.hospital_id}:{self.blood_type}={self.quantity}"


IDENTITY_MODELS: dict[str, type[Identity]] = {
    Donor.role: Donor,
    Hospital.role: Hospital,
    Administrator.role: Administrator,
}
