"""Donor administration: listing, search, correction and removal of donor records."""

from django.db.models import Q

from donors.exceptions import NotFoundError
from donors.models import Donor
from donors.services.accounts import update_identity
from donors.services.audit import log_action


def list_donors():
    return Donor.objects.order_by('name', 'id')


def search_donors(q: str):
    """Donors whose name, email or blood type contains ``q``."""
    q = (q or '').strip()
    qs = list_donors()
    if not q:
        return qs
    return qs.filter(Q(name__icontains=q) | Q(email__icontains=q) | Q(blood_type__icontains=q))


def get_donor_or_404(donor_id: int) -> Donor:
    donor = Donor.objects.filter(pk=donor_id).first()
    if donor is None:
        raise NotFoundError('Donor not found')
    return donor


def admin_update_donor(admin, donor_id: int, *, name, email, phone, blood_type, medical_history=None) -> Donor:
    donor = get_donor_or_404(donor_id)
    update_identity(donor, {
        'name': name, 'email': email, 'phone': phone,
        'blood_type': blood_type, 'medical_history': medical_history,
    })
    log_action(actor=admin, action='donor_update', object_type='donor', object_id=donor.id)
    return donor


def admin_delete_donor(admin, donor_id: int) -> None:
    donor = get_donor_or_404(donor_id)
    donor.delete()
    log_action(actor=admin, action='donor_delete', object_type='donor', object_id=donor_id)
