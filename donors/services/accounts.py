"""
Registration, login and profile updates for donors, hospitals and
administrators.

Donors and hospitals sign in with the (email, phone) pair they registered
with; there is no secret beyond the phone number.  Administrators sign in
with a username and a bcrypt-hashed password.  All login failures raise the
same ``AuthError`` message so callers cannot tell which half was wrong.
"""
from __future__ import annotations

from typing import Optional, Tuple

from django.db import IntegrityError, transaction
from django.db.models import Q

from donors.exceptions import AuthError, DuplicateError, INVALID_CREDENTIALS
from donors.models import Administrator, Donor, Hospital, Identity
from donors.services.audit import log_action
from donors.services.passwords import hash_password, verify_password
from donors.services.tokens import issue_token


def _ensure_unique(model: type[Identity], *, email: Optional[str], phone: Optional[str], exclude_id=None) -> None:
    cond = Q()
    if email:
        cond |= Q(email__iexact=email)
    if phone:
        cond |= Q(phone=phone)
    if not cond:
        return
    qs = model.objects.filter(cond)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    if qs.exists():
        raise DuplicateError(f'{model.role.capitalize()} with this email or phone already exists')


def _create(model: type[Identity], fields: dict) -> Identity:
    _ensure_unique(model, email=fields.get('email'), phone=fields.get('phone'))
    try:
        with transaction.atomic():
            return model.objects.create(**fields)
    except IntegrityError:
        # Lost a race with a concurrent registration using the same email/phone
        raise DuplicateError(f'{model.role.capitalize()} with this email or phone already exists')


def register_donor(*, name, email, phone, blood_type, medical_history=None) -> Tuple[Donor, str]:
    donor = _create(Donor, {
        'name': name, 'email': email, 'phone': phone,
        'blood_type': blood_type, 'medical_history': medical_history,
    })
    log_action(actor=donor, action='register', object_type='donor', object_id=donor.id)
    return donor, issue_token(donor.id, Donor.role)


def register_hospital(*, name, email, phone, address, contact_person) -> Tuple[Hospital, str]:
    hospital = _create(Hospital, {
        'name': name, 'email': email, 'phone': phone,
        'address': address, 'contact_person': contact_person,
    })
    log_action(actor=hospital, action='register', object_type='hospital', object_id=hospital.id)
    return hospital, issue_token(hospital.id, Hospital.role)


def _authenticate_by_contact(model: type[Identity], email: str, phone: str, ip=None) -> Tuple[Identity, str]:
    identity = model.objects.filter(email__iexact=email, phone=phone).first()
    if identity is None:
        log_action(action='login', object_type=model.role, detail={'result': 'fail', 'ip': ip})
        raise AuthError(INVALID_CREDENTIALS)
    log_action(actor=identity, action='login', object_type=model.role, object_id=identity.pk,
               detail={'result': 'ok', 'ip': ip})
    return identity, issue_token(identity.pk, model.role)


def authenticate_donor(email: str, phone: str, ip=None) -> Tuple[Donor, str]:
    return _authenticate_by_contact(Donor, email, phone, ip)


def authenticate_hospital(email: str, phone: str, ip=None) -> Tuple[Hospital, str]:
    return _authenticate_by_contact(Hospital, email, phone, ip)


def authenticate_admin(username: str, password: str, ip=None) -> Tuple[Administrator, str]:
    admin = Administrator.objects.filter(username=username).first()
    if admin is None:
        # Spend the same bcrypt time as a real check so unknown usernames
        # are not distinguishable by latency.
        hash_password(password)
        ok = False
    else:
        ok = verify_password(password, admin.password)
    if not ok:
        log_action(action='login', object_type='admin', detail={'result': 'fail', 'username': username, 'ip': ip})
        raise AuthError(INVALID_CREDENTIALS)
    log_action(actor=admin, action='login', object_type='admin', object_id=admin.id,
               detail={'result': 'ok', 'ip': ip})
    return admin, issue_token(admin.id, Administrator.role)


def create_or_reset_admin(username: str, password: str, name: str = '') -> Tuple[Administrator, bool]:
    admin, created = Administrator.objects.get_or_create(
        username=username, defaults={'password': hash_password(password), 'name': name},
    )
    if not created:
        admin.password = hash_password(password)
        if name:
            admin.name = name
        admin.save(update_fields=['password', 'name'])
    return admin, created


def update_identity(identity: Identity, fields: dict) -> Identity:
    _ensure_unique(type(identity), email=fields.get('email'), phone=fields.get('phone'), exclude_id=identity.pk)
    for key, value in fields.items():
        setattr(identity, key, value)
    try:
        with transaction.atomic():
            identity.save(update_fields=list(fields))
    except IntegrityError:
        raise DuplicateError(f'{identity.role.capitalize()} with this email or phone already exists')
    return identity


def update_donor_profile(donor: Donor, *, name, phone, medical_history=None) -> Donor:
    update_identity(donor, {'name': name, 'phone': phone, 'medical_history': medical_history})
    log_action(actor=donor, action='profile_update', object_type='donor', object_id=donor.id)
    return donor


def update_hospital_profile(hospital: Hospital, *, name, phone, address) -> Hospital:
    update_identity(hospital, {'name': name, 'phone': phone, 'address': address})
    log_action(actor=hospital, action='profile_update', object_type='hospital', object_id=hospital.id)
    return hospital
