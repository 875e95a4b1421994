from datetime import timedelta

import pytest
from django.utils import timezone

from donors.models import Administrator, Donor, Hospital
from donors.services.tokens import issue_token
from .helpers import bearer

pytestmark = pytest.mark.django_db


def test_protected_route_without_token_is_401(client):
    r = client.get('/api/donor/profile')
    assert r.status_code == 401
    assert r.data['ok'] is False
    assert r.data['error']['code'] == 'auth_error'
    assert r['WWW-Authenticate'].startswith('Bearer')


def test_malformed_authorization_header_is_401(client):
    r = client.get('/api/donor/profile', HTTP_AUTHORIZATION='Bearer')
    assert r.status_code == 401
    r = client.get('/api/donor/profile', HTTP_AUTHORIZATION='Bearer not.a.token')
    assert r.status_code == 401


def test_expired_token_is_401(client, donor):
    stale = issue_token(donor.id, 'donor', now=timezone.now() - timedelta(hours=8, seconds=1))
    r = client.get('/api/donor/profile', HTTP_AUTHORIZATION=f'Bearer {stale}')
    assert r.status_code == 401


def test_donor_token_rejected_on_hospital_route_despite_id_collision(client):
    hospital = Hospital.objects.create(name='H', email='h@x.com', phone='1', address='a', contact_person='c')
    donor = Donor.objects.create(id=hospital.id, name='D', email='d@x.com', phone='2', blood_type='A+')
    assert donor.id == hospital.id

    headers = bearer(donor)
    assert client.get('/api/hospital/profile', **headers).status_code == 401
    assert client.get('/api/blood-inventory', **headers).status_code == 401
    r = client.post('/api/donations', {'donor_id': donor.id, 'blood_type': 'A+', 'quantity': 1},
                    format='json', **headers)
    assert r.status_code == 401
    # the same token is fine where a donor is expected
    assert client.get('/api/donor/profile', **headers).status_code == 200


def test_hospital_token_rejected_on_donor_route(client, hospital):
    assert client.get('/api/donations', **bearer(hospital)).status_code == 401
    assert client.get('/api/donor/profile', **bearer(hospital)).status_code == 401


def test_token_for_deleted_identity_is_401(client, donor):
    headers = bearer(donor)
    donor.delete()
    assert client.get('/api/donor/profile', **headers).status_code == 401


def test_admin_login_wrong_password(client, admin):
    r = client.post('/api/admin/login', {'username': 'root', 'password': 'nope'}, format='json')
    assert r.status_code == 401
    assert r.data['error']['message'] == 'Invalid credentials'


def test_admin_login_unknown_user_same_message(client, admin):
    r = client.post('/api/admin/login', {'username': 'ghost', 'password': 'nope'}, format='json')
    assert r.status_code == 401
    assert r.data['error']['message'] == 'Invalid credentials'


def test_admin_login_success_never_returns_hash(client, admin):
    r = client.post('/api/admin/login', {'username': 'root', 'password': 'S3cure-Passw0rd!'}, format='json')
    assert r.status_code == 200
    assert r.data['admin'] == {'id': admin.id, 'username': 'root'}
    assert admin.password not in str(r.content)
    assert r.data['token']


def test_admin_login_with_legacy_bcrypt_hash(client):
    import bcrypt
    Administrator.objects.create(username='legacy', password=bcrypt.hashpw(b'12345', bcrypt.gensalt(rounds=4)).decode())
    r = client.post('/api/admin/login', {'username': 'legacy', 'password': '12345'}, format='json')
    assert r.status_code == 200


@pytest.mark.parametrize('method,path', [
    ('get', '/api/admin/donors'),
    ('get', '/api/admin/donors/search?q=a'),
    ('put', '/api/admin/donors/1'),
    ('delete', '/api/admin/donors/1'),
])
def test_admin_routes_require_admin_token(client, donor, hospital, method, path):
    call = getattr(client, method)
    assert call(path).status_code == 401
    assert call(path, **bearer(donor)).status_code == 401
    assert call(path, **bearer(hospital)).status_code == 401
    assert Donor.objects.filter(pk=donor.pk).exists()


def test_admin_lists_and_searches_donors(client, admin, donor):
    Donor.objects.create(name='Bob', email='bob@example.com', phone='5550099', blood_type='AB-')
    headers = bearer(admin)
    r = client.get('/api/admin/donors', **headers)
    assert r.status_code == 200
    assert [d['name'] for d in r.data['donors']] == ['Alice', 'Bob']

    r = client.get('/api/admin/donors/search', {'q': 'AB'}, **headers)
    assert [d['name'] for d in r.data['donors']] == ['Bob']
    r = client.get('/api/admin/donors/search', {'q': 'alice@'}, **headers)
    assert [d['name'] for d in r.data['donors']] == ['Alice']


def test_admin_updates_and_deletes_donor(client, admin, donor):
    headers = bearer(admin)
    r = client.put(f'/api/admin/donors/{donor.id}', {
        'name': 'Alice', 'email': 'alice2@example.com', 'phone': '5550001', 'blood_type': 'B-',
    }, format='json', **headers)
    assert r.status_code == 200
    donor.refresh_from_db()
    assert (donor.email, donor.blood_type) == ('alice2@example.com', 'B-')

    assert client.delete(f'/api/admin/donors/{donor.id}', **headers).status_code == 200
    assert not Donor.objects.filter(pk=donor.id).exists()
    assert client.delete(f'/api/admin/donors/{donor.id}', **headers).status_code == 404


def test_admin_update_rejects_duplicate_email(client, admin, donor):
    other = Donor.objects.create(name='Bob', email='bob@example.com', phone='5550099', blood_type='A+')
    r = client.put(f'/api/admin/donors/{other.id}', {
        'name': 'Bob', 'email': 'alice@example.com', 'phone': '5550099', 'blood_type': 'A+',
    }, format='json', **bearer(admin))
    assert r.status_code == 409


def test_unhandled_error_returns_generic_500(client, donor, monkeypatch):
    from donors.views import donors as donor_views

    def boom(_donor):
        raise RuntimeError('secret internals')

    monkeypatch.setattr(donor_views, 'donor_donations', boom)
    r = client.get('/api/donor/profile', **bearer(donor))
    assert r.status_code == 500
    assert r.data == {'ok': False, 'error': {'code': 'server_error', 'message': 'Server error'}}
    assert b'secret internals' not in r.content
