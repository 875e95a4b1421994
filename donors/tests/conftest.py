import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from donors.models import Donor, Hospital
from donors.services.accounts import create_or_reset_admin


@pytest.fixture(autouse=True)
def _reset_throttles():
    # Throttle counters live in the cache; keep tests independent of each other
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def donor(db):
    return Donor.objects.create(name='Alice', email='alice@example.com', phone='5550001', blood_type='O+')


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(
        name='City Hospital', email='city@example.com', phone='5559001',
        address='1 Main St', contact_person='Dr. Reyes',
    )


@pytest.fixture
def admin(db):
    admin, _ = create_or_reset_admin('root', 'S3cure-Passw0rd!')
    return admin


