"""
URL mappings for the blood donor API.

Trailing slashes are deliberately omitted to match the browser client.
"""
from django.urls import include, path

from .auth_views import (
    admin_login_view,
    donor_login_view,
    donor_register_view,
    hospital_login_view,
    hospital_register_view,
)
from .views import health
from .views.admin_donors import admin_donor_detail, admin_list_donors, admin_search_donors
from .views.donations import donations
from .views.donors import donor_profile
from .views.hospitals import blood_inventory, hospital_profile


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Donors
    path('api/donor/register', donor_register_view),
    path('api/donor/login', donor_login_view),
    path('api/donor/profile', donor_profile),
    # Hospitals
    path('api/hospital/register', hospital_register_view),
    path('api/hospital/login', hospital_login_view),
    path('api/hospital/profile', hospital_profile),
    path('api/blood-inventory', blood_inventory),
    # Donations: POST by hospitals, GET by donors
    path('api/donations', donations),
    # Administrators
    path('api/admin/login', admin_login_view),
    path('api/admin/donors', admin_list_donors),
    path('api/admin/donors/search', admin_search_donors),
    path('api/admin/donors/<int:pk>', admin_donor_detail),
]
