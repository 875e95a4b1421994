"""
Django admin registrations.

Lets staff inspect identities, donations and inventory at ``/admin/``.
Inventory and donations are read-only here: stock only changes through
recorded donations.
"""
from django.contrib import admin

from .models import Administrator, BloodInventory, Donation, Donor, Hospital


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'email', 'phone', 'blood_type', 'created_at')
    list_filter = ('blood_type',)
    search_fields = ('name', 'email', 'phone')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'email', 'phone', 'contact_person')
    search_fields = ('name', 'email', 'phone')


@admin.register(Administrator)
class AdministratorAdmin(admin.ModelAdmin):
    list_display = ('id', 'username', 'name', 'created_at')
    search_fields = ('username', 'name')
    exclude = ('password',)


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = ('id', 'hospital', 'donor', 'blood_type', 'quantity', 'donation_date')
    list_filter = ('blood_type', 'hospital')

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(BloodInventory)
class BloodInventoryAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'blood_type', 'quantity', 'last_updated')
    list_filter = ('blood_type', 'hospital')

    def has_change_permission(self, request, obj=None):
        return False

    def has_add_permission(self, request):
        return False
