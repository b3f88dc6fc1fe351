"""Django admin configuration for pool access.

Access records are read-only here: entries and exits go through
django_pool_access.ledger so capacity and uniqueness checks apply.
"""

from django.contrib import admin

from .models import AccessRecord, PoolConfig, RegistrationEntry


@admin.register(PoolConfig)
class PoolConfigAdmin(admin.ModelAdmin):
    """Admin for the PoolConfig singleton."""

    list_display = [
        'max_capacity',
        'max_hours_per_visit',
        'opening_time',
        'closing_time',
        'is_active',
        'updated_at',
    ]

    def has_add_permission(self, request):
        return not PoolConfig.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(RegistrationEntry)
class RegistrationEntryAdmin(admin.ModelAdmin):
    """Admin for registered guests."""

    list_display = ['full_name', 'guest_type', 'department_code', 'document_number', 'created_at']
    list_filter = ['guest_type']
    search_fields = ['first_name', 'last_name', 'document_number', 'department_code']
    readonly_fields = ['id', 'registered_by', 'created_at', 'updated_at', 'deleted_at']

    def get_queryset(self, request):
        return RegistrationEntry.all_objects.all()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AccessRecord)
class AccessRecordAdmin(admin.ModelAdmin):
    """Read-only admin for the access ledger."""

    list_display = [
        'person_name',
        'person_type',
        'guest_type',
        'department_code',
        'entry_time',
        'expected_exit_time',
        'actual_exit_time',
        'status',
    ]
    list_filter = ['status', 'person_type', 'guest_type']
    search_fields = ['person_name', 'person_id', 'department_code']
    date_hierarchy = 'entry_time'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
