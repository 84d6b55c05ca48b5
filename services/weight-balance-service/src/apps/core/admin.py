from django.contrib import admin
from .models import WeightBalanceSheet


@admin.register(WeightBalanceSheet)
class WeightBalanceSheetAdmin(admin.ModelAdmin):
    list_display = ['id', 'aircraft_type', 'registration', 'pilot_name', 'date', 'total_takeoff_weight', 'created_at']
    list_filter = ['aircraft_type']
    search_fields = ['registration', 'pilot_name', 'route']
    readonly_fields = [f.name for f in WeightBalanceSheet._meta.fields]

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
