from django.contrib import admin

from service_requests.models import ServiceRequest
from service_requests.services.assignment import save_new_service_request


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ('customer', 'vehicle_type', 'status', 'mechanic', 'scheduled_date', 'created_at')
    list_filter = ('status', 'vehicle_type', 'created_at')
    search_fields = ('customer__name', 'customer__phone', 'address', 'issue_description')
    readonly_fields = ('created_at', 'updated_at')
    list_select_related = ('customer', 'mechanic__account')
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Customer', {
            'fields': ('customer',)
        }),
        ('Vehicle', {
            'fields': ('vehicle_type', 'vehicle_make', 'vehicle_model', 'vehicle_year', 'issue_description')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'address')
        }),
        ('Assignment', {
            'fields': ('mechanic', 'status')
        }),
        ('Schedule & Cost', {
            'fields': ('scheduled_date', 'completed_date', 'estimated_cost', 'final_cost')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        if change:
            super().save_model(request, obj, form, change)
            return
        # New requests go through automatic assignment like API-created ones
        save_new_service_request(obj)
