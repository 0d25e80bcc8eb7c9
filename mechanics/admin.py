from django.contrib import admin

from mechanics.models import Mechanic


@admin.register(Mechanic)
class MechanicAdmin(admin.ModelAdmin):
    list_display = ('account', 'specialization', 'service_radius_km', 'is_available', 'is_approved', 'rating', 'total_services')
    list_filter = ('is_available', 'is_approved', 'account__city')
    search_fields = ('account__name', 'account__phone', 'account__city', 'specialization')
    readonly_fields = ('rating', 'total_services', 'created_at', 'updated_at')
    list_select_related = ('account',)
    actions = ('approve_mechanics',)

    fieldsets = (
        ('Account', {
            'fields': ('account',)
        }),
        ('Profile', {
            'fields': ('expertise', 'specialization', 'experience_years', 'hourly_rate')
        }),
        ('Coverage', {
            'fields': ('service_radius_km', 'is_available', 'is_approved')
        }),
        ('Statistics', {
            'fields': ('rating', 'total_services'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.action(description='Approve selected mechanics')
    def approve_mechanics(self, request, queryset):
        updated = queryset.update(is_approved=True)
        self.message_user(request, f'{updated} mechanic(s) approved.')
