from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'type', 'account', 'is_read', 'created_at')
    list_filter = ('type', 'is_read', 'created_at')
    search_fields = ('title', 'message', 'account__name')
    readonly_fields = ('account', 'type', 'title', 'message', 'action_url', 'created_at')
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False  # Notifications are created by the assignment engine
