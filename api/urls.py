from django.urls import path
from api.views import (
    AccountNotificationsView,
    MechanicAvailabilityView,
    NotificationReadView,
    ServiceRequestCreateView,
    ServiceRequestDetailView,
)
from api.views_ops import nearest_preview_api

app_name = 'api'

urlpatterns = [
    path('service-requests/', ServiceRequestCreateView.as_view(), name='service-request-create'),
    path('service-requests/<uuid:pk>/', ServiceRequestDetailView.as_view(), name='service-request-detail'),
    path('mechanics/<uuid:pk>/availability/', MechanicAvailabilityView.as_view(), name='mechanic-availability'),
    path('accounts/<uuid:pk>/notifications/', AccountNotificationsView.as_view(), name='account-notifications'),
    path('notifications/<uuid:pk>/read/', NotificationReadView.as_view(), name='notification-read'),
    path('ops/nearest-preview/', nearest_preview_api, name='ops-nearest-preview'),
]
