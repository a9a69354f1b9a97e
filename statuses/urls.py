from django.urls import path
from statuses import views


urlpatterns = [
    path("api/v1/statuses", views.StatusListAPIView.as_view(), name="api_statuses"),
    path("api/v1/statuses/<int:status_id>", views.StatusDetailAPIView.as_view(), name="api_status_detail"),
    path("api/v1/statuses/<int:status_id>/context", views.StatusContextAPIView.as_view(), name="api_status_context"),
    path("api/v1/statuses/<int:status_id>/card", views.StatusCardAPIView.as_view(), name="api_status_card"),
]
