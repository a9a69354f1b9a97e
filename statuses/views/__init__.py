from .status_views import (
    StatusListAPIView,
    StatusDetailAPIView,
    StatusContextAPIView,
    StatusCardAPIView,
)
