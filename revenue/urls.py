from django.urls import path

from revenue.handlers import (
    FestivalAnalyticsView,
    FilmmakerAnalyticsView,
    PlatformAnalyticsView,
    PromoValidateView,
    PurchaseView,
)

urlpatterns = [
    path("analytics", PlatformAnalyticsView.as_view(), name="platform-analytics"),
    path(
        "analytics/filmmaker",
        FilmmakerAnalyticsView.as_view(),
        name="filmmaker-analytics",
    ),
    path(
        "analytics/festival",
        FestivalAnalyticsView.as_view(),
        name="festival-analytics",
    ),
    path("promo-codes/validate", PromoValidateView.as_view(), name="promo-validate"),
    path("purchases", PurchaseView.as_view(), name="purchase"),
]
