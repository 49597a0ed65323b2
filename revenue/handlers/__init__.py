from revenue.handlers.views import (
    FestivalAnalyticsView,
    FilmmakerAnalyticsView,
    PlatformAnalyticsView,
    PromoValidateView,
    PurchaseView,
)

__all__ = [
    "FestivalAnalyticsView",
    "FilmmakerAnalyticsView",
    "PlatformAnalyticsView",
    "PromoValidateView",
    "PurchaseView",
]
