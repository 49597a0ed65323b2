from django.contrib import admin

from revenue.models import FestivalBlock, Movie, PayoutRecord, PromoCode, ViewCount


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ["title", "director", "sale_price", "watch_party_price"]
    search_fields = ["title", "director"]


@admin.register(FestivalBlock)
class FestivalBlockAdmin(admin.ModelAdmin):
    list_display = ["title", "key"]
    search_fields = ["title"]


@admin.register(ViewCount)
class ViewCountAdmin(admin.ModelAdmin):
    list_display = ["movie_key", "count"]


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ["code", "type", "discount_value", "used_count", "max_uses", "expires_at"]
    list_filter = ["type"]
    search_fields = ["code"]
    readonly_fields = ["used_count"]


@admin.register(PayoutRecord)
class PayoutRecordAdmin(admin.ModelAdmin):
    list_display = ["recipient", "amount", "status", "processed_at"]
    list_filter = ["status"]
    search_fields = ["recipient"]

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
