"""Serializers for request validation and for rendering domain results."""

from rest_framework import serializers


class FilmmakerAnalyticsRequestSerializer(serializers.Serializer):
    director_name = serializers.CharField(max_length=255, trim_whitespace=True)


class FestivalAnalyticsRequestSerializer(serializers.Serializer):
    recipient = serializers.CharField(max_length=255, required=False, allow_blank=True)


class PromoValidateRequestSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)
    original_price = serializers.IntegerField(min_value=0)
    item_id = serializers.CharField(max_length=255, required=False, allow_null=True)


class PurchaseRequestSerializer(serializers.Serializer):
    source_id = serializers.CharField(max_length=255)
    # Validated by the pricing resolver so unknown types map to UNKNOWN_ACCESS_TYPE.
    access_type = serializers.CharField(max_length=64)
    item_id = serializers.CharField(max_length=255, required=False, allow_null=True)
    amount = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    title = serializers.CharField(max_length=255, required=False, allow_null=True)
    director = serializers.CharField(max_length=255, required=False, allow_null=True)
    promo_code = serializers.CharField(
        max_length=64, required=False, allow_null=True, allow_blank=True
    )
    idempotency_key = serializers.CharField(max_length=64, required=False, allow_null=True)


class SourceErrorSerializer(serializers.Serializer):
    source = serializers.CharField()
    code = serializers.CharField()
    message = serializers.CharField()


class FilmEarningsSerializer(serializers.Serializer):
    key = serializers.CharField(allow_null=True)
    title = serializers.CharField()
    views = serializers.IntegerField()
    gross_donations = serializers.IntegerField()
    gross_tickets = serializers.IntegerField()
    gross_sales = serializers.IntegerField()
    net_earnings = serializers.IntegerField()
    platform_cut = serializers.IntegerField()


class BlockSalesSerializer(serializers.Serializer):
    title = serializers.CharField()
    units = serializers.IntegerField()
    revenue = serializers.IntegerField()


class SectorEarningsSerializer(serializers.Serializer):
    sector = serializers.CharField()
    label = serializers.CharField()
    units = serializers.IntegerField()
    gross = serializers.IntegerField()
    net_earnings = serializers.IntegerField()
    platform_cut = serializers.IntegerField()


class PlatformReportSerializer(serializers.Serializer):
    total_revenue = serializers.IntegerField()
    platform_revenue = serializers.IntegerField()
    total_donations = serializers.IntegerField()
    total_tickets = serializers.IntegerField()
    total_sales = serializers.IntegerField()
    total_festival_revenue = serializers.IntegerField()
    festival_pass_revenue = serializers.IntegerField()
    other_revenue = serializers.IntegerField()
    savings_pot_total = serializers.IntegerField()
    total_paid_out = serializers.IntegerField()
    total_users = serializers.IntegerField()
    feed_complete = serializers.BooleanField()
    films = FilmEarningsSerializer(many=True)
    blocks = BlockSalesSerializer(many=True)
    sectors = SectorEarningsSerializer(many=True)
    view_counts = serializers.DictField(child=serializers.IntegerField())
    errors = SourceErrorSerializer(many=True)


class FilmmakerReportSerializer(serializers.Serializer):
    director_name = serializers.CharField()
    gross = serializers.IntegerField()
    total_earnings = serializers.IntegerField()
    total_paid_out = serializers.IntegerField()
    balance = serializers.IntegerField()
    feed_complete = serializers.BooleanField()
    films = FilmEarningsSerializer(many=True)
    errors = SourceErrorSerializer(many=True)


class FestivalReportSerializer(serializers.Serializer):
    recipient = serializers.CharField()
    gross = serializers.IntegerField()
    total_earnings = serializers.IntegerField()
    total_paid_out = serializers.IntegerField()
    balance = serializers.IntegerField()
    feed_complete = serializers.BooleanField()
    sectors = SectorEarningsSerializer(many=True)
    errors = SourceErrorSerializer(many=True)


class PromoQuoteSerializer(serializers.Serializer):
    code = serializers.CharField(source="promo.code.value")
    discount_type = serializers.CharField(source="promo.type.value")
    discount_value = serializers.IntegerField(source="promo.discount_value", allow_null=True)
    remaining_uses = serializers.IntegerField(source="promo.remaining_uses")
    original_price = serializers.IntegerField(source="original_amount")
    final_price = serializers.IntegerField(source="final_amount")
    is_free = serializers.BooleanField()


class PurchaseResultSerializer(serializers.Serializer):
    success = serializers.SerializerMethodField()
    access_type = serializers.CharField(source="quote.access_type.value")
    list_price = serializers.IntegerField(source="quote.amount")
    charged_amount = serializers.IntegerField()
    is_free = serializers.BooleanField()
    memo = serializers.CharField()
    payment_id = serializers.CharField(source="charge.payment_id", allow_null=True)
    payment_status = serializers.CharField(source="charge.status", allow_null=True)
    idempotency_key = serializers.CharField(source="charge.idempotency_key")
    promo_code = serializers.CharField(allow_null=True)
    promo_committed = serializers.BooleanField()

    def get_success(self, obj) -> bool:
        return True
